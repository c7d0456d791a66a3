"""Recipient-tailored notification messages.

Every notification row stores its own rendered message, so the wording is
chosen here once per recipient: the same event reads differently for the
requester, the approver, the payer and the administrators. Kinds without a
dedicated builder, and roles a builder does not address, get the generic
"performed an action" line.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from bechapra.domain.entities import (
    ROLE_ADMIN_GENERAL,
    ROLE_APPROVER,
    ROLE_LABELS,
    ROLE_PAYER,
    ROLE_REQUESTER,
    BatchDetails,
    NotificationKind,
    PaymentRequestDetails,
    RecurringPaymentDetails,
    TravelExpenseDetails,
    User,
    UserAccountDetails,
    VoucherDetails,
    coerce_kind,
    kind_value,
    parse_notification_details,
)
from bechapra.utils import AMOUNT_PLACEHOLDER, format_money, format_short_date, now_in_app_timezone

logger = logging.getLogger(__name__)

_K = NotificationKind

DEFAULT_EMOJI = "🔔"
UNKNOWN_EMITTER = "Usuario desconocido"
NO_DEPARTMENT = "Sin departamento"
NOT_SPECIFIED = "No especificado"
NOT_SPECIFIED_F = "No especificada"
NO_DEADLINE = "Sin límite"
NO_REASON = "Sin especificar"
UNASSIGNED = "Sin asignar"

EMOJIS: dict[NotificationKind, str] = {
    _K.SOLICITUD_CREADA: "📝",
    _K.SOLICITUD_APROBADA: "✅",
    _K.SOLICITUD_RECHAZADA: "❌",
    _K.SOLICITUD_PAGADA: "💸",
    _K.VIATICO_CREADO: "🧳",
    _K.VIATICO_APROBADO: "✈️",
    _K.VIATICO_RECHAZADO: "⛔",
    _K.VIATICO_PAGADO: "💸",
    _K.COMPROBANTE_SUBIDO: "📎",
    _K.USUARIO_CREADO: "👤",
    _K.USUARIO_BIENVENIDA: "🎉",
    _K.USUARIO_ELIMINADO: "🗑️",
    _K.RECURRENTE_CREADA: "🔄",
    _K.RECURRENTE_APROBADA: "🔄✅",
    _K.RECURRENTE_RECHAZADA: "🔄❌",
    _K.LOTE_APROBADO: "✅📋",
    _K.LOTE_RECHAZADO: "❌📋",
    _K.LOTE_PAGADO: "💸📋",
}


@dataclass(frozen=True)
class _Parts:
    """Values shared by every branch for one recipient."""

    emoji: str
    emitter: str
    emitter_role: str
    emitter_department: str
    recipient_role: str
    today: str


def _text(value: Any, placeholder: str = NOT_SPECIFIED) -> str:
    if value is None or value == "":
        return placeholder
    return html.escape(str(value), quote=False)


def _count(value: int | None) -> str:
    return AMOUNT_PLACEHOLDER if value is None else str(value)


def _plural(label: str | None) -> str:
    text = _text(label, "registro")
    return f"{text}s" if text[-1:].lower() in "aeiou" else f"{text}es"


# Payment requests


def _request_created(p: _Parts, d: PaymentRequestDetails) -> str | None:
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> ({p.emitter_role}) de "
            f"<strong>{p.emitter_department}</strong> creó una nueva solicitud por "
            f"<strong>{format_money(d.amount)}</strong>"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            f"<br>🏢 <strong>Empresa:</strong> {_text(d.company, NOT_SPECIFIED_F)}"
            f"<br>📅 <strong>Límite de pago:</strong> {_text(d.payment_deadline, NO_DEADLINE)}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Nueva solicitud para revisar de <strong>{p.emitter}</strong> "
            f"({p.emitter_department})"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            "<br>⏰ <strong>Requiere aprobación</strong>"
        )
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} Tu solicitud por <strong>{format_money(d.amount)}</strong> "
            "fue registrada exitosamente"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            "<br>⏳ <strong>Estado:</strong> Pendiente de aprobación"
        )
    return None


def _request_approved(p: _Parts, d: PaymentRequestDetails) -> str | None:
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} ¡Tu solicitud por <strong>{format_money(d.amount)}</strong> fue "
            f"<strong>APROBADA</strong> por <strong>{p.emitter}</strong>!"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            "<br>💳 <strong>Próximo paso:</strong> Procesamiento de pago"
        )
    if p.recipient_role == ROLE_PAYER:
        return (
            f"{p.emoji} Nueva solicitud <strong>AUTORIZADA</strong> para procesar pago"
            f"<br>👤 <strong>Solicitante:</strong> {_text(d.requester_name)} "
            f"({_text(d.requester_department, NO_DEPARTMENT)})"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            f"<br>✅ <strong>Aprobada por:</strong> {p.emitter}"
        )
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> aprobó la solicitud de "
            f"<strong>{_text(d.requester_name)}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>🏢 <strong>Departamento:</strong> "
            f"{_text(d.requester_department, NO_DEPARTMENT)}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Aprobaste la solicitud de <strong>{_text(d.requester_name)}</strong> "
            f"por <strong>{format_money(d.amount)}</strong>"
        )
    return None


def _request_rejected(p: _Parts, d: PaymentRequestDetails) -> str | None:
    if p.recipient_role == ROLE_REQUESTER:
        reason = (
            f"<br>📝 <strong>Motivo:</strong> {_text(d.approver_comment)}"
            if d.approver_comment
            else ""
        )
        return (
            f"{p.emoji} Tu solicitud por <strong>{format_money(d.amount)}</strong> fue "
            f"<strong>RECHAZADA</strong> por <strong>{p.emitter}</strong>{reason}"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            "<br>💡 <strong>Puedes crear una nueva solicitud corrigiendo los aspectos "
            "indicados</strong>"
        )
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> rechazó la solicitud de "
            f"<strong>{_text(d.requester_name)}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>📝 <strong>Motivo:</strong> {_text(d.approver_comment, NO_REASON)}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Rechazaste la solicitud de <strong>{_text(d.requester_name)}</strong> "
            f"por <strong>{format_money(d.amount)}</strong>"
        )
    return None


def _request_paid(p: _Parts, d: PaymentRequestDetails) -> str | None:
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} ¡Tu solicitud por <strong>{format_money(d.amount)}</strong> ha sido "
            "<strong>PAGADA</strong>!"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            f"<br>💳 <strong>Cuenta destino:</strong> "
            f"{_text(d.destination_account, NOT_SPECIFIED_F)}"
            f"<br>🏦 <strong>Procesado por:</strong> {p.emitter}"
            f"<br>📅 <strong>Fecha de pago:</strong> {p.today}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} La solicitud que aprobaste de <strong>{_text(d.requester_name)}</strong> "
            "ha sido pagada"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>🏦 <strong>Procesado por:</strong> {p.emitter}"
        )
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> procesó el pago de la solicitud de "
            f"<strong>{_text(d.requester_name)}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>🏢 <strong>Departamento:</strong> "
            f"{_text(d.requester_department, NO_DEPARTMENT)}"
        )
    if p.recipient_role == ROLE_PAYER:
        return (
            f"{p.emoji} Procesaste el pago de <strong>{_text(d.requester_name)}</strong> "
            f"por <strong>{format_money(d.amount)}</strong>"
        )
    return None


# Travel expenses


def _travel_created(p: _Parts, d: TravelExpenseDetails) -> str | None:
    destination = _text(d.destination)
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> ({p.emitter_department}) creó una nueva "
            "solicitud de viático"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            f"<br>🎯 <strong>Destino:</strong> {destination}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Nueva solicitud de viático para revisar de <strong>{p.emitter}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>🎯 <strong>Destino:</strong> {destination}"
            "<br>⏰ <strong>Requiere aprobación</strong>"
        )
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} Tu solicitud de viático por <strong>{format_money(d.amount)}</strong> "
            "fue registrada"
            f"<br>🎯 <strong>Destino:</strong> {destination}"
        )
    return None


def _travel_approved(p: _Parts, d: TravelExpenseDetails) -> str | None:
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} ¡Tu viático por <strong>{format_money(d.amount)}</strong> fue "
            f"<strong>APROBADO</strong> por <strong>{p.emitter}</strong>!"
            f"<br>🎯 <strong>Destino:</strong> {_text(d.destination)}"
            "<br>💳 <strong>Próximo paso:</strong> Procesamiento de pago"
        )
    if p.recipient_role == ROLE_PAYER:
        return (
            f"{p.emoji} Nuevo viático <strong>AUTORIZADO</strong> para procesar pago"
            f"<br>👤 <strong>Solicitante:</strong> {_text(d.requester_name)}"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>✅ <strong>Aprobado por:</strong> {p.emitter}"
        )
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> aprobó el viático de "
            f"<strong>{_text(d.requester_name)}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>🎯 <strong>Destino:</strong> {_text(d.destination)}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Aprobaste el viático de <strong>{_text(d.requester_name)}</strong> "
            f"por <strong>{format_money(d.amount)}</strong>"
        )
    return None


def _travel_rejected(p: _Parts, d: TravelExpenseDetails) -> str | None:
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} Tu viático por <strong>{format_money(d.amount)}</strong> fue "
            f"<strong>RECHAZADO</strong> por <strong>{p.emitter}</strong>"
            f"<br>📝 <strong>Motivo:</strong> {_text(d.approver_comment, NO_REASON)}"
        )
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> rechazó el viático de "
            f"<strong>{_text(d.requester_name)}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>📝 <strong>Motivo:</strong> {_text(d.approver_comment, NO_REASON)}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Rechazaste el viático de <strong>{_text(d.requester_name)}</strong> "
            f"por <strong>{format_money(d.amount)}</strong>"
        )
    return None


def _travel_paid(p: _Parts, d: TravelExpenseDetails) -> str | None:
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} ¡Tu viático por <strong>{format_money(d.amount)}</strong> ha sido "
            "<strong>PAGADO</strong>!"
            f"<br>🎯 <strong>Destino:</strong> {_text(d.destination)}"
            f"<br>🏦 <strong>Procesado por:</strong> {p.emitter}"
            f"<br>📅 <strong>Fecha de pago:</strong> {p.today}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} El viático que aprobaste de <strong>{_text(d.requester_name)}</strong> "
            "ha sido pagado"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
        )
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> procesó el pago del viático de "
            f"<strong>{_text(d.requester_name)}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
        )
    if p.recipient_role == ROLE_PAYER:
        return (
            f"{p.emoji} Procesaste el pago del viático de "
            f"<strong>{_text(d.requester_name)}</strong> por "
            f"<strong>{format_money(d.amount)}</strong>"
        )
    return None


# Recurring payment templates


def _recurring_created(p: _Parts, d: RecurringPaymentDetails) -> str | None:
    frequency = _text(d.frequency, NOT_SPECIFIED_F)
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> creó una nueva plantilla de pago recurrente"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
            f"<br>🔄 <strong>Frecuencia:</strong> {frequency}"
            f"<br>📅 <strong>Próxima ejecución:</strong> {_text(d.next_date, NOT_SPECIFIED_F)}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Nueva plantilla recurrente para revisar de <strong>{p.emitter}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>🔄 <strong>Frecuencia:</strong> {frequency}"
            "<br>⏰ <strong>Requiere aprobación</strong>"
        )
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} Tu plantilla de pago recurrente fue creada"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>🔄 <strong>Frecuencia:</strong> {frequency}"
        )
    return None


def _recurring_approved(p: _Parts, d: RecurringPaymentDetails) -> str | None:
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} Tu plantilla recurrente por <strong>{format_money(d.amount)}</strong> fue "
            f"<strong>APROBADA</strong> por <strong>{p.emitter}</strong>"
            f"<br>🔄 <strong>Frecuencia:</strong> {_text(d.frequency, NOT_SPECIFIED_F)}"
            f"<br>📅 <strong>Próxima ejecución:</strong> {_text(d.next_date, NOT_SPECIFIED_F)}"
        )
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> aprobó la plantilla recurrente de "
            f"<strong>{_text(d.requester_name)}</strong>"
            f"<br>💰 <strong>Monto:</strong> {format_money(d.amount)}"
            f"<br>📋 <strong>Concepto:</strong> {_text(d.concept)}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Aprobaste la plantilla recurrente de "
            f"<strong>{_text(d.requester_name)}</strong> por "
            f"<strong>{format_money(d.amount)}</strong>"
        )
    return None


def _recurring_rejected(p: _Parts, d: RecurringPaymentDetails) -> str | None:
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} Tu plantilla recurrente por <strong>{format_money(d.amount)}</strong> fue "
            f"<strong>RECHAZADA</strong> por <strong>{p.emitter}</strong>"
            f"<br>📝 <strong>Motivo:</strong> {_text(d.approver_comment, NO_REASON)}"
        )
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> rechazó la plantilla recurrente de "
            f"<strong>{_text(d.requester_name)}</strong>"
            f"<br>📝 <strong>Motivo:</strong> {_text(d.approver_comment, NO_REASON)}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Rechazaste la plantilla recurrente de "
            f"<strong>{_text(d.requester_name)}</strong>"
        )
    return None


# Vouchers


def _voucher_uploaded(p: _Parts, d: VoucherDetails) -> str | None:
    voucher_type = _text(d.voucher_type)
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> subió un comprobante"
            f"<br>📄 <strong>Tipo:</strong> {voucher_type}"
            f"<br>🔗 <strong>Relacionado con:</strong> {_text(d.related_entity)}"
            f"<br>📅 <strong>Fecha:</strong> {p.today}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Se subió un comprobante para revisar"
            f"<br>👤 <strong>Subido por:</strong> {p.emitter}"
            f"<br>📄 <strong>Tipo:</strong> {voucher_type}"
        )
    if p.recipient_role == ROLE_REQUESTER:
        return (
            f"{p.emoji} Tu comprobante fue subido correctamente"
            f"<br>📄 <strong>Tipo:</strong> {voucher_type}"
        )
    return None


# Users


def _welcome(p: _Parts, d: UserAccountDetails) -> str:
    return (
        f"{p.emoji} ¡Bienvenido/a <strong>{_text(d.user_name)}</strong>! Tu cuenta ha sido "
        "creada exitosamente"
        f"<br>🎭 <strong>Rol:</strong> {_text(d.user_role)}"
        f"<br>🏢 <strong>Departamento:</strong> {_text(d.user_department, UNASSIGNED)}"
        "<br>🚀 <strong>Ya puedes comenzar a usar la plataforma</strong>"
    )


def _user_created(p: _Parts, d: UserAccountDetails) -> str | None:
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} Se creó un nuevo usuario en el sistema"
            f"<br>👤 <strong>Nombre:</strong> {_text(d.user_name)}"
            f"<br>✉️ <strong>Email:</strong> {_text(d.user_email)}"
            f"<br>🎭 <strong>Rol:</strong> {_text(d.user_role)}"
            f"<br>🏢 <strong>Departamento:</strong> {_text(d.user_department, UNASSIGNED)}"
            f"<br>👨‍💼 <strong>Creado por:</strong> {p.emitter}"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Se agregó un nuevo solicitante: <strong>{_text(d.user_name)}</strong> "
            f"del departamento {_text(d.user_department, NO_REASON)}"
        )
    if p.recipient_role == ROLE_PAYER:
        return (
            f"{p.emoji} Se agregó un nuevo aprobador: <strong>{_text(d.user_name)}</strong>"
            "<br>💳 Las solicitudes que apruebe llegarán para pago"
        )
    if p.recipient_role == ROLE_REQUESTER:
        return _welcome(p, d)
    return None


def _user_welcome(p: _Parts, d: UserAccountDetails) -> str | None:
    return _welcome(p, d)


def _user_deleted(p: _Parts, d: UserAccountDetails) -> str | None:
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> eliminó al usuario "
            f"<strong>{_text(d.user_name)}</strong>"
            f"<br>✉️ <strong>Email:</strong> {_text(d.user_email)}"
            f"<br>🎭 <strong>Rol:</strong> {_text(d.user_role)}"
        )
    return None


# Batch operations


def _batch_approved(p: _Parts, d: BatchDetails) -> str | None:
    count, label, total = _count(d.count), _plural(d.entity_label), format_money(d.total_amount)
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> aprobó <strong>{count}</strong> {label} en lote"
            f"<br>💰 <strong>Monto total:</strong> {total}"
            "<br>📋 <strong>Operación:</strong> Aprobación masiva"
        )
    if p.recipient_role == ROLE_PAYER:
        return (
            f"{p.emoji} <strong>{count}</strong> {label} fueron aprobadas para pago"
            f"<br>💰 <strong>Monto total:</strong> {total}"
            f"<br>✅ <strong>Aprobadas por:</strong> {p.emitter}"
            "<br>⏰ <strong>Listas para procesar</strong>"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Aprobaste <strong>{count}</strong> {label} en lote"
            f"<br>💰 <strong>Monto total:</strong> {total}"
        )
    return None


def _batch_rejected(p: _Parts, d: BatchDetails) -> str | None:
    count, label = _count(d.count), _plural(d.entity_label)
    reason = _text(d.comment, NO_REASON)
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> rechazó <strong>{count}</strong> {label} en lote"
            f"<br>📝 <strong>Motivo:</strong> {reason}"
            "<br>📋 <strong>Operación:</strong> Rechazo masivo"
        )
    if p.recipient_role == ROLE_APPROVER:
        return (
            f"{p.emoji} Rechazaste <strong>{count}</strong> {label} en lote"
            f"<br>📝 <strong>Motivo:</strong> {reason}"
        )
    return None


def _batch_paid(p: _Parts, d: BatchDetails) -> str | None:
    count, label, total = _count(d.count), _plural(d.entity_label), format_money(d.total_amount)
    if p.recipient_role == ROLE_ADMIN_GENERAL:
        return (
            f"{p.emoji} <strong>{p.emitter}</strong> pagó <strong>{count}</strong> {label} en lote"
            f"<br>💰 <strong>Monto total:</strong> {total}"
            "<br>📋 <strong>Operación:</strong> Pago masivo"
        )
    if p.recipient_role == ROLE_PAYER:
        return (
            f"{p.emoji} Procesaste el pago de <strong>{count}</strong> {label} en lote"
            f"<br>💰 <strong>Monto total:</strong> {total}"
        )
    return None


_Builder = Callable[[_Parts, Any], "str | None"]

_BUILDERS: dict[NotificationKind, _Builder] = {
    _K.SOLICITUD_CREADA: _request_created,
    _K.SOLICITUD_APROBADA: _request_approved,
    _K.SOLICITUD_RECHAZADA: _request_rejected,
    _K.SOLICITUD_PAGADA: _request_paid,
    _K.VIATICO_CREADO: _travel_created,
    _K.VIATICO_APROBADO: _travel_approved,
    _K.VIATICO_RECHAZADO: _travel_rejected,
    _K.VIATICO_PAGADO: _travel_paid,
    _K.RECURRENTE_CREADA: _recurring_created,
    _K.RECURRENTE_APROBADA: _recurring_approved,
    _K.RECURRENTE_RECHAZADA: _recurring_rejected,
    _K.COMPROBANTE_SUBIDO: _voucher_uploaded,
    _K.USUARIO_CREADO: _user_created,
    _K.USUARIO_BIENVENIDA: _user_welcome,
    _K.USUARIO_ELIMINADO: _user_deleted,
    _K.LOTE_APROBADO: _batch_approved,
    _K.LOTE_RECHAZADO: _batch_rejected,
    _K.LOTE_PAGADO: _batch_paid,
}


def generic_message(emitter_name: str, kind: NotificationKind | str, today: str) -> str:
    """Return the line used when no dedicated wording applies."""

    return (
        f"{DEFAULT_EMOJI} <strong>{emitter_name}</strong> realizó una acción en el sistema"
        f"<br>📋 <strong>Tipo:</strong> {html.escape(kind_value(kind), quote=False)}"
        f"<br>📅 <strong>Fecha:</strong> {today}"
    )


def _emitter_role_label(emitter: User | None) -> str:
    if emitter is None:
        return ""
    return ROLE_LABELS.get(emitter.role_alias, ROLE_LABELS[ROLE_ADMIN_GENERAL])


def synthesize_message(
    kind: NotificationKind | str,
    emitter: User | None,
    recipient: User | None,
    entity_type: str | None = None,
    details: Mapping[str, Any] | None = None,
    *,
    today: date | None = None,
) -> str:
    """Render the message ``recipient`` sees for an event emitted by ``emitter``.

    Never raises: missing details render as placeholders and any unexpected
    error inside a dedicated branch is logged and answered with the generic
    line.
    """

    emitter_name = _text(emitter.name if emitter else None, UNKNOWN_EMITTER)
    rendered_today = format_short_date(today or now_in_app_timezone())
    coerced = coerce_kind(kind)
    builder = _BUILDERS.get(coerced) if isinstance(coerced, NotificationKind) else None
    if builder is None:
        return generic_message(emitter_name, kind, rendered_today)

    try:
        parts = _Parts(
            emoji=EMOJIS.get(coerced, DEFAULT_EMOJI),
            emitter=emitter_name,
            emitter_role=_emitter_role_label(emitter),
            emitter_department=_text(emitter.department if emitter else None, NO_DEPARTMENT),
            recipient_role=recipient.role_alias if recipient else "",
            today=rendered_today,
        )
        message = builder(parts, parse_notification_details(coerced, details))
    except Exception:
        logger.exception(
            "Error generando el mensaje %s para %s (%s)",
            kind_value(kind),
            recipient.id if recipient else None,
            entity_type,
        )
        message = None

    return message or generic_message(emitter_name, kind, rendered_today)


__all__ = ["EMOJIS", "generic_message", "synthesize_message"]
