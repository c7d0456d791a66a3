"""Typed payloads for the ``details`` bag carried by notification events.

Callers send a free-form mapping whose keys depend on the notification kind.
Each family of kinds is parsed into one of the frozen dataclasses below so
the message synthesizer works with attributes instead of raw keys. Parsing
never fails: unknown keys are ignored and malformed values become ``None``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Union

from bechapra.utils.formatting import parse_amount

from .notification_kind import NotificationKind, coerce_kind


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _count(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class PaymentRequestDetails:
    amount: Decimal | None = None
    concept: str | None = None
    company: str | None = None
    payment_deadline: str | None = None
    destination_account: str | None = None
    requester_name: str | None = None
    requester_department: str | None = None
    approver_comment: str | None = None
    payment_reference: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PaymentRequestDetails":
        return cls(
            amount=parse_amount(data.get("monto")),
            concept=_text(data.get("concepto")),
            company=_text(data.get("empresa_a_pagar")),
            payment_deadline=_text(data.get("fecha_limite_pago")),
            destination_account=_text(data.get("cuenta_destino")),
            requester_name=_text(data.get("solicitante_nombre")),
            requester_department=_text(
                data.get("solicitante_departamento") or data.get("departamento")
            ),
            approver_comment=_text(data.get("comentario_aprobador")),
            payment_reference=_text(data.get("referencia_pago")),
        )


@dataclass(frozen=True)
class TravelExpenseDetails:
    amount: Decimal | None = None
    concept: str | None = None
    destination: str | None = None
    requester_name: str | None = None
    approver_comment: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TravelExpenseDetails":
        return cls(
            amount=parse_amount(data.get("monto")),
            concept=_text(data.get("concepto")),
            destination=_text(data.get("destino")),
            requester_name=_text(data.get("solicitante_nombre")),
            approver_comment=_text(data.get("comentario_aprobador")),
        )


@dataclass(frozen=True)
class RecurringPaymentDetails:
    amount: Decimal | None = None
    concept: str | None = None
    frequency: str | None = None
    next_date: str | None = None
    requester_name: str | None = None
    approver_comment: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RecurringPaymentDetails":
        return cls(
            amount=parse_amount(data.get("monto")),
            concept=_text(data.get("concepto")),
            frequency=_text(data.get("frecuencia")),
            next_date=_text(data.get("siguiente_fecha")),
            requester_name=_text(data.get("solicitante_nombre")),
            approver_comment=_text(data.get("comentario_aprobador")),
        )


@dataclass(frozen=True)
class VoucherDetails:
    voucher_type: str | None = None
    related_entity: str | None = None
    approver_comment: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VoucherDetails":
        return cls(
            voucher_type=_text(data.get("tipo_comprobante")),
            related_entity=_text(data.get("entidad_relacionada")),
            approver_comment=_text(data.get("comentario_aprobador")),
        )


@dataclass(frozen=True)
class UserAccountDetails:
    user_name: str | None = None
    user_email: str | None = None
    user_role: str | None = None
    user_department: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UserAccountDetails":
        return cls(
            user_name=_text(data.get("usuario_nombre")),
            user_email=_text(data.get("usuario_email")),
            user_role=_text(data.get("usuario_rol")),
            user_department=_text(data.get("usuario_departamento")),
        )


@dataclass(frozen=True)
class BatchDetails:
    count: int | None = None
    total_amount: Decimal | None = None
    entity_label: str | None = None
    comment: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BatchDetails":
        return cls(
            count=_count(data.get("cantidad")),
            total_amount=parse_amount(data.get("monto_total")),
            entity_label=_text(data.get("tipo_entidad")),
            comment=_text(data.get("comentario")),
        )


@dataclass(frozen=True)
class GenericDetails:
    """Fallback payload for kinds without a modelled shape."""

    values: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenericDetails":
        return cls(values=dict(data))


NotificationDetails = Union[
    PaymentRequestDetails,
    TravelExpenseDetails,
    RecurringPaymentDetails,
    VoucherDetails,
    UserAccountDetails,
    BatchDetails,
    GenericDetails,
]

_K = NotificationKind
DETAILS_BY_KIND: dict[NotificationKind, type] = {
    _K.SOLICITUD_CREADA: PaymentRequestDetails,
    _K.SOLICITUD_APROBADA: PaymentRequestDetails,
    _K.SOLICITUD_RECHAZADA: PaymentRequestDetails,
    _K.SOLICITUD_PAGADA: PaymentRequestDetails,
    _K.SOLICITUD_ACTUALIZADA: PaymentRequestDetails,
    _K.SOLICITUD_ELIMINADA: PaymentRequestDetails,
    _K.VIATICO_CREADO: TravelExpenseDetails,
    _K.VIATICO_APROBADO: TravelExpenseDetails,
    _K.VIATICO_RECHAZADO: TravelExpenseDetails,
    _K.VIATICO_PAGADO: TravelExpenseDetails,
    _K.RECURRENTE_CREADA: RecurringPaymentDetails,
    _K.RECURRENTE_APROBADA: RecurringPaymentDetails,
    _K.RECURRENTE_RECHAZADA: RecurringPaymentDetails,
    _K.RECURRENTE_EJECUTADA: RecurringPaymentDetails,
    _K.COMPROBANTE_SUBIDO: VoucherDetails,
    _K.COMPROBANTE_APROBADO: VoucherDetails,
    _K.COMPROBANTE_RECHAZADO: VoucherDetails,
    _K.USUARIO_CREADO: UserAccountDetails,
    _K.USUARIO_ACTUALIZADO: UserAccountDetails,
    _K.USUARIO_ELIMINADO: UserAccountDetails,
    _K.USUARIO_BIENVENIDA: UserAccountDetails,
    _K.LOTE_APROBADO: BatchDetails,
    _K.LOTE_RECHAZADO: BatchDetails,
    _K.LOTE_PAGADO: BatchDetails,
}


def parse_notification_details(
    kind: NotificationKind | str, data: Mapping[str, Any] | None
) -> NotificationDetails:
    """Return the typed payload for ``kind`` built from ``data``."""

    payload_type = DETAILS_BY_KIND.get(coerce_kind(kind), GenericDetails)
    if not isinstance(data, Mapping):
        data = {}
    return payload_type.from_mapping(data)


__all__ = [
    "BatchDetails",
    "DETAILS_BY_KIND",
    "GenericDetails",
    "NotificationDetails",
    "PaymentRequestDetails",
    "RecurringPaymentDetails",
    "TravelExpenseDetails",
    "UserAccountDetails",
    "VoucherDetails",
    "parse_notification_details",
]
