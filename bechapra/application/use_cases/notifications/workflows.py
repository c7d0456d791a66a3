"""Notifications sent after the business state transitions.

Each helper runs every event of its fan-out plan and returns the outcomes in
the order they were dispatched.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from bechapra.domain.entities import (
    ROLE_ADMIN_GENERAL,
    ROLE_APPROVER,
    ROLE_LABELS,
    ROLE_PAYER,
    ROLE_REQUESTER,
    EventContext,
    NotificationEvent,
    NotificationKind,
    User,
)
from bechapra.utils import parse_amount

from .dispatch import DispatchOutcome, NotificationDispatcher

REQUEST_ENTITY = "solicitud"
USER_ENTITY = "usuario"


@dataclass
class ApprovedRequest:
    """One request approved as part of a batch."""

    request_id: int | str
    requester_id: int
    details: Mapping[str, Any] = field(default_factory=dict)


def _event(
    kind: NotificationKind,
    emitter: User,
    entity_type: str,
    entity_id: Any,
    details: Mapping[str, Any],
    *,
    user_id: int | None = None,
    role: str | None = None,
    send_email: bool = False,
    context: EventContext | None = None,
) -> NotificationEvent:
    return NotificationEvent(
        kind=kind,
        emitter_id=emitter.id,
        entity_type=entity_type,
        recipient_user_id=user_id,
        recipient_role=role,
        entity_id=entity_id,
        details=dict(details),
        send_push=True,
        send_email=send_email,
        context=context,
    )


def notify_request_approved(
    dispatcher: NotificationDispatcher,
    *,
    approver: User,
    requester_id: int,
    request_id: int | str,
    details: Mapping[str, Any],
    context: EventContext | None = None,
) -> list[DispatchOutcome]:
    kind = NotificationKind.SOLICITUD_APROBADA
    events = [
        _event(kind, approver, REQUEST_ENTITY, request_id, details, user_id=requester_id, send_email=True, context=context),
        _event(kind, approver, REQUEST_ENTITY, request_id, details, role=ROLE_PAYER, context=context),
        _event(kind, approver, REQUEST_ENTITY, request_id, details, role=ROLE_ADMIN_GENERAL, context=context),
        _event(kind, approver, REQUEST_ENTITY, request_id, details, user_id=approver.id, context=context),
    ]
    return [dispatcher.dispatch(event) for event in events]


def notify_request_rejected(
    dispatcher: NotificationDispatcher,
    *,
    approver: User,
    requester_id: int,
    request_id: int | str,
    details: Mapping[str, Any],
    context: EventContext | None = None,
) -> list[DispatchOutcome]:
    kind = NotificationKind.SOLICITUD_RECHAZADA
    events = [
        _event(kind, approver, REQUEST_ENTITY, request_id, details, user_id=requester_id, send_email=True, context=context),
        _event(kind, approver, REQUEST_ENTITY, request_id, details, role=ROLE_ADMIN_GENERAL, context=context),
        _event(kind, approver, REQUEST_ENTITY, request_id, details, user_id=approver.id, context=context),
    ]
    return [dispatcher.dispatch(event) for event in events]


def notify_request_paid(
    dispatcher: NotificationDispatcher,
    *,
    payer: User,
    requester_id: int,
    request_id: int | str,
    details: Mapping[str, Any],
    approver_id: int | None = None,
    context: EventContext | None = None,
) -> list[DispatchOutcome]:
    kind = NotificationKind.SOLICITUD_PAGADA
    events = [
        _event(kind, payer, REQUEST_ENTITY, request_id, details, user_id=requester_id, send_email=True, context=context),
    ]
    if approver_id is not None:
        events.append(
            _event(kind, payer, REQUEST_ENTITY, request_id, details, user_id=approver_id, context=context)
        )
    events += [
        _event(kind, payer, REQUEST_ENTITY, request_id, details, role=ROLE_ADMIN_GENERAL, context=context),
        _event(kind, payer, REQUEST_ENTITY, request_id, details, user_id=payer.id, context=context),
    ]
    return [dispatcher.dispatch(event) for event in events]


def notify_batch_approved(
    dispatcher: NotificationDispatcher,
    *,
    approver: User,
    requests: Iterable[ApprovedRequest],
    comment: str | None = None,
    entity_type: str = REQUEST_ENTITY,
    context: EventContext | None = None,
) -> list[DispatchOutcome]:
    """Notify each requester, then administrators and payers once for the batch."""

    approved = list(requests)
    if not approved:
        return []

    outcomes: list[DispatchOutcome] = []
    total = Decimal(0)
    for item in approved:
        details = {**item.details, "aprobacion_lote": True}
        if comment:
            details.setdefault("comentario_aprobador", comment)
        total += parse_amount(item.details.get("monto")) or Decimal(0)
        outcomes.append(
            dispatcher.dispatch(
                _event(
                    NotificationKind.SOLICITUD_APROBADA,
                    approver,
                    entity_type,
                    item.request_id,
                    details,
                    user_id=item.requester_id,
                    send_email=True,
                    context=context,
                )
            )
        )

    batch_id = ",".join(str(item.request_id) for item in approved)
    batch_details = {
        "cantidad": len(approved),
        "monto_total": total,
        "tipo_entidad": entity_type,
        "aprobador_nombre": approver.name,
        "comentario": comment,
    }
    for role in (ROLE_ADMIN_GENERAL, ROLE_PAYER):
        outcomes.append(
            dispatcher.dispatch(
                _event(
                    NotificationKind.LOTE_APROBADO,
                    approver,
                    entity_type,
                    batch_id,
                    batch_details,
                    role=role,
                    context=context,
                )
            )
        )
    return outcomes


def notify_user_created(
    dispatcher: NotificationDispatcher,
    *,
    creator: User,
    new_user: User,
    context: EventContext | None = None,
) -> list[DispatchOutcome]:
    details = {
        "usuario_nombre": new_user.name,
        "usuario_email": new_user.email,
        "usuario_rol": ROLE_LABELS.get(new_user.role_alias, new_user.role.alias),
        "usuario_departamento": new_user.department,
        "creado_por": creator.name,
    }
    events = [
        _event(
            NotificationKind.USUARIO_BIENVENIDA,
            creator,
            USER_ENTITY,
            new_user.id,
            details,
            user_id=new_user.id,
            send_email=True,
            context=context,
        ),
        _event(
            NotificationKind.USUARIO_CREADO,
            creator,
            USER_ENTITY,
            new_user.id,
            details,
            role=ROLE_ADMIN_GENERAL,
            send_email=not creator.is_admin(),
            context=context,
        ),
    ]
    if new_user.has_role(ROLE_REQUESTER):
        events.append(
            _event(NotificationKind.USUARIO_CREADO, creator, USER_ENTITY, new_user.id, details, role=ROLE_APPROVER, context=context)
        )
    elif new_user.has_role(ROLE_APPROVER):
        events.append(
            _event(NotificationKind.USUARIO_CREADO, creator, USER_ENTITY, new_user.id, details, role=ROLE_PAYER, context=context)
        )
    return [dispatcher.dispatch(event) for event in events]


__all__ = [
    "ApprovedRequest",
    "notify_batch_approved",
    "notify_request_approved",
    "notify_request_paid",
    "notify_request_rejected",
    "notify_user_created",
]
