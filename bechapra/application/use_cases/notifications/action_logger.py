"""Record "actor performed verb on entity" events as notifications."""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from bechapra.domain.entities import (
    ROLE_ADMIN_GENERAL,
    ROLE_APPROVER,
    EventContext,
    NotificationEvent,
    NotificationKind,
    NotificationPriority,
    User,
    coerce_kind,
    kind_value,
)
from bechapra.infrastructure.repositories import UserRepository

from .dispatch import DispatchOutcome, NotificationDispatcher, build_notification_dispatcher
from .priority import classify_priority
from .recipients import UserDirectory

logger = logging.getLogger(__name__)

_K = NotificationKind

UNKNOWN_ACTOR = "Usuario desconocido"
UNKNOWN_ROLE = "Sin rol"

VERB_CREATED = "creo"
BATCH_ENTITY = "lote"

# Keys are normalised verb and entity names, see ``normalize_key``.
ACTION_KINDS: dict[tuple[str, str], NotificationKind] = {
    ("creo", "solicitud"): _K.SOLICITUD_CREADA,
    ("aprobo", "solicitud"): _K.SOLICITUD_APROBADA,
    ("rechazo", "solicitud"): _K.SOLICITUD_RECHAZADA,
    ("pago", "solicitud"): _K.SOLICITUD_PAGADA,
    ("actualizo", "solicitud"): _K.SOLICITUD_ACTUALIZADA,
    ("elimino", "solicitud"): _K.SOLICITUD_ELIMINADA,
    ("creo", "viatico"): _K.VIATICO_CREADO,
    ("aprobo", "viatico"): _K.VIATICO_APROBADO,
    ("rechazo", "viatico"): _K.VIATICO_RECHAZADO,
    ("pago", "viatico"): _K.VIATICO_PAGADO,
    ("creo", "recurrente"): _K.RECURRENTE_CREADA,
    ("aprobo", "recurrente"): _K.RECURRENTE_APROBADA,
    ("rechazo", "recurrente"): _K.RECURRENTE_RECHAZADA,
    ("subio", "comprobante"): _K.COMPROBANTE_SUBIDO,
    ("aprobo", "comprobante"): _K.COMPROBANTE_APROBADO,
    ("rechazo", "comprobante"): _K.COMPROBANTE_RECHAZADO,
    ("creo", "usuario"): _K.USUARIO_CREADO,
    ("actualizo", "usuario"): _K.USUARIO_ACTUALIZADO,
    ("elimino", "usuario"): _K.USUARIO_ELIMINADO,
    ("aprobo", "lote"): _K.LOTE_APROBADO,
    ("rechazo", "lote"): _K.LOTE_RECHAZADO,
    ("pago", "lote"): _K.LOTE_PAGADO,
}

_ENTITY_ALIASES = {
    "pago_recurrente": "recurrente",
    "plantilla_recurrente": "recurrente",
}

EMAIL_FORCED_KINDS = frozenset(
    {
        _K.SOLICITUD_RECHAZADA,
        _K.SOLICITUD_PAGADA,
        _K.VIATICO_RECHAZADO,
        _K.VIATICO_PAGADO,
        _K.RECURRENTE_RECHAZADA,
        _K.COMPROBANTE_RECHAZADO,
        _K.LOTE_RECHAZADO,
        _K.LOTE_PAGADO,
    }
)


def normalize_key(value: str | None) -> str:
    """Lowercase ``value``, drop accents and join words with underscores."""

    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return "_".join(stripped.lower().split())


def kind_for_action(verb: str, entity_type: str | None) -> NotificationKind:
    """Map a verb and an entity to a kind; unknown pairs are ``sistema_accion``."""

    entity = normalize_key(entity_type)
    entity = _ENTITY_ALIASES.get(entity, entity)
    return ACTION_KINDS.get((normalize_key(verb), entity), _K.SISTEMA_ACCION)


def forces_email(kind: NotificationKind | str) -> bool:
    """Return ``True`` when an action of ``kind`` must always be emailed."""

    return (
        coerce_kind(kind) in EMAIL_FORCED_KINDS
        or classify_priority(kind) is NotificationPriority.CRITICAL
    )


def fallback_message(
    actor: User,
    verb: str,
    entity_type: str | None,
    entity_id: Any = None,
    extra_message: str = "",
) -> str:
    """Plain summary stored for an administrator when the full dispatch fails."""

    name = actor.name or UNKNOWN_ACTOR
    role = actor.role.alias if actor.role and actor.role.alias else UNKNOWN_ROLE
    message = f"🔔 {name} ({role}) {verb} {entity_type or ''}".rstrip()
    if entity_id not in (None, ""):
        message += f" #{entity_id}"
    if extra_message:
        message += f". {extra_message}"
    return message


class ActionLogger:
    """Turn business actions into notifications with a best-effort fallback."""

    def __init__(self, dispatcher: NotificationDispatcher, users: UserDirectory) -> None:
        self._dispatcher = dispatcher
        self._users = users

    def log_action(
        self,
        actor: User | None,
        verb: str,
        entity_type: str | None,
        entity_id: str | int | None = None,
        details: Mapping[str, Any] | None = None,
        extra_message: str = "",
        recipient_user_id: int | None = None,
        recipient_role: str | None = ROLE_ADMIN_GENERAL,
        context: EventContext | None = None,
        kind: NotificationKind | str | None = None,
    ) -> DispatchOutcome | None:
        """Notify ``verb`` performed by ``actor`` on an entity.

        Returns the dispatch outcome, or ``None`` when there is no actor or the
        dispatch raised. A failed dispatch triggers the fallback notification.
        """

        if actor is None or actor.id is None:
            logger.error("No se encontró el usuario emisor de la acción %s %s", verb, entity_type)
            return None

        resolved_kind = kind or kind_for_action(verb, entity_type)
        try:
            event = NotificationEvent(
                kind=resolved_kind,
                emitter_id=actor.id,
                entity_type=entity_type,
                recipient_user_id=recipient_user_id,
                recipient_role=None if recipient_user_id is not None else recipient_role,
                entity_id=entity_id,
                details={**(details or {}), "accion": verb, "mensaje_extra": extra_message},
                send_push=True,
                send_email=forces_email(resolved_kind),
                context=context,
            )
            outcome = self._dispatcher.dispatch(event)
        except Exception:
            logger.exception("Error registrando la acción %s %s", verb, entity_type)
            self._notify_fallback(actor, verb, entity_type, entity_id, extra_message)
            return None

        if outcome.failed:
            logger.error(
                "No se pudo notificar la acción %s %s: %s", verb, entity_type, outcome.error
            )
            self._notify_fallback(actor, verb, entity_type, entity_id, extra_message)
        else:
            logger.info(
                "Acción registrada: %s %s %s por %s (%s)",
                verb,
                entity_type,
                entity_id,
                actor.name,
                kind_value(resolved_kind),
            )
        return outcome

    def _notify_fallback(
        self,
        actor: User,
        verb: str,
        entity_type: str | None,
        entity_id: Any,
        extra_message: str,
    ) -> None:
        try:
            admins = self._users.list_active_by_role(ROLE_ADMIN_GENERAL)
            if not admins:
                logger.warning("No hay administradores activos para el aviso de respaldo")
                return
            self._dispatcher.create_plain_notification(
                admins[0].id,
                fallback_message(actor, verb, entity_type, entity_id, extra_message),
                emitter_id=actor.id,
            )
        except Exception:
            logger.exception("Error en el aviso de respaldo de la acción %s %s", verb, entity_type)

    def _log_entity_action(
        self,
        actor: User | None,
        verb: str,
        entity_type: str,
        entity_id: str | int | None,
        details: Mapping[str, Any] | None,
        context: EventContext | None,
    ) -> DispatchOutcome | None:
        role = ROLE_APPROVER if normalize_key(verb) == VERB_CREATED else ROLE_ADMIN_GENERAL
        return self.log_action(
            actor,
            verb,
            entity_type,
            entity_id,
            details=details,
            recipient_role=role,
            context=context,
        )

    def log_request_action(
        self,
        actor: User | None,
        verb: str,
        request_id: str | int | None,
        details: Mapping[str, Any] | None = None,
        context: EventContext | None = None,
    ) -> DispatchOutcome | None:
        return self._log_entity_action(actor, verb, "solicitud", request_id, details, context)

    def log_travel_expense_action(
        self,
        actor: User | None,
        verb: str,
        travel_expense_id: str | int | None,
        details: Mapping[str, Any] | None = None,
        context: EventContext | None = None,
    ) -> DispatchOutcome | None:
        return self._log_entity_action(actor, verb, "viatico", travel_expense_id, details, context)

    def log_recurring_action(
        self,
        actor: User | None,
        verb: str,
        recurring_id: str | int | None,
        details: Mapping[str, Any] | None = None,
        context: EventContext | None = None,
    ) -> DispatchOutcome | None:
        return self._log_entity_action(actor, verb, "recurrente", recurring_id, details, context)

    def log_batch_action(
        self,
        actor: User | None,
        verb: str,
        entity_type: str,
        ids: Iterable[int | str],
        details: Mapping[str, Any] | None = None,
        context: EventContext | None = None,
    ) -> DispatchOutcome | None:
        """Notify administrators of an action applied to several entities at once."""

        affected = list(ids)
        batch_details = {
            "tipo_entidad": entity_type,
            **(details or {}),
            "cantidad": len(affected),
            "ids_afectados": affected,
        }
        return self.log_action(
            actor,
            verb,
            entity_type,
            ",".join(str(item) for item in affected),
            details=batch_details,
            recipient_role=ROLE_ADMIN_GENERAL,
            context=context,
            kind=kind_for_action(verb, BATCH_ENTITY),
        )


def build_action_logger(session: Session) -> ActionLogger:
    return ActionLogger(build_notification_dispatcher(session), UserRepository(session))


__all__ = [
    "ACTION_KINDS",
    "ActionLogger",
    "EMAIL_FORCED_KINDS",
    "build_action_logger",
    "fallback_message",
    "forces_email",
    "kind_for_action",
    "normalize_key",
]
