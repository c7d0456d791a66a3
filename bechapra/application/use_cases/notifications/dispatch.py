"""Fan-out of a notification event to its recipients."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.orm import Session

from bechapra.config import get_settings
from bechapra.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_PUSH,
    ChannelResult,
    Notification,
    NotificationEvent,
    NotificationKind,
    NotificationPriority,
    User,
    coerce_kind,
    kind_value,
)
from bechapra.domain.exceptions import ChannelDeliveryError, PersistenceError, ResolutionError
from bechapra.infrastructure.notifications import EmailChannel, PushChannel
from bechapra.infrastructure.repositories import NotificationRepository, UserRepository
from bechapra.utils import html_to_plain_text, now_in_app_timezone

from .messages import synthesize_message
from .priority import classify_priority, requires_email
from .recipients import UserDirectory, resolve_recipients, resolve_user

logger = logging.getLogger(__name__)

STATUS_DELIVERED = "delivered"
STATUS_PARTIAL = "partial"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"

EMAIL_SUBJECT = "Bechapra - Notificación"
EMAIL_SUBJECT_URGENT = "Bechapra - Notificación Urgente"


class NotificationStore(Protocol):
    def create(self, notification: Notification) -> Notification: ...


class PushSender(Protocol):
    def send(self, notification: Notification, *, emitter_name: str | None = None) -> ChannelResult: ...


class EmailSender(Protocol):
    def send(
        self,
        to_address: str,
        subject: str,
        recipient_name: str,
        link: str,
        body_text: str,
    ) -> ChannelResult: ...


@dataclass
class RecipientOutcome:
    """What happened for a single recipient of an event."""

    recipient_id: int
    notification: Notification | None = None
    push: ChannelResult | None = None
    email: ChannelResult | None = None
    error: str | None = None

    @property
    def persisted(self) -> bool:
        return self.notification is not None


@dataclass
class DispatchOutcome:
    """Summary of one dispatch call."""

    status: str
    priority: NotificationPriority | None = None
    recipients: list[RecipientOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def notifications(self) -> list[Notification]:
        return [item.notification for item in self.recipients if item.notification is not None]

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAILED


def email_subject(priority: NotificationPriority | str) -> str:
    if str(getattr(priority, "value", priority)) == NotificationPriority.CRITICAL.value:
        return EMAIL_SUBJECT_URGENT
    return EMAIL_SUBJECT


class NotificationDispatcher:
    """Resolve, render, persist and deliver notifications for an event.

    ``dispatch`` never raises. Each recipient is handled on its own: a failed
    insert skips that recipient's channels, and a failed channel does not
    affect the other channel or the other recipients.
    """

    def __init__(
        self,
        users: UserDirectory,
        notifications: NotificationStore,
        push: PushSender,
        email: EmailSender,
        *,
        link: str,
    ) -> None:
        self._users = users
        self._notifications = notifications
        self._push = push
        self._email = email
        self._link = link

    def dispatch(self, event: NotificationEvent) -> DispatchOutcome:
        try:
            return self._dispatch(event)
        except Exception as exc:
            logger.exception("Error inesperado creando la notificación %s", kind_value(event.kind))
            return DispatchOutcome(status=STATUS_FAILED, error=str(exc))

    def _dispatch(self, event: NotificationEvent) -> DispatchOutcome:
        kind = coerce_kind(event.kind)
        logger.info(
            "Creando notificación %s (emisor=%s, destinatario=%s, rol=%s, entidad=%s)",
            kind_value(kind),
            event.emitter_id,
            event.recipient_user_id,
            event.recipient_role,
            event.entity_type,
        )
        if event.recipient_user_id is not None and event.recipient_role:
            logger.warning(
                "La notificación %s trae destinatario %s y rol %s; se usa el destinatario",
                kind_value(kind),
                event.recipient_user_id,
                event.recipient_role,
            )

        try:
            emitter = resolve_user(self._users, event.emitter_id)
            if emitter is None:
                logger.error("Usuario emisor no encontrado: %s", event.emitter_id)
                return DispatchOutcome(status=STATUS_SKIPPED, error="emisor no encontrado")
            recipients = resolve_recipients(
                self._users,
                explicit_user_id=event.recipient_user_id,
                role=event.recipient_role,
            )
        except ResolutionError as exc:
            logger.error("No se pudo resolver la notificación %s: %s", kind_value(kind), exc, exc_info=True)
            return DispatchOutcome(status=STATUS_FAILED, error=str(exc))

        if not recipients:
            logger.error("No se encontraron destinatarios para la notificación %s", kind_value(kind))
            return DispatchOutcome(status=STATUS_SKIPPED, error="sin destinatarios")

        priority = classify_priority(kind)
        with_email = event.send_email or requires_email(priority)
        outcomes = [
            self._notify_recipient(event, kind, priority, emitter, recipient, with_email=with_email)
            for recipient in recipients
        ]

        persisted = sum(1 for outcome in outcomes if outcome.persisted)
        if persisted == len(outcomes):
            status = STATUS_DELIVERED
        elif persisted:
            status = STATUS_PARTIAL
        else:
            status = STATUS_FAILED
        return DispatchOutcome(status=status, priority=priority, recipients=outcomes)

    def _notify_recipient(
        self,
        event: NotificationEvent,
        kind: NotificationKind | str,
        priority: NotificationPriority,
        emitter: User,
        recipient: User,
        *,
        with_email: bool,
    ) -> RecipientOutcome:
        outcome = RecipientOutcome(recipient_id=recipient.id)
        message = synthesize_message(kind, emitter, recipient, event.entity_type, event.details)
        try:
            outcome.notification = self._notifications.create(
                Notification(
                    id=None,
                    recipient_id=recipient.id,
                    message=message,
                    kind=kind_value(kind),
                    priority=priority.value,
                    entity_type=event.entity_type,
                    entity_id=None if event.entity_id is None else str(event.entity_id),
                    emitter_id=emitter.id,
                    created_at=now_in_app_timezone(),
                )
            )
        except Exception as exc:
            error = PersistenceError(recipient.id, f"No se pudo guardar la notificación: {exc}")
            logger.error("Notificación para el usuario %s no guardada: %s", recipient.id, error, exc_info=True)
            outcome.error = str(error)
            return outcome

        logger.info(
            "Notificación creada para %s, ID: %s", recipient.name, outcome.notification.id
        )
        if event.send_push:
            outcome.push = self._send_push(outcome.notification, emitter, recipient)
        if with_email:
            outcome.email = self._send_email(outcome.notification, priority, recipient)
        return outcome

    def _send_push(self, notification: Notification, emitter: User, recipient: User) -> ChannelResult:
        try:
            result = self._push.send(notification, emitter_name=emitter.name)
        except Exception as exc:
            result = ChannelResult.failed(CHANNEL_PUSH, str(exc))
        self._report(result, recipient)
        return result

    def _send_email(
        self,
        notification: Notification,
        priority: NotificationPriority,
        recipient: User,
    ) -> ChannelResult:
        if not recipient.email:
            logger.warning("El usuario %s no tiene correo registrado", recipient.id)
            return ChannelResult.skip(CHANNEL_EMAIL, "sin correo")
        try:
            result = self._email.send(
                recipient.email,
                email_subject(priority),
                recipient.name,
                self._link,
                html_to_plain_text(notification.message),
            )
        except Exception as exc:
            result = ChannelResult.failed(CHANNEL_EMAIL, str(exc))
        self._report(result, recipient)
        return result

    @staticmethod
    def _report(result: ChannelResult, recipient: User) -> None:
        if result.delivered or result.skipped:
            return
        error = ChannelDeliveryError(result.channel, recipient.id, result.error or "error desconocido")
        logger.warning(
            "Falló el canal %s para el usuario %s: %s", error.channel, error.recipient_id, error
        )

    def create_plain_notification(
        self,
        recipient_id: int,
        message: str,
        *,
        emitter_id: int | None = None,
        send_push: bool = True,
    ) -> Notification:
        """Store a pre-rendered message for a single user.

        This is the simple path used as a fallback when the full dispatch
        fails. Errors are raised to the caller.
        """

        notification = self._notifications.create(
            Notification(
                id=None,
                recipient_id=recipient_id,
                message=message,
                kind=NotificationKind.SISTEMA_ACCION.value,
                priority=NotificationPriority.NORMAL.value,
                entity_type=None,
                entity_id=None,
                emitter_id=emitter_id,
                created_at=now_in_app_timezone(),
            )
        )
        if send_push:
            self._push.send(notification)
        return notification


def build_notification_dispatcher(session: Session) -> NotificationDispatcher:
    """Wire a dispatcher to the database session and the default channels."""

    return NotificationDispatcher(
        UserRepository(session),
        NotificationRepository(session),
        PushChannel(),
        EmailChannel(),
        link=get_settings().notification_link,
    )


__all__ = [
    "DispatchOutcome",
    "EMAIL_SUBJECT",
    "EMAIL_SUBJECT_URGENT",
    "NotificationDispatcher",
    "RecipientOutcome",
    "STATUS_DELIVERED",
    "STATUS_FAILED",
    "STATUS_PARTIAL",
    "STATUS_SKIPPED",
    "build_notification_dispatcher",
    "email_subject",
]
