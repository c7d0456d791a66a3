"""Domain events that feed the notification dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .notification_kind import NotificationKind


@dataclass(frozen=True)
class EventContext:
    """Audit metadata about the request that triggered an event."""

    ip: str | None = None
    user_agent: str | None = None
    timestamp: datetime | None = None


@dataclass
class NotificationEvent:
    """A state transition that has to be notified.

    Exactly one of ``recipient_user_id`` or ``recipient_role`` is expected. When
    both are missing the dispatch is a logged no-op.
    """

    kind: NotificationKind | str
    emitter_id: int | None
    entity_type: str | None
    recipient_user_id: int | None = None
    recipient_role: str | None = None
    entity_id: str | int | None = None
    details: dict[str, Any] = field(default_factory=dict)
    send_push: bool = True
    send_email: bool = False
    context: EventContext | None = None


__all__ = ["EventContext", "NotificationEvent"]
