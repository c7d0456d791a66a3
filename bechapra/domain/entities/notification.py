"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Message rendered for, and delivered to, a single recipient."""

    id: int | None
    recipient_id: int
    message: str
    kind: str
    priority: str
    entity_type: str | None
    entity_id: str | None
    emitter_id: int | None
    is_read: bool = False
    created_at: datetime | None = None


@dataclass
class NotificationWithEmitter:
    """Notification joined with the emitter's current name and role."""

    notification: Notification
    emitter_name: str | None
    emitter_role: str | None


@dataclass
class NotificationStatistics:
    """Aggregate counters for a user's notification inbox."""

    total: int = 0
    unread: int = 0
    high_priority: int = 0
    critical: int = 0
    pending_requests: int = 0
    pending_travel_expenses: int = 0


__all__ = ["Notification", "NotificationStatistics", "NotificationWithEmitter"]
