"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    message: str
    kind: str
    priority: str
    entity_type: str | None = None
    entity_id: str | None = None
    emitter_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None


class NotificationEmitterRead(BaseModel):
    name: str | None = None
    role: str | None = None


class NotificationEnrichedRead(NotificationRead):
    """Notification together with the emitter's current name and role."""

    emitter: NotificationEmitterRead = Field(default_factory=NotificationEmitterRead)


class NotificationStatisticsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    unread: int
    high_priority: int
    critical: int
    pending_requests: int
    pending_travel_expenses: int


class NotificationMarkAllReadResponse(BaseModel):
    updated: int


__all__ = [
    "NotificationEmitterRead",
    "NotificationEnrichedRead",
    "NotificationMarkAllReadResponse",
    "NotificationRead",
    "NotificationStatisticsRead",
]
