"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
from typing import Any

from anyio import from_thread

from bechapra.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification, *, emitter_name: str | None = None) -> bool:
        """Schedule ``notification`` to be delivered to its recipient.

        Returns ``False`` when no event loop is reachable from the caller, in
        which case nothing is sent.
        """

        message = {
            "type": "notification",
            "data": serialize_notification(notification, emitter_name=emitter_name),
        }
        return self.publish(notification.recipient_id, message)

    def publish(self, user_id: int, message: dict[str, Any]) -> bool:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_user, user_id, message)
            except RuntimeError:
                # Not running inside an AnyIO worker thread.
                return False
            return True
        loop.create_task(self._manager.send_to_user(user_id, message))
        return True


def serialize_notification(
    notification: Notification, *, emitter_name: str | None = None
) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "user_id": notification.recipient_id,
        "message": notification.message,
        "kind": notification.kind,
        "priority": notification.priority,
        "entity_type": notification.entity_type,
        "entity_id": notification.entity_id,
        "emitter": emitter_name,
        "is_read": notification.is_read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "serialize_notification",
]
