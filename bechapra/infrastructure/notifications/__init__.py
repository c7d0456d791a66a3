"""Realtime and email notification channels for the infrastructure layer."""

from .channels import EmailChannel, PushChannel
from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    NotificationPublisher,
    notification_publisher,
    serialize_notification,
)

__all__ = [
    "EmailChannel",
    "NotificationConnectionManager",
    "NotificationPublisher",
    "PushChannel",
    "notification_manager",
    "notification_publisher",
    "serialize_notification",
]
