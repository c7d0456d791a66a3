"""Request and response schemas."""

from .notification import (
    NotificationEmitterRead,
    NotificationEnrichedRead,
    NotificationMarkAllReadResponse,
    NotificationRead,
    NotificationStatisticsRead,
)

__all__ = [
    "NotificationEmitterRead",
    "NotificationEnrichedRead",
    "NotificationMarkAllReadResponse",
    "NotificationRead",
    "NotificationStatisticsRead",
]
