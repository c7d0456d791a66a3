"""Errors raised inside the notification engine.

None of them reach the HTTP layer that triggered a dispatch; the dispatcher
logs and absorbs them.
"""


class NotificationError(Exception):
    """Base class for notification engine failures."""


class ResolutionError(NotificationError):
    """The emitter or recipient lookup failed at the storage layer."""


class PersistenceError(NotificationError):
    """A notification record could not be stored for one recipient."""

    def __init__(self, recipient_id: int, message: str) -> None:
        super().__init__(message)
        self.recipient_id = recipient_id


class ChannelDeliveryError(NotificationError):
    """A push or email delivery failed for one recipient."""

    def __init__(self, channel: str, recipient_id: int, message: str) -> None:
        super().__init__(message)
        self.channel = channel
        self.recipient_id = recipient_id


__all__ = [
    "ChannelDeliveryError",
    "NotificationError",
    "PersistenceError",
    "ResolutionError",
]
