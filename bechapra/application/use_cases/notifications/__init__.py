"""Notification engine: addressing, wording, persistence and delivery."""

from .action_logger import ActionLogger, build_action_logger, kind_for_action
from .dispatch import (
    STATUS_DELIVERED,
    STATUS_FAILED,
    STATUS_PARTIAL,
    STATUS_SKIPPED,
    DispatchOutcome,
    NotificationDispatcher,
    RecipientOutcome,
    build_notification_dispatcher,
)
from .messages import synthesize_message
from .priority import classify_priority
from .recipients import resolve_recipients
from .workflows import (
    ApprovedRequest,
    notify_batch_approved,
    notify_request_approved,
    notify_request_paid,
    notify_request_rejected,
    notify_user_created,
)

__all__ = [
    "ActionLogger",
    "ApprovedRequest",
    "DispatchOutcome",
    "NotificationDispatcher",
    "RecipientOutcome",
    "STATUS_DELIVERED",
    "STATUS_FAILED",
    "STATUS_PARTIAL",
    "STATUS_SKIPPED",
    "build_action_logger",
    "build_notification_dispatcher",
    "classify_priority",
    "kind_for_action",
    "notify_batch_approved",
    "notify_request_approved",
    "notify_request_paid",
    "notify_request_rejected",
    "notify_user_created",
    "resolve_recipients",
    "synthesize_message",
]
