"""Domain entities exposed by the application."""

from .delivery import CHANNEL_EMAIL, CHANNEL_PUSH, ChannelResult
from .notification import Notification, NotificationStatistics, NotificationWithEmitter
from .notification_details import (
    BatchDetails,
    GenericDetails,
    NotificationDetails,
    PaymentRequestDetails,
    RecurringPaymentDetails,
    TravelExpenseDetails,
    UserAccountDetails,
    VoucherDetails,
    parse_notification_details,
)
from .notification_event import EventContext, NotificationEvent
from .notification_kind import (
    PRIORITY_RANK,
    NotificationKind,
    NotificationPriority,
    coerce_kind,
    kind_value,
)
from .role import (
    ROLE_ADMIN_GENERAL,
    ROLE_ALIASES,
    ROLE_APPROVER,
    ROLE_LABELS,
    ROLE_PAYER,
    ROLE_REQUESTER,
    Role,
)
from .user import User

__all__ = [
    "BatchDetails",
    "CHANNEL_EMAIL",
    "CHANNEL_PUSH",
    "ChannelResult",
    "EventContext",
    "GenericDetails",
    "Notification",
    "NotificationDetails",
    "NotificationEvent",
    "NotificationKind",
    "NotificationPriority",
    "NotificationStatistics",
    "NotificationWithEmitter",
    "PRIORITY_RANK",
    "PaymentRequestDetails",
    "ROLE_ADMIN_GENERAL",
    "ROLE_ALIASES",
    "ROLE_APPROVER",
    "ROLE_LABELS",
    "ROLE_PAYER",
    "ROLE_REQUESTER",
    "RecurringPaymentDetails",
    "Role",
    "TravelExpenseDetails",
    "User",
    "UserAccountDetails",
    "VoucherDetails",
    "coerce_kind",
    "kind_value",
    "parse_notification_details",
]
