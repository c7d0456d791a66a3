"""ORM models used by the application infrastructure."""

from .department import DepartmentModel
from .notification import NotificationModel
from .role import RoleModel
from .user import UserModel

__all__ = [
    "DepartmentModel",
    "NotificationModel",
    "RoleModel",
    "UserModel",
]
