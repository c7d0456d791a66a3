"""Domain entity representing a user."""

from dataclasses import dataclass

from .role import ROLE_ADMIN_GENERAL, Role


@dataclass
class User:
    """Profile of a user as seen by the notification engine."""

    id: int | None
    role: Role
    name: str
    email: str
    department: str | None
    is_active: bool

    @property
    def role_alias(self) -> str:
        return self.role.alias.lower()

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role_alias == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is a general administrator."""

        return self.has_role(ROLE_ADMIN_GENERAL)


__all__ = ["User"]
