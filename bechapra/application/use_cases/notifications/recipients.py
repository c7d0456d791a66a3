"""Recipient lookup for notification events."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError

from bechapra.domain.entities import User
from bechapra.domain.exceptions import ResolutionError

logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    def get(self, user_id: int) -> User | None: ...

    def list_active_by_role(self, alias: str) -> Sequence[User]: ...


def resolve_user(users: UserDirectory, user_id: int | None) -> User | None:
    """Return the profile of ``user_id`` whatever its status, or ``None``."""

    if user_id is None:
        return None
    try:
        return users.get(user_id)
    except SQLAlchemyError as exc:
        raise ResolutionError(f"No se pudo consultar el usuario {user_id}") from exc


def resolve_recipients(
    users: UserDirectory,
    *,
    explicit_user_id: int | None = None,
    role: str | None = None,
) -> list[User]:
    """Return the active users an event is addressed to.

    An explicit user id takes precedence over ``role``. The explicit user is
    dropped when missing or inactive and the result is then empty, same as
    when neither argument is given.
    """

    try:
        if explicit_user_id is not None:
            user = users.get(explicit_user_id)
            if user is None or not user.is_active:
                logger.info(
                    "Destinatario %s inexistente o inactivo", explicit_user_id
                )
                return []
            return [user]
        if role:
            return list(users.list_active_by_role(role))
    except SQLAlchemyError as exc:
        target = explicit_user_id if explicit_user_id is not None else role
        raise ResolutionError(f"No se pudieron consultar los destinatarios {target!r}") from exc
    return []


__all__ = ["UserDirectory", "resolve_recipients", "resolve_user"]
