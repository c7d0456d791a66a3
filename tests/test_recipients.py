"""Tests for recipient resolution."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from bechapra.application.use_cases.notifications.recipients import (
    resolve_recipients,
    resolve_user,
)
from bechapra.domain.entities import ROLE_ADMIN_GENERAL, ROLE_APPROVER, ROLE_PAYER
from bechapra.domain.exceptions import ResolutionError
from bechapra.infrastructure.repositories import UserRepository


def test_explicit_user_is_resolved(db_session, make_user) -> None:
    user = make_user("Carlos Ruiz")

    recipients = resolve_recipients(UserRepository(db_session), explicit_user_id=user.id)

    assert [recipient.id for recipient in recipients] == [user.id]


def test_inactive_or_missing_explicit_user_resolves_to_nothing(db_session, make_user) -> None:
    inactive = make_user("Inactivo", is_active=False)
    users = UserRepository(db_session)

    assert resolve_recipients(users, explicit_user_id=inactive.id) == []
    assert resolve_recipients(users, explicit_user_id=9999) == []


def test_role_returns_active_users_in_storage_order(db_session, make_user) -> None:
    first = make_user("Ana Admin", ROLE_ADMIN_GENERAL)
    make_user("Baja Admin", ROLE_ADMIN_GENERAL, is_active=False)
    second = make_user("Beto Admin", ROLE_ADMIN_GENERAL)
    make_user("Laura Méndez", ROLE_APPROVER)

    recipients = resolve_recipients(UserRepository(db_session), role=ROLE_ADMIN_GENERAL)

    assert [recipient.id for recipient in recipients] == [first.id, second.id]


def test_role_without_users_is_empty(db_session, roles) -> None:
    assert resolve_recipients(UserRepository(db_session), role=ROLE_PAYER) == []


def test_no_target_resolves_to_nothing(db_session) -> None:
    assert resolve_recipients(UserRepository(db_session)) == []


def test_explicit_user_wins_over_role(db_session, make_user) -> None:
    admin = make_user("Ana Admin", ROLE_ADMIN_GENERAL)
    approver = make_user("Laura Méndez", ROLE_APPROVER)

    recipients = resolve_recipients(
        UserRepository(db_session), explicit_user_id=approver.id, role=ROLE_ADMIN_GENERAL
    )

    assert [recipient.id for recipient in recipients] == [approver.id]
    assert admin.id not in [recipient.id for recipient in recipients]


class _BrokenDirectory:
    def get(self, user_id):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    def list_active_by_role(self, alias):
        raise OperationalError("SELECT", {}, Exception("database is down"))


def test_storage_failures_become_resolution_errors() -> None:
    with pytest.raises(ResolutionError):
        resolve_recipients(_BrokenDirectory(), role=ROLE_ADMIN_GENERAL)
    with pytest.raises(ResolutionError):
        resolve_recipients(_BrokenDirectory(), explicit_user_id=1)
    with pytest.raises(ResolutionError):
        resolve_user(_BrokenDirectory(), 1)


def test_resolve_user_returns_inactive_emitters(db_session, make_user) -> None:
    inactive = make_user("Ex Empleado", ROLE_APPROVER, is_active=False)

    assert resolve_user(UserRepository(db_session), inactive.id).name == "Ex Empleado"
    assert resolve_user(UserRepository(db_session), None) is None
