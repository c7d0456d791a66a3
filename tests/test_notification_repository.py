"""Tests for notification persistence and inbox queries."""

from __future__ import annotations

from datetime import datetime, timedelta

from bechapra.domain.entities import (
    ROLE_ADMIN_GENERAL,
    ROLE_APPROVER,
    Notification,
    NotificationKind,
    NotificationPriority,
)
from bechapra.utils import now_in_app_timezone


def _notification(recipient_id, *, priority="normal", kind="solicitud_creada", created_at=None, emitter_id=None, is_read=False):
    return Notification(
        id=None,
        recipient_id=recipient_id,
        message=f"{kind} {priority}",
        kind=kind,
        priority=priority,
        entity_type="solicitud",
        entity_id="1",
        emitter_id=emitter_id,
        is_read=is_read,
        created_at=created_at,
    )


def test_create_assigns_id_and_timestamp(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")

    stored = notification_repository.create(
        _notification(user.id, kind=NotificationKind.SOLICITUD_PAGADA, priority=NotificationPriority.HIGH)
    )

    assert stored.id is not None
    assert stored.kind == "solicitud_pagada"
    assert stored.priority == "high"
    assert stored.is_read is False
    assert stored.created_at is not None
    assert stored.created_at.tzinfo is not None


def test_inbox_orders_by_priority_then_unread_then_newest(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")
    base = now_in_app_timezone() - timedelta(hours=1)
    low = notification_repository.create(_notification(user.id, priority="low", created_at=base))
    normal_old = notification_repository.create(
        _notification(user.id, created_at=base + timedelta(minutes=1))
    )
    normal_new = notification_repository.create(
        _notification(user.id, created_at=base + timedelta(minutes=5))
    )
    normal_read = notification_repository.create(
        _notification(user.id, created_at=base + timedelta(minutes=10), is_read=True)
    )
    critical = notification_repository.create(
        _notification(user.id, priority="critical", created_at=base)
    )
    high = notification_repository.create(_notification(user.id, priority="high", created_at=base))

    ordered = [item.id for item in notification_repository.list_for_user(user.id)]

    assert ordered == [critical.id, high.id, normal_new.id, normal_old.id, normal_read.id, low.id]


def test_inbox_is_limited_and_scoped_to_user(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")
    other = make_user("Laura Méndez", ROLE_APPROVER)
    for _ in range(3):
        notification_repository.create(_notification(user.id))
    notification_repository.create(_notification(other.id))

    assert len(notification_repository.list_for_user(user.id, limit=2)) == 2
    assert len(notification_repository.list_for_user(user.id, limit=None)) == 3
    assert all(item.recipient_id == other.id for item in notification_repository.list_for_user(other.id))


def test_unread_listing(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")
    unread = notification_repository.create(_notification(user.id))
    notification_repository.create(_notification(user.id, is_read=True))

    assert [item.id for item in notification_repository.list_unread_for_user(user.id)] == [unread.id]


def test_mark_as_read_is_idempotent_and_owned(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")
    other = make_user("Laura Méndez", ROLE_APPROVER)
    mine = notification_repository.create(_notification(user.id))
    theirs = notification_repository.create(_notification(other.id))

    assert notification_repository.mark_as_read([mine.id, theirs.id], user_id=user.id) == 1
    assert notification_repository.mark_as_read([mine.id], user_id=user.id) == 1
    assert notification_repository.mark_as_read([], user_id=user.id) == 0

    assert notification_repository.get_for_user(mine.id, user_id=user.id).is_read is True
    assert notification_repository.get_for_user(theirs.id, user_id=other.id).is_read is False


def test_mark_all_as_read_counts_only_unread(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")
    notification_repository.create(_notification(user.id))
    notification_repository.create(_notification(user.id))
    notification_repository.create(_notification(user.id, is_read=True))

    assert notification_repository.mark_all_as_read(user.id) == 2
    assert notification_repository.mark_all_as_read(user.id) == 0
    assert notification_repository.list_unread_for_user(user.id) == []


def test_delete_requires_ownership(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")
    other = make_user("Laura Méndez", ROLE_APPROVER)
    stored = notification_repository.create(_notification(user.id))

    assert notification_repository.delete_for_user(stored.id, user_id=other.id) is False
    assert notification_repository.get_for_user(stored.id, user_id=user.id) is not None

    assert notification_repository.delete_for_user(stored.id, user_id=user.id) is True
    assert notification_repository.get_for_user(stored.id, user_id=user.id) is None
    assert notification_repository.delete_for_user(stored.id, user_id=user.id) is False


def test_statistics(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")
    notification_repository.create(_notification(user.id, priority="high"))
    notification_repository.create(_notification(user.id, priority="critical", kind="sistema_alerta"))
    notification_repository.create(_notification(user.id, kind="viatico_creado"))
    notification_repository.create(_notification(user.id, priority="high", is_read=True))

    stats = notification_repository.get_statistics(user.id)

    assert stats.total == 4
    assert stats.unread == 3
    assert stats.high_priority == 1
    assert stats.critical == 1
    assert stats.pending_requests == 1
    assert stats.pending_travel_expenses == 1


def test_statistics_for_empty_inbox(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")

    stats = notification_repository.get_statistics(user.id)

    assert (stats.total, stats.unread, stats.critical) == (0, 0, 0)


def test_enriched_listing_joins_emitter(notification_repository, make_user) -> None:
    user = make_user("Carlos Ruiz")
    admin = make_user("Ana Admin", ROLE_ADMIN_GENERAL)
    notification_repository.create(_notification(user.id, emitter_id=admin.id))
    notification_repository.create(_notification(user.id, created_at=datetime(2024, 1, 1, 9, 0)))

    enriched = notification_repository.list_enriched_for_user(user.id)

    assert [(item.emitter_name, item.emitter_role) for item in enriched] == [
        ("Ana Admin", ROLE_ADMIN_GENERAL),
        (None, None),
    ]
