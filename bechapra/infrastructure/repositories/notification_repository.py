"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy import and_, case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from bechapra.domain.entities import (
    PRIORITY_RANK,
    Notification,
    NotificationPriority,
    NotificationStatistics,
    NotificationWithEmitter,
)
from bechapra.domain.entities.notification_kind import UNKNOWN_PRIORITY_RANK, kind_value
from bechapra.infrastructure.models import NotificationModel, RoleModel, UserModel
from bechapra.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

_priority_rank = case(
    *((NotificationModel.priority == priority, rank) for priority, rank in PRIORITY_RANK.items()),
    else_=UNKNOWN_PRIORITY_RANK,
)

# Critical first, then unread before read, then newest first.
_INBOX_ORDER = (
    _priority_rank.asc(),
    NotificationModel.is_read.asc(),
    NotificationModel.created_at.desc(),
    NotificationModel.id.desc(),
)


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def get_for_user(self, notification_id: int, *, user_id: int) -> Notification | None:
        model = self._get_owned_model(notification_id, user_id=user_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .order_by(*_INBOX_ORDER)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_enriched_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = 50,
    ) -> Sequence[NotificationWithEmitter]:
        """Return the inbox of ``user_id`` joined with each emitter's name and role."""

        emitter = aliased(UserModel)
        emitter_role = aliased(RoleModel)
        query = (
            self.session.query(NotificationModel, emitter.name, emitter_role.alias)
            .outerjoin(emitter, NotificationModel.emitter_id == emitter.id)
            .outerjoin(emitter_role, emitter.role_id == emitter_role.id)
            .filter(NotificationModel.user_id == user_id)
            .order_by(*_INBOX_ORDER)
        )
        if limit is not None:
            query = query.limit(limit)
        return [
            NotificationWithEmitter(
                notification=self._to_entity(model),
                emitter_name=emitter_name,
                emitter_role=emitter_alias,
            )
            for model, emitter_name, emitter_alias in query.all()
        ]

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .order_by(*_INBOX_ORDER)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        """Flag the given notifications of ``user_id`` as read.

        Marking an already read notification is a no-op. Returns the number of
        rows matched.
        """

        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        matched = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
            )
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return matched

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def delete_for_user(self, notification_id: int, *, user_id: int) -> bool:
        """Delete a notification owned by ``user_id``.

        Returns ``False`` when the notification does not exist or belongs to
        somebody else.
        """

        model = self._get_owned_model(notification_id, user_id=user_id)
        if model is None:
            return False

        self.session.delete(model)
        self.session.commit()
        return True

    def get_statistics(self, user_id: int) -> NotificationStatistics:
        unread = NotificationModel.is_read.is_(False)

        def _count_where(condition):
            return func.sum(case((condition, 1), else_=0))

        row = (
            self.session.query(
                func.count(NotificationModel.id),
                _count_where(unread),
                _count_where(
                    and_(unread, NotificationModel.priority == NotificationPriority.HIGH.value)
                ),
                _count_where(
                    and_(unread, NotificationModel.priority == NotificationPriority.CRITICAL.value)
                ),
                _count_where(and_(unread, NotificationModel.kind.like("%solicitud%"))),
                _count_where(and_(unread, NotificationModel.kind.like("%viatico%"))),
            )
            .filter(NotificationModel.user_id == user_id)
            .one()
        )
        total, unread_count, high, critical, requests, travel = (int(value or 0) for value in row)
        return NotificationStatistics(
            total=total,
            unread=unread_count,
            high_priority=high,
            critical=critical,
            pending_requests=requests,
            pending_travel_expenses=travel,
        )

    def _get_owned_model(self, notification_id: int, *, user_id: int) -> NotificationModel | None:
        return (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.user_id = notification.recipient_id
        model.message = notification.message
        model.kind = kind_value(notification.kind)
        model.priority = getattr(notification.priority, "value", notification.priority)
        model.entity_type = notification.entity_type
        model.entity_id = notification.entity_id
        model.emitter_id = notification.emitter_id
        model.is_read = notification.is_read

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.user_id,
            message=model.message,
            kind=model.kind,
            priority=model.priority,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            emitter_id=model.emitter_id,
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
