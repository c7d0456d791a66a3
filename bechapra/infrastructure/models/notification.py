"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import expression

from bechapra.infrastructure.database import Base
from bechapra.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """One row per recipient per dispatched event."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    kind = Column(String(50), nullable=False)
    priority = Column(String(20), nullable=False, default="normal")
    entity_type = Column(String(50), nullable=True)
    entity_id = Column(Text, nullable=True)
    emitter_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    is_read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
