"""Shared fixtures: an in-memory database, user factories and recording channels."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``bechapra`` package) is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "30")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bechapra.application.use_cases.notifications import NotificationDispatcher  # noqa: E402
from bechapra.domain.entities import (  # noqa: E402
    CHANNEL_EMAIL,
    CHANNEL_PUSH,
    ROLE_ALIASES,
    ROLE_LABELS,
    ROLE_REQUESTER,
    ChannelResult,
    User,
)
from bechapra.infrastructure import models  # noqa: E402
from bechapra.infrastructure.database import Base  # noqa: E402
from bechapra.infrastructure.repositories import (  # noqa: E402
    NotificationRepository,
    UserRepository,
)

TEST_LINK = "https://bechapra.test"


class RecordingPushChannel:
    """Push channel double that remembers every notification it was given."""

    def __init__(self) -> None:
        self.sent: list = []
        self.result = ChannelResult.sent(CHANNEL_PUSH)
        self.error: Exception | None = None

    def send(self, notification, *, emitter_name=None):
        self.sent.append((notification, emitter_name))
        if self.error is not None:
            raise self.error
        return self.result

    @property
    def recipients(self) -> list[int]:
        return [notification.recipient_id for notification, _ in self.sent]


class RecordingEmailChannel:
    """Email channel double that records the arguments of every send."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.result = ChannelResult.sent(CHANNEL_EMAIL)
        self.error: Exception | None = None

    def send(self, to_address, subject, recipient_name, link, body_text):
        self.sent.append(
            {
                "to": to_address,
                "subject": subject,
                "name": recipient_name,
                "link": link,
                "body": body_text,
            }
        )
        if self.error is not None:
            raise self.error
        return self.result

    @property
    def addresses(self) -> list[str]:
        return [item["to"] for item in self.sent]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    assert models.NotificationModel.__tablename__ == "notification"
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def roles(db_session) -> dict[str, models.RoleModel]:
    created = {}
    for alias in ROLE_ALIASES:
        role = models.RoleModel(name=ROLE_LABELS[alias], alias=alias)
        db_session.add(role)
        created[alias] = role
    db_session.commit()
    return created


@pytest.fixture()
def make_user(db_session, roles):
    """Return a factory inserting a user and returning its domain entity."""

    departments: dict[str, models.DepartmentModel] = {}

    def _make_user(
        name: str,
        role: str = ROLE_REQUESTER,
        *,
        email: str | None = None,
        department: str | None = None,
        is_active: bool = True,
    ) -> User:
        department_model = None
        if department:
            department_model = departments.get(department)
            if department_model is None:
                department_model = models.DepartmentModel(name=department)
                db_session.add(department_model)
                departments[department] = department_model
        model = models.UserModel(
            role_id=roles[role].id,
            department=department_model,
            name=name,
            email=email if email is not None else f"{name.split()[0].lower()}@example.com",
            is_active=is_active,
        )
        db_session.add(model)
        db_session.commit()
        return UserRepository(db_session).get(model.id)

    return _make_user


@pytest.fixture()
def push_channel() -> RecordingPushChannel:
    return RecordingPushChannel()


@pytest.fixture()
def email_channel() -> RecordingEmailChannel:
    return RecordingEmailChannel()


@pytest.fixture()
def notification_repository(db_session) -> NotificationRepository:
    return NotificationRepository(db_session)


@pytest.fixture()
def dispatcher(db_session, push_channel, email_channel) -> NotificationDispatcher:
    return NotificationDispatcher(
        UserRepository(db_session),
        NotificationRepository(db_session),
        push_channel,
        email_channel,
        link=TEST_LINK,
    )
