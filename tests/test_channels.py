"""Tests for the push and email channel adapters and the websocket publisher."""

from __future__ import annotations

import asyncio
import threading
from datetime import datetime, timezone

from bechapra.domain.entities import CHANNEL_EMAIL, CHANNEL_PUSH, Notification
from bechapra.infrastructure.notifications import (
    EmailChannel,
    NotificationConnectionManager,
    NotificationPublisher,
    PushChannel,
    serialize_notification,
)


def _notification(recipient_id: int = 5) -> Notification:
    return Notification(
        id=11,
        recipient_id=recipient_id,
        message="✅ Tu solicitud fue aprobada",
        kind="solicitud_aprobada",
        priority="normal",
        entity_type="solicitud",
        entity_id="42",
        emitter_id=7,
        created_at=datetime(2024, 6, 9, 12, 30, tzinfo=timezone.utc),
    )


class _FakePublisher:
    def __init__(self, result=True, error=None) -> None:
        self.result = result
        self.error = error
        self.calls = []

    def dispatch(self, notification, *, emitter_name=None):
        self.calls.append((notification.id, emitter_name))
        if self.error is not None:
            raise self.error
        return self.result


class _FakeWebSocket:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.accepted = False
        self.messages = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.messages.append(message)


def test_push_channel_reports_sent() -> None:
    publisher = _FakePublisher()

    result = PushChannel(publisher).send(_notification(), emitter_name="Laura Méndez")

    assert result.channel == CHANNEL_PUSH
    assert result.delivered is True
    assert publisher.calls == [(11, "Laura Méndez")]


def test_push_channel_skips_without_event_loop() -> None:
    result = PushChannel(_FakePublisher(result=False)).send(_notification())

    assert result.skipped is True
    assert result.delivered is False


def test_push_channel_absorbs_publisher_errors() -> None:
    result = PushChannel(_FakePublisher(error=RuntimeError("boom"))).send(_notification())

    assert result.delivered is False
    assert result.skipped is False
    assert result.error == "boom"


def test_email_channel_reports_sent() -> None:
    calls = []

    def sender(*args):
        calls.append(args)
        return True

    result = EmailChannel(sender=sender, timeout=1).send(
        "carlos@example.com", "Bechapra - Notificación", "Carlos", "https://x", "Hola"
    )

    assert result.channel == CHANNEL_EMAIL
    assert result.delivered is True
    assert calls == [("carlos@example.com", "Bechapra - Notificación", "Carlos", "https://x", "Hola")]


def test_email_channel_false_return_is_failure() -> None:
    result = EmailChannel(sender=lambda *args: False, timeout=1).send("a@b.c", "s", "n", "l", "b")

    assert result.delivered is False
    assert result.error == "correo no enviado"


def test_email_channel_exception_is_failure() -> None:
    def sender(*args):
        raise ConnectionError("smtp down")

    result = EmailChannel(sender=sender, timeout=1).send("a@b.c", "s", "n", "l", "b")

    assert result.delivered is False
    assert result.error == "smtp down"


def test_email_channel_timeout() -> None:
    release = threading.Event()

    def slow_sender(*args):
        release.wait(5)
        return True

    try:
        result = EmailChannel(sender=slow_sender, timeout=0.05).send("a@b.c", "s", "n", "l", "b")
    finally:
        release.set()

    assert result.delivered is False
    assert result.error == "timeout"


def test_serialize_notification() -> None:
    payload = serialize_notification(_notification(), emitter_name="Laura Méndez")

    assert payload == {
        "id": 11,
        "user_id": 5,
        "message": "✅ Tu solicitud fue aprobada",
        "kind": "solicitud_aprobada",
        "priority": "normal",
        "entity_type": "solicitud",
        "entity_id": "42",
        "emitter": "Laura Méndez",
        "is_read": False,
        "created_at": "2024-06-09T12:30:00+00:00",
    }


def test_publisher_without_event_loop_returns_false() -> None:
    publisher = NotificationPublisher(NotificationConnectionManager())

    assert publisher.dispatch(_notification()) is False


def test_publisher_schedules_on_running_loop() -> None:
    manager = NotificationConnectionManager()
    publisher = NotificationPublisher(manager)
    socket = _FakeWebSocket()

    async def scenario():
        await manager.connect(5, socket)
        scheduled = publisher.dispatch(_notification(), emitter_name="Laura Méndez")
        await asyncio.sleep(0)
        return scheduled

    assert asyncio.run(scenario()) is True
    assert socket.accepted is True
    assert socket.messages[0]["type"] == "notification"
    assert socket.messages[0]["data"]["id"] == 11


def test_manager_drops_broken_connections() -> None:
    manager = NotificationConnectionManager()
    healthy, broken = _FakeWebSocket(), _FakeWebSocket(fail=True)

    async def scenario():
        await manager.connect(5, healthy)
        await manager.connect(5, broken)
        await manager.send_to_user(5, {"type": "ping"})

    asyncio.run(scenario())

    assert healthy.messages == [{"type": "ping"}]
    assert manager.connection_count(5) == 1

    manager.disconnect(5, healthy)
    assert manager.connection_count(5) == 0
