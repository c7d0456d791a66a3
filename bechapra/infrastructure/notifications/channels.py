"""Side-channel adapters used by the notification dispatcher.

Both adapters deliver an already composed notification and report the
attempt as a :class:`ChannelResult`; they never raise to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

from bechapra.config import get_settings
from bechapra.domain.entities import CHANNEL_EMAIL, CHANNEL_PUSH, ChannelResult, Notification
from bechapra.infrastructure.email import send_notification_email

from .publisher import NotificationPublisher, notification_publisher

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str, str, str], bool]

_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="notification-email")


class PushChannel:
    """Best-effort realtime delivery through the websocket publisher."""

    def __init__(self, publisher: NotificationPublisher | None = None) -> None:
        self._publisher = publisher or notification_publisher

    def send(self, notification: Notification, *, emitter_name: str | None = None) -> ChannelResult:
        try:
            scheduled = self._publisher.dispatch(notification, emitter_name=emitter_name)
        except Exception as exc:
            logger.warning(
                "No se pudo enviar la notificación %s por websocket: %s",
                notification.id,
                exc,
            )
            return ChannelResult.failed(CHANNEL_PUSH, str(exc))
        if not scheduled:
            logger.debug(
                "Canal websocket no disponible; se omite la notificación %s", notification.id
            )
            return ChannelResult.skip(CHANNEL_PUSH, "websocket no disponible")
        return ChannelResult.sent(CHANNEL_PUSH)


class EmailChannel:
    """Email delivery bounded by a timeout.

    The send runs on a shared thread pool. When it takes longer than
    ``timeout`` seconds the attempt is reported as failed and the send keeps
    running in the background.
    """

    def __init__(
        self,
        *,
        sender: EmailSender = send_notification_email,
        timeout: float | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._sender = sender
        self._timeout = timeout if timeout is not None else get_settings().email_timeout_seconds
        self._executor = executor or _email_executor

    def send(
        self,
        to_address: str,
        subject: str,
        recipient_name: str,
        link: str,
        body_text: str,
    ) -> ChannelResult:
        try:
            future = self._executor.submit(
                self._sender, to_address, subject, recipient_name, link, body_text
            )
            delivered = future.result(timeout=self._timeout)
        except FuturesTimeoutError:
            logger.warning(
                "El envío de correo a %s excedió %s segundos; continúa en segundo plano",
                to_address,
                self._timeout,
            )
            return ChannelResult.failed(CHANNEL_EMAIL, "timeout")
        except Exception as exc:
            logger.error("Error enviando correo a %s: %s", to_address, exc, exc_info=True)
            return ChannelResult.failed(CHANNEL_EMAIL, str(exc))

        if not delivered:
            return ChannelResult.failed(CHANNEL_EMAIL, "correo no enviado")
        return ChannelResult.sent(CHANNEL_EMAIL)


__all__ = ["EmailChannel", "EmailSender", "PushChannel"]
