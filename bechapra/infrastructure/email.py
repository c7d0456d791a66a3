"""Notification emails delivered through the SendGrid REST API."""

from __future__ import annotations

import html
import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from bechapra.config import get_settings

logger = logging.getLogger(__name__)


def _describe_sendgrid_body(body: Any) -> str | None:
    """Summarise a SendGrid error payload as ``message (help: url)`` items."""

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body
    if not body:
        return None

    errors = body.get("errors") if isinstance(body, dict) else body
    if isinstance(errors, list):
        items = []
        for error in errors:
            if isinstance(error, dict) and error.get("message"):
                help_link = error.get("help")
                items.append(
                    f"{error['message']} (help: {help_link})" if help_link else str(error["message"])
                )
            elif not isinstance(error, dict):
                items.append(str(error))
        if items:
            return "; ".join(items)
    try:
        return json.dumps(body)
    except (TypeError, ValueError):
        return None


def _log_sendgrid_failure(status_code: Any, body: Any) -> None:
    details = _describe_sendgrid_body(body)
    if status_code and details:
        logger.error("SendGrid respondió con status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid respondió con status %s", status_code)
    else:
        logger.error("Falló la llamada a SendGrid: %s", details or "sin detalle")


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid sin configurar; se omite el correo a %s", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        status_code = getattr(exc, "status_code", None)
        body = getattr(exc, "body", None)
        if status_code is None and body is None:
            logger.exception("Error enviando correo con SendGrid: %s", exc)
        else:
            _log_sendgrid_failure(status_code, body)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(status_code, getattr(response, "body", None))
        return False

    logger.info("Correo '%s' enviado a %s", subject, recipient)
    return True


def render_notification_email(recipient_name: str, link: str, body_text: str) -> str:
    """Wrap a plain-text notification body in the notification email layout."""

    paragraphs = "<br>".join(html.escape(line) for line in body_text.splitlines())
    safe_name = html.escape(recipient_name or "")
    safe_link = html.escape(link or "", quote=True)
    parts = [
        f"<p>Hola {safe_name},</p>" if safe_name else "<p>Hola,</p>",
        f"<p>{paragraphs}</p>",
    ]
    if safe_link:
        parts.append(
            f'<p>Consulta el detalle en <a href="{safe_link}">{safe_link}</a>.</p>'
        )
    parts.append("<p>Este es un mensaje automático, por favor no respondas a este correo.</p>")
    return "".join(parts)


def send_notification_email(
    to_address: str,
    subject: str,
    recipient_name: str,
    link: str,
    body_text: str,
) -> bool:
    """Send a notification whose body has already been reduced to plain text."""

    if not to_address:
        logger.warning("Notificación sin correo de destino; se omite el envío")
        return False
    html_content = render_notification_email(recipient_name, link, body_text)
    return send_email(subject, html_content, to_address)


__all__ = [
    "render_notification_email",
    "send_email",
    "send_notification_email",
]
