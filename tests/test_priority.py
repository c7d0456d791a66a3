"""Tests for the notification priority policy."""

from __future__ import annotations

import pytest

from bechapra.application.use_cases.notifications.priority import (
    classify_priority,
    requires_email,
)
from bechapra.domain.entities import NotificationKind, NotificationPriority


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (NotificationKind.SOLICITUD_RECHAZADA, NotificationPriority.HIGH),
        (NotificationKind.SOLICITUD_PAGADA, NotificationPriority.HIGH),
        (NotificationKind.VIATICO_RECHAZADO, NotificationPriority.HIGH),
        (NotificationKind.LOTE_PAGADO, NotificationPriority.HIGH),
        (NotificationKind.SISTEMA_ALERTA, NotificationPriority.CRITICAL),
        (NotificationKind.USUARIO_CREADO, NotificationPriority.LOW),
        (NotificationKind.USUARIO_BIENVENIDA, NotificationPriority.LOW),
        (NotificationKind.SOLICITUD_APROBADA, NotificationPriority.NORMAL),
        (NotificationKind.SOLICITUD_CREADA, NotificationPriority.NORMAL),
        (NotificationKind.SISTEMA_ACCION, NotificationPriority.NORMAL),
    ],
)
def test_classify_priority_policy(kind, expected) -> None:
    assert classify_priority(kind) is expected


def test_classify_priority_accepts_raw_strings() -> None:
    assert classify_priority("solicitud_rechazada") is NotificationPriority.HIGH
    assert classify_priority("algo_desconocido") is NotificationPriority.NORMAL


@pytest.mark.parametrize(
    ("priority", "expected"),
    [
        (NotificationPriority.LOW, False),
        (NotificationPriority.NORMAL, False),
        (NotificationPriority.HIGH, True),
        (NotificationPriority.CRITICAL, True),
        ("critical", True),
    ],
)
def test_requires_email_for_urgent_priorities(priority, expected) -> None:
    assert requires_email(priority) is expected
