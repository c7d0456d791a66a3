"""Tests for the per-transition notification fan-out plans."""

from __future__ import annotations

from bechapra.application.use_cases.notifications import (
    ApprovedRequest,
    notify_batch_approved,
    notify_request_approved,
    notify_request_paid,
    notify_request_rejected,
    notify_user_created,
)
from bechapra.domain.entities import (
    ROLE_ADMIN_GENERAL,
    ROLE_APPROVER,
    ROLE_PAYER,
    ROLE_REQUESTER,
)

DETAILS = {"monto": 1500, "concepto": "viaje", "solicitante_nombre": "Carlos Ruiz"}


def _messages(repository, user) -> list[str]:
    return [item.message for item in repository.list_for_user(user.id)]


def test_request_approved_fan_out(dispatcher, make_user, notification_repository, email_channel) -> None:
    requester = make_user("Carlos Ruiz", ROLE_REQUESTER)
    approver = make_user("Laura Méndez", ROLE_APPROVER)
    payer = make_user("Pedro Banca", ROLE_PAYER)
    admin = make_user("Ana Admin", ROLE_ADMIN_GENERAL)

    outcomes = notify_request_approved(
        dispatcher, approver=approver, requester_id=requester.id, request_id=42, details=DETAILS
    )

    assert [outcome.status for outcome in outcomes] == ["delivered"] * 4
    assert "APROBADA" in _messages(notification_repository, requester)[0]
    assert "AUTORIZADA" in _messages(notification_repository, payer)[0]
    assert "aprobó la solicitud" in _messages(notification_repository, admin)[0]
    assert _messages(notification_repository, approver)[0].startswith("✅ Aprobaste")
    assert email_channel.addresses == ["carlos@example.com"]


def test_request_rejected_emails_requester(dispatcher, make_user, notification_repository, email_channel) -> None:
    requester = make_user("Carlos Ruiz", ROLE_REQUESTER)
    approver = make_user("Laura Méndez", ROLE_APPROVER)
    admin = make_user("Ana Admin", ROLE_ADMIN_GENERAL)

    outcomes = notify_request_rejected(
        dispatcher,
        approver=approver,
        requester_id=requester.id,
        request_id=42,
        details={**DETAILS, "comentario_aprobador": "Falta factura"},
    )

    assert len(outcomes) == 3
    assert "Falta factura" in _messages(notification_repository, requester)[0]
    assert "Falta factura" in _messages(notification_repository, admin)[0]
    # rejections are high priority, so every recipient is emailed
    assert sorted(email_channel.addresses) == [
        "ana@example.com",
        "carlos@example.com",
        "laura@example.com",
    ]


def test_request_paid_includes_optional_approver(dispatcher, make_user, notification_repository) -> None:
    requester = make_user("Carlos Ruiz", ROLE_REQUESTER)
    approver = make_user("Laura Méndez", ROLE_APPROVER)
    payer = make_user("Pedro Banca", ROLE_PAYER)
    make_user("Ana Admin", ROLE_ADMIN_GENERAL)

    with_approver = notify_request_paid(
        dispatcher,
        payer=payer,
        requester_id=requester.id,
        request_id=42,
        details=DETAILS,
        approver_id=approver.id,
    )
    without_approver = notify_request_paid(
        dispatcher, payer=payer, requester_id=requester.id, request_id=43, details=DETAILS
    )

    assert len(with_approver) == 4
    assert len(without_approver) == 3
    assert len(notification_repository.list_for_user(approver.id)) == 1
    assert "PAGADA" in _messages(notification_repository, requester)[0]


def test_batch_approved(dispatcher, make_user, notification_repository, email_channel) -> None:
    first = make_user("Carlos Ruiz", ROLE_REQUESTER)
    second = make_user("Diana Torres", ROLE_REQUESTER)
    approver = make_user("Laura Méndez", ROLE_APPROVER)
    payer = make_user("Pedro Banca", ROLE_PAYER)
    admin = make_user("Ana Admin", ROLE_ADMIN_GENERAL)

    outcomes = notify_batch_approved(
        dispatcher,
        approver=approver,
        requests=[
            ApprovedRequest(request_id=1, requester_id=first.id, details={"monto": 1500}),
            ApprovedRequest(request_id=2, requester_id=second.id, details={"monto": "300"}),
        ],
        comment="Presupuesto autorizado",
    )

    assert len(outcomes) == 4
    assert email_channel.addresses[:2] == ["carlos@example.com", "diana@example.com"]
    admin_message = _messages(notification_repository, admin)[0]
    assert "aprobó <strong>2</strong> solicitudes en lote" in admin_message
    assert "$1,800" in admin_message
    assert "fueron aprobadas para pago" in _messages(notification_repository, payer)[0]
    batch = notification_repository.list_for_user(admin.id)[0]
    assert batch.kind == "lote_aprobado"
    assert batch.entity_id == "1,2"


def test_batch_approved_with_no_requests(dispatcher, make_user) -> None:
    approver = make_user("Laura Méndez", ROLE_APPROVER)

    assert notify_batch_approved(dispatcher, approver=approver, requests=[]) == []


def test_user_created_by_admin(dispatcher, make_user, notification_repository, email_channel) -> None:
    admin = make_user("Ana Admin", ROLE_ADMIN_GENERAL)
    approver = make_user("Laura Méndez", ROLE_APPROVER)
    payer = make_user("Pedro Banca", ROLE_PAYER)
    new_user = make_user("Nuevo Usuario", ROLE_REQUESTER)

    outcomes = notify_user_created(dispatcher, creator=admin, new_user=new_user)

    assert len(outcomes) == 3
    assert _messages(notification_repository, new_user)[0].startswith("🎉 ¡Bienvenido/a")
    assert "nuevo@example.com" in _messages(notification_repository, admin)[0]
    assert "nuevo solicitante" in _messages(notification_repository, approver)[0]
    assert notification_repository.list_for_user(payer.id) == []
    assert email_channel.addresses == ["nuevo@example.com"]


def test_user_created_by_non_admin_emails_admins(dispatcher, make_user, notification_repository, email_channel) -> None:
    make_user("Ana Admin", ROLE_ADMIN_GENERAL)
    creator = make_user("Laura Méndez", ROLE_APPROVER)
    payer = make_user("Pedro Banca", ROLE_PAYER)
    new_user = make_user("Nuevo Aprobador", ROLE_APPROVER)

    notify_user_created(dispatcher, creator=creator, new_user=new_user)

    assert email_channel.addresses == ["nuevo@example.com", "ana@example.com"]
    assert "nuevo aprobador" in _messages(notification_repository, payer)[0]
