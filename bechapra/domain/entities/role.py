"""Domain entity representing a user role."""

from dataclasses import dataclass

ROLE_ADMIN_GENERAL = "admin_general"
ROLE_REQUESTER = "solicitante"
ROLE_APPROVER = "aprobador"
ROLE_PAYER = "pagador_banca"

ROLE_ALIASES = (ROLE_ADMIN_GENERAL, ROLE_REQUESTER, ROLE_APPROVER, ROLE_PAYER)

ROLE_LABELS = {
    ROLE_ADMIN_GENERAL: "Administrador",
    ROLE_REQUESTER: "Solicitante",
    ROLE_APPROVER: "Aprobador",
    ROLE_PAYER: "Pagador",
}


@dataclass
class Role:
    """Core attributes describing a role that can be assigned to a user."""

    id: int
    name: str
    alias: str


__all__ = [
    "ROLE_ADMIN_GENERAL",
    "ROLE_ALIASES",
    "ROLE_APPROVER",
    "ROLE_LABELS",
    "ROLE_PAYER",
    "ROLE_REQUESTER",
    "Role",
]
