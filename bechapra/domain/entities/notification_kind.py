"""Notification kinds and priority levels."""

from __future__ import annotations

from enum import Enum


class NotificationKind(str, Enum):
    """Domain events that produce notifications."""

    SOLICITUD_CREADA = "solicitud_creada"
    SOLICITUD_APROBADA = "solicitud_aprobada"
    SOLICITUD_RECHAZADA = "solicitud_rechazada"
    SOLICITUD_PAGADA = "solicitud_pagada"
    SOLICITUD_ACTUALIZADA = "solicitud_actualizada"
    SOLICITUD_ELIMINADA = "solicitud_eliminada"

    VIATICO_CREADO = "viatico_creado"
    VIATICO_APROBADO = "viatico_aprobado"
    VIATICO_RECHAZADO = "viatico_rechazado"
    VIATICO_PAGADO = "viatico_pagado"

    RECURRENTE_CREADA = "recurrente_creada"
    RECURRENTE_APROBADA = "recurrente_aprobada"
    RECURRENTE_RECHAZADA = "recurrente_rechazada"
    RECURRENTE_EJECUTADA = "recurrente_ejecutada"

    COMPROBANTE_SUBIDO = "comprobante_subido"
    COMPROBANTE_APROBADO = "comprobante_aprobado"
    COMPROBANTE_RECHAZADO = "comprobante_rechazado"

    USUARIO_CREADO = "usuario_creado"
    USUARIO_ACTUALIZADO = "usuario_actualizado"
    USUARIO_ELIMINADO = "usuario_eliminado"
    USUARIO_BIENVENIDA = "usuario_bienvenida"

    SISTEMA_MANTENIMIENTO = "sistema_mantenimiento"
    SISTEMA_ALERTA = "sistema_alerta"
    SISTEMA_ACCION = "sistema_accion"

    LOTE_APROBADO = "lote_aprobado"
    LOTE_RECHAZADO = "lote_rechazado"
    LOTE_PAGADO = "lote_pagado"


class NotificationPriority(str, Enum):
    """Urgency levels; they drive email escalation and list ordering."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


PRIORITY_RANK: dict[str, int] = {
    NotificationPriority.CRITICAL.value: 1,
    NotificationPriority.HIGH.value: 2,
    NotificationPriority.NORMAL.value: 3,
    NotificationPriority.LOW.value: 4,
}
UNKNOWN_PRIORITY_RANK = 5


def coerce_kind(kind: NotificationKind | str) -> NotificationKind | str:
    """Return the :class:`NotificationKind` for ``kind`` or the raw string if unknown."""

    if isinstance(kind, NotificationKind):
        return kind
    try:
        return NotificationKind(str(kind))
    except ValueError:
        return str(kind)


def kind_value(kind: NotificationKind | str) -> str:
    """Return the persisted string value for ``kind``."""

    return kind.value if isinstance(kind, NotificationKind) else str(kind)


__all__ = [
    "NotificationKind",
    "NotificationPriority",
    "PRIORITY_RANK",
    "UNKNOWN_PRIORITY_RANK",
    "coerce_kind",
    "kind_value",
]
