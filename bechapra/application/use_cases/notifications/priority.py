"""Static priority policy for notification kinds."""

from __future__ import annotations

from types import MappingProxyType

from bechapra.domain.entities import NotificationKind, NotificationPriority, coerce_kind

_K = NotificationKind
_P = NotificationPriority

DEFAULT_PRIORITY = _P.NORMAL

PRIORITY_POLICY = MappingProxyType(
    {
        _K.SOLICITUD_RECHAZADA: _P.HIGH,
        _K.SOLICITUD_PAGADA: _P.HIGH,
        _K.VIATICO_RECHAZADO: _P.HIGH,
        _K.VIATICO_PAGADO: _P.HIGH,
        _K.RECURRENTE_RECHAZADA: _P.HIGH,
        _K.COMPROBANTE_RECHAZADO: _P.HIGH,
        _K.LOTE_RECHAZADO: _P.HIGH,
        _K.LOTE_PAGADO: _P.HIGH,
        _K.SISTEMA_ALERTA: _P.CRITICAL,
        _K.USUARIO_CREADO: _P.LOW,
        _K.USUARIO_BIENVENIDA: _P.LOW,
    }
)


def classify_priority(kind: NotificationKind | str) -> NotificationPriority:
    """Return the priority of ``kind``; unmapped kinds are ``normal``."""

    return PRIORITY_POLICY.get(coerce_kind(kind), DEFAULT_PRIORITY)


def requires_email(priority: NotificationPriority | str) -> bool:
    """Return ``True`` when ``priority`` always escalates to email."""

    return str(getattr(priority, "value", priority)) in (_P.HIGH.value, _P.CRITICAL.value)


__all__ = ["DEFAULT_PRIORITY", "PRIORITY_POLICY", "classify_priority", "requires_email"]
