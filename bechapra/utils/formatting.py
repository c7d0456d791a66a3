"""Formatting helpers for rendered notification messages."""

from __future__ import annotations

import html
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Final

AMOUNT_PLACEHOLDER: Final[str] = "N/D"

_MAX_FRACTION = Decimal("0.001")
_LINE_BREAK_PATTERN: Final[re.Pattern[str]] = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"<[^>]*>")


def parse_amount(value: Any) -> Decimal | None:
    """Return ``value`` as a finite :class:`Decimal` or ``None`` when it is not numeric."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "").lstrip("$").strip()
        if not cleaned:
            return None
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite():
        return None
    return amount


def format_amount(value: Any) -> str:
    """Format ``value`` with es-MX digit grouping (``1,500`` / ``1,234.5``).

    Up to three fraction digits are kept and trailing zeros are dropped. Values
    that cannot be read as a number yield :data:`AMOUNT_PLACEHOLDER`.
    """

    amount = parse_amount(value)
    if amount is None:
        return AMOUNT_PLACEHOLDER

    try:
        quantized = amount.quantize(_MAX_FRACTION, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the decimal context holds; render it unrounded.
        return f"{amount:,f}"
    rendered = f"{quantized:,.3f}"
    integer_part, _, fraction = rendered.partition(".")
    fraction = fraction.rstrip("0")
    if integer_part == "-0" and not fraction:
        integer_part = "0"
    return f"{integer_part}.{fraction}" if fraction else integer_part


def format_money(value: Any) -> str:
    """Return ``value`` formatted as a peso amount (``$1,500``)."""

    rendered = format_amount(value)
    if rendered == AMOUNT_PLACEHOLDER:
        return rendered
    return f"${rendered}"


def format_short_date(value: date | datetime) -> str:
    """Render ``value`` the way es-MX short dates read (``18/10/2026``)."""

    return f"{value.day}/{value.month}/{value.year}"


def html_to_plain_text(message: str) -> str:
    """Strip the lightweight markup used in notification messages.

    ``<br>`` tags become newlines, every other tag is removed and escaped
    characters such as ``&amp;`` are restored.
    """

    if not message:
        return ""
    with_breaks = _LINE_BREAK_PATTERN.sub("\n", message)
    return html.unescape(_TAG_PATTERN.sub("", with_breaks))


__all__ = [
    "AMOUNT_PLACEHOLDER",
    "format_amount",
    "format_money",
    "format_short_date",
    "html_to_plain_text",
    "parse_amount",
]
