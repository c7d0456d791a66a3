"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
)
from .formatting import (
    AMOUNT_PLACEHOLDER,
    format_amount,
    format_money,
    format_short_date,
    html_to_plain_text,
    parse_amount,
)

__all__ = [
    "AMOUNT_PLACEHOLDER",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "format_amount",
    "format_money",
    "format_short_date",
    "get_app_timezone",
    "html_to_plain_text",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "parse_amount",
]
