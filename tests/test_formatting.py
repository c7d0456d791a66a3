"""Tests for the message formatting helpers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from bechapra.utils import (
    AMOUNT_PLACEHOLDER,
    format_amount,
    format_money,
    format_short_date,
    html_to_plain_text,
    parse_amount,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1500, "1,500"),
        (1234.5, "1,234.5"),
        ("2500000", "2,500,000"),
        ("$1,200.75", "1,200.75"),
        (Decimal("0.1234"), "0.123"),
        (0, "0"),
        (-0.0001, "0"),
    ],
)
def test_format_amount_groups_digits(value, expected) -> None:
    assert format_amount(value) == expected


@pytest.mark.parametrize("value", [None, "", "abc", True, float("nan"), object()])
def test_format_amount_placeholder_for_non_numeric(value) -> None:
    assert format_amount(value) == AMOUNT_PLACEHOLDER


def test_format_money_prefixes_currency_symbol() -> None:
    assert format_money(1500) == "$1,500"
    assert format_money(None) == AMOUNT_PLACEHOLDER


def test_parse_amount_rejects_booleans() -> None:
    assert parse_amount(False) is None
    assert parse_amount("3.5") == Decimal("3.5")


def test_format_short_date_has_no_padding() -> None:
    assert format_short_date(date(2024, 3, 5)) == "5/3/2024"


def test_html_to_plain_text_keeps_line_breaks() -> None:
    message = "✅ <strong>Ana</strong> aprobó<br>💰 <strong>Monto:</strong> $1,500<BR/>fin"

    assert html_to_plain_text(message) == "✅ Ana aprobó\n💰 Monto: $1,500\nfin"
    assert html_to_plain_text("") == ""


def test_html_to_plain_text_restores_escaped_characters() -> None:
    message = "📋 <strong>Concepto:</strong> Viaje &amp; hotel &lt;CDMX&gt;"

    assert html_to_plain_text(message) == "📋 Concepto: Viaje & hotel <CDMX>"


def test_format_amount_beyond_decimal_precision() -> None:
    assert format_amount(Decimal("1e30")) == "1,000,000,000,000,000,000,000,000,000,000"
    assert format_money(Decimal("1e30")).startswith("$1,000,000")
