"""Tests for display formatters."""

from gymfix.database.models import ClientMachine
from gymfix.utils.formatters import (
    format_currency,
    format_quantity,
    format_warranty,
)


def test_format_currency():
    assert format_currency(1200) == "1 200,00 zł"
    assert format_currency(25.5) == "25,50 zł"
    assert format_currency(0) == "0,00 zł"


def test_format_quantity_flags_low_stock():
    assert format_quantity(5, 5) == "5 (LOW)"
    assert format_quantity(6, 5) == "6"
    assert format_quantity(0) == "0 (LOW)"


def test_format_warranty():
    assert format_warranty(ClientMachine(warranty_until="2999-01-01")) == \
        "Aktywna (2999-01-01)"
    assert format_warranty(ClientMachine(warranty_until="2020-01-01")) == \
        "Wygasła (2020-01-01)"
    assert format_warranty(ClientMachine()) == "Wygasła (-)"
