"""Tests for scan input normalisation."""

import pytest

from gymfix.config import Config
from gymfix.io.scanner import find_scanned_part, sku_from_scan


@pytest.mark.parametrize("code, expected", [
    ("GF:BRG-6004", "BRG-6004"),
    ("gf:brg-6004", "BRG-6004"),
    ("  KIT-ROL-01\n", "KIT-ROL-01"),
    ("5901234123457", "5901234123457"),
    ("GF:", ""),
])
def test_sku_from_scan(code, expected):
    assert sku_from_scan(code) == expected


def test_custom_prefix(monkeypatch):
    monkeypatch.setattr(Config, "LABEL_PREFIX", "GYM")
    assert sku_from_scan("GYM:LUB-SIL") == "LUB-SIL"
    assert sku_from_scan("GF:LUB-SIL") == "GF:LUB-SIL"


def test_find_label_scan(repo):
    assert find_scanned_part(repo, "GF:LUB-SIL").id == "p4"


def test_find_unknown_code(repo):
    assert find_scanned_part(repo, "0000") is None
    assert find_scanned_part(repo, "   ") is None
