"""Barcode / QR scan input: turn a captured code into a SKU search term."""

from typing import Optional

from gymfix.config import Config
from gymfix.database.models import Part


def sku_from_scan(code: str) -> str:
    """Normalise a scanned payload into a SKU.

    Labels printed by ``generate_part_labels`` encode ``GF:<sku>``; plain
    manufacturer barcodes are passed through trimmed and upper-cased.
    """
    value = code.strip()
    prefix = f"{Config.LABEL_PREFIX}:"
    if value.upper().startswith(prefix.upper()):
        value = value[len(prefix):]
    return value.strip().upper()


def find_scanned_part(repo, code: str) -> Optional[Part]:
    """Exact SKU match for a scan, or None (callers then filter by text)."""
    sku = sku_from_scan(code)
    if not sku:
        return None
    return repo.get_part_by_sku(sku)
