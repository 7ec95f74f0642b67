"""Formatting utilities for display values."""

from gymfix.database.models import ClientMachine


def format_currency(value: float) -> str:
    """Format a float as PLN, e.g. ``1 200,00 zł``."""
    whole = f"{value:,.2f}".replace(",", " ").replace(".", ",")
    return f"{whole} zł"


def format_quantity(value: int, min_level: int = 0) -> str:
    """Format quantity, flagging stock at or below the reorder level."""
    if value <= min_level:
        return f"{value} (LOW)"
    return str(value)


def format_warranty(machine: ClientMachine) -> str:
    if machine.warranty_active():
        return f"Aktywna ({machine.warranty_until})"
    return f"Wygasła ({machine.warranty_until or '-'})"
