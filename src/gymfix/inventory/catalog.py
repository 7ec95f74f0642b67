"""Part catalog and client registry entry points, permission-gated."""

import copy
from dataclasses import replace
from typing import Optional

from gymfix.auth.session import Session
from gymfix.database.models import BomLine, Client, ClientMachine, Part
from gymfix.database.repository import Repository
from gymfix.errors import PermissionDenied, ValidationFailed
from gymfix.utils.constants import (
    EDIT_PRICES,
    MANAGE_CLIENTS,
    MANAGE_INVENTORY,
    PART_ASSEMBLY,
    VIEW_CLIENTS,
    VIEW_INVENTORY,
)


class CatalogService:
    def __init__(self, repo: Repository, session: Session):
        self.repo = repo
        self.session = session

    # ── Parts ───────────────────────────────────────────────────

    def list_parts(self, query: str = "") -> list[Part]:
        """Matching parts as detached copies.

        Edit a copy and hand it to ``update_part``; the stored records only
        change through the gated write paths.
        """
        self.session.require(VIEW_INVENTORY)
        return [copy.deepcopy(p) for p in self.repo.search_parts(query)]

    def get_part(self, part_id: str) -> Part:
        self.session.require(VIEW_INVENTORY)
        return copy.deepcopy(self.repo.require_part(part_id))

    def create_part(self, part: Part) -> Part:
        """Add a part to the catalog.

        A non-zero price needs EDIT_PRICES on top of MANAGE_INVENTORY.
        """
        self.session.require(MANAGE_INVENTORY)
        if part.price and not self.session.has_permission(EDIT_PRICES):
            raise PermissionDenied(EDIT_PRICES, self.session.current_user.name)
        self.repo.create_part(part)
        return part

    def create_assembly(self, name: str, sku: str,
                        components: list[tuple[str, int]],
                        **fields) -> Part:
        """Shortcut for an ASSEMBLY part from ``(part_id, qty)`` pairs."""
        part = Part(
            name=name, sku=sku, type=PART_ASSEMBLY,
            bom=[BomLine(part_id=pid, quantity=qty) for pid, qty in components],
            **fields,
        )
        return self.create_part(part)

    def update_part(self, part: Part) -> Part:
        """Replace a stored part with an edited copy.

        A changed price needs EDIT_PRICES. Passing the stored object itself
        is refused since its old values are already gone.
        """
        self.session.require(MANAGE_INVENTORY)
        existing = self.repo.require_part(part.id)
        if part is existing:
            raise ValidationFailed(
                f"Edit a copy of part {part.id}, not the stored record"
            )
        if (part.price != existing.price
                and not self.session.has_permission(EDIT_PRICES)):
            raise PermissionDenied(EDIT_PRICES, self.session.current_user.name)
        self.repo.update_part(part)
        return part

    def set_price(self, part_id: str, price: float) -> Part:
        self.session.require(EDIT_PRICES)
        part = self.repo.require_part(part_id)
        updated = replace(copy.deepcopy(part), price=price)
        self.repo.update_part(updated)
        return updated

    # ── Clients ─────────────────────────────────────────────────

    def list_clients(self, query: str = "") -> list[Client]:
        self.session.require(VIEW_CLIENTS)
        return self.repo.search_clients(query)

    def create_client(self, name: str, address: str = "",
                      contact_person: str = "", phone: str = "") -> Client:
        self.session.require(MANAGE_CLIENTS)
        client = Client(
            name=name, address=address,
            contact_person=contact_person, phone=phone,
        )
        self.repo.create_client(client)
        return client

    def update_client(self, client: Client):
        self.session.require(MANAGE_CLIENTS)
        self.repo.update_client(client)

    def add_machine(self, client_id: str, model: str, serial_number: str,
                    install_date: str = "",
                    warranty_until: Optional[str] = None) -> ClientMachine:
        self.session.require(MANAGE_CLIENTS)
        machine = ClientMachine(
            model=model, serial_number=serial_number,
            install_date=install_date, warranty_until=warranty_until or "",
        )
        self.repo.add_machine(client_id, machine)
        return machine
