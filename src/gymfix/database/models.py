"""Data models for the persisted collections.

Records are stored as JSON arrays; each model knows how to turn itself
into the camelCase dict shape used on disk and back.
"""

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Optional

from gymfix.utils.constants import (
    JOB_PENDING,
    OPEN_JOB_STATUSES,
    PART_ASSEMBLY,
    PART_SINGLE,
    ROLE_TECHNICIAN,
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(word.title() for word in rest)


class _Record:
    """Shared camelCase (de)serialisation for flat dataclass records."""

    # Fields converted separately by subclasses
    _NESTED: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            if f.name in self._NESTED:
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            data[_camel(f.name)] = value
        return data

    @classmethod
    def _flat_kwargs(cls, data: dict) -> dict:
        kwargs = {}
        for f in fields(cls):
            if f.name in cls._NESTED:
                continue
            key = _camel(f.name)
            if key in data:
                kwargs[f.name] = data[key]
        return kwargs


@dataclass
class BomLine(_Record):
    part_id: str = ""
    quantity: int = 1

    @classmethod
    def from_dict(cls, data: dict) -> "BomLine":
        return cls(**cls._flat_kwargs(data))


@dataclass
class UsedPart(_Record):
    """One ``{partId, quantity}`` row of a job's used parts or picklist."""

    part_id: str = ""
    quantity: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "UsedPart":
        return cls(**cls._flat_kwargs(data))


@dataclass
class Part(_Record):
    _NESTED = ("bom",)

    id: str = ""
    name: str = ""
    sku: str = ""
    category: str = "MECHANICAL"
    type: str = PART_SINGLE
    quantity: int = 0
    min_level: int = 0
    price: float = 0.0
    location: str = ""
    bom: list[BomLine] = field(default_factory=list)

    @property
    def is_assembly(self) -> bool:
        return self.type == PART_ASSEMBLY

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_level

    @property
    def stock_value(self) -> float:
        return self.quantity * self.price

    def bom_quantity(self, part_id: str) -> int:
        """Units of *part_id* needed per assembled unit (0 if absent)."""
        for line in self.bom:
            if line.part_id == part_id:
                return line.quantity
        return 0

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.is_assembly:
            data["bom"] = [
                {"partId": line.part_id, "quantity": line.quantity}
                for line in self.bom
            ]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Part":
        part = cls(**cls._flat_kwargs(data))
        part.bom = [BomLine.from_dict(b) for b in data.get("bom") or []]
        return part


@dataclass
class ServiceJob(_Record):
    _NESTED = ("used_parts", "picklist")

    id: str = ""
    client_name: str = ""
    machine_model: str = ""
    description: str = ""
    status: str = JOB_PENDING
    date_created: str = ""
    technician_notes: Optional[str] = None
    used_parts: list[UsedPart] = field(default_factory=list)
    picklist: list[UsedPart] = field(default_factory=list)
    ai_analysis: Optional[str] = None
    assigned_technician_id: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_JOB_STATUSES

    def used_quantity(self, part_id: str) -> int:
        return _entry_quantity(self.used_parts, part_id)

    def picklist_quantity(self, part_id: str) -> int:
        return _entry_quantity(self.picklist, part_id)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["usedParts"] = [up.to_dict() for up in self.used_parts]
        data["picklist"] = [up.to_dict() for up in self.picklist]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ServiceJob":
        job = cls(**cls._flat_kwargs(data))
        job.used_parts = [
            UsedPart.from_dict(u) for u in data.get("usedParts") or []
        ]
        # Older snapshots have no picklist at all
        job.picklist = [
            UsedPart.from_dict(u) for u in data.get("picklist") or []
        ]
        return job


def _entry_quantity(entries: list[UsedPart], part_id: str) -> int:
    for entry in entries:
        if entry.part_id == part_id:
            return entry.quantity
    return 0


@dataclass
class ClientMachine(_Record):
    id: str = ""
    model: str = ""
    serial_number: str = ""
    install_date: str = ""
    warranty_until: str = ""

    def warranty_active(self, today: Optional[date] = None) -> bool:
        """True while *today* is before the warranty end date."""
        if not self.warranty_until:
            return False
        try:
            until = date.fromisoformat(self.warranty_until)
        except ValueError:
            return False
        return until > (today or date.today())

    @property
    def warranty_status(self) -> str:
        return "active" if self.warranty_active() else "expired"

    @classmethod
    def from_dict(cls, data: dict) -> "ClientMachine":
        return cls(**cls._flat_kwargs(data))


@dataclass
class Client(_Record):
    _NESTED = ("machines",)

    id: str = ""
    name: str = ""
    address: str = ""
    contact_person: str = ""
    phone: str = ""
    machines: list[ClientMachine] = field(default_factory=list)

    def get_machine(self, machine_id: str) -> Optional[ClientMachine]:
        for machine in self.machines:
            if machine.id == machine_id:
                return machine
        return None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["machines"] = [m.to_dict() for m in self.machines]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Client":
        client = cls(**cls._flat_kwargs(data))
        client.machines = [
            ClientMachine.from_dict(m) for m in data.get("machines") or []
        ]
        return client


@dataclass
class User(_Record):
    _NESTED = ("permissions",)

    id: str = ""
    name: str = ""
    email: str = ""
    password: str = ""
    role: str = ROLE_TECHNICIAN
    permissions: set[str] = field(default_factory=set)
    phone: str = ""
    position: str = ""

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["permissions"] = sorted(self.permissions)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        user = cls(**cls._flat_kwargs(data))
        user.permissions = set(data.get("permissions") or [])
        return user
