"""Repository layer: in-memory collections mirrored to the store."""

import json
import logging
import sqlite3
from datetime import date
from typing import Optional

from gymfix.config import Config
from gymfix.errors import NotFound, ValidationFailed
from gymfix.utils.constants import (
    COLLECTION_CLIENTS,
    COLLECTION_JOBS,
    COLLECTION_KEYS,
    COLLECTION_PARTS,
    COLLECTION_USERS,
    JOB_STATUSES,
    PART_ASSEMBLY,
    PART_CATEGORIES,
    PART_SINGLE,
    PART_TYPES,
    PERMISSION_KEYS,
    USER_ROLES,
)

from .connection import DatabaseConnection
from .models import Client, ClientMachine, Part, ServiceJob, User
from .seed import default_records

logger = logging.getLogger(__name__)

_MODELS = {
    COLLECTION_USERS: User,
    COLLECTION_PARTS: Part,
    COLLECTION_JOBS: ServiceJob,
    COLLECTION_CLIENTS: Client,
}


def _next_id(prefix: str, records: list) -> str:
    """Generate the next id like ``p8`` from the highest numeric suffix."""
    highest = 0
    for record in records:
        suffix = record.id[len(prefix):] if record.id.startswith(prefix) else ""
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1}"


def _matches(query: str, *values: Optional[str]) -> bool:
    needle = query.strip().lower()
    return any(needle in (v or "").lower() for v in values)


def is_whole(value) -> bool:
    """True for a plain int; bools and floats are not stock counts."""
    return isinstance(value, int) and not isinstance(value, bool)


class Repository:
    """Owns the users, parts, jobs and clients collections.

    Every mutation goes through ``save()`` which overwrites the changed
    collections in full. A failed write is logged and the in-memory
    state stays authoritative for the rest of the session.
    """

    def __init__(self, db: DatabaseConnection):
        self.db = db
        self.users: list[User] = []
        self.parts: list[Part] = []
        self.jobs: list[ServiceJob] = []
        self.clients: list[Client] = []
        self.load()

    # ── Persistence ─────────────────────────────────────────────

    def _load_collection(self, key: str) -> list:
        model = _MODELS[key]
        try:
            records = self.db.read_collection(key)
        except (sqlite3.Error, json.JSONDecodeError):
            logger.exception("Failed to load %s, using defaults", key)
            records = None
        if records is None:
            records = default_records(key)
        return [model.from_dict(r) for r in records]

    def load(self):
        """(Re)load every collection, falling back to the factory data."""
        self.users = self._load_collection(COLLECTION_USERS)
        self.parts = self._load_collection(COLLECTION_PARTS)
        self.jobs = self._load_collection(COLLECTION_JOBS)
        self.clients = self._load_collection(COLLECTION_CLIENTS)

    def _collection(self, key: str) -> list:
        return {
            COLLECTION_USERS: self.users,
            COLLECTION_PARTS: self.parts,
            COLLECTION_JOBS: self.jobs,
            COLLECTION_CLIENTS: self.clients,
        }[key]

    def save(self, *keys: str) -> bool:
        """Write the named collections through to the store.

        Returns False when the write failed; the failure is only logged.
        """
        keys = keys or tuple(COLLECTION_KEYS)
        snapshots = {
            key: [record.to_dict() for record in self._collection(key)]
            for key in keys
        }
        try:
            self.db.write_collections(snapshots)
        except (sqlite3.Error, OSError):
            logger.exception("Failed to persist %s", ", ".join(keys))
            return False
        return True

    def reset_to_defaults(self):
        """Restore factory data: clear stored snapshots and reload seeds."""
        self.db.clear_collections()
        self.load()
        logger.info("Restored factory data")

    # ── Parts ───────────────────────────────────────────────────

    def get_all_parts(self) -> list[Part]:
        return list(self.parts)

    def get_part(self, part_id: str) -> Optional[Part]:
        for part in self.parts:
            if part.id == part_id:
                return part
        return None

    def require_part(self, part_id: str) -> Part:
        part = self.get_part(part_id)
        if part is None:
            raise NotFound("Part", part_id)
        return part

    def get_part_by_sku(self, sku: str) -> Optional[Part]:
        sku = sku.strip().lower()
        for part in self.parts:
            if part.sku.lower() == sku:
                return part
        return None

    def search_parts(self, query: str) -> list[Part]:
        """Filter parts by name or SKU, case-insensitive."""
        if not query.strip():
            return self.get_all_parts()
        return [p for p in self.parts if _matches(query, p.name, p.sku)]

    def get_parts_by_type(self, part_type: str) -> list[Part]:
        return [p for p in self.parts if p.type == part_type]

    def get_low_stock_parts(self) -> list[Part]:
        low = [p for p in self.parts if p.is_low_stock]
        return sorted(low, key=lambda p: p.quantity - p.min_level)

    def validate_part(self, part: Part):
        """Raise ValidationFailed unless *part* can be stored as-is."""
        if not part.name.strip() or not part.sku.strip():
            raise ValidationFailed("Part name and SKU are required")
        if part.category not in PART_CATEGORIES:
            raise ValidationFailed(f"Unknown category {part.category!r}")
        if part.type not in PART_TYPES:
            raise ValidationFailed(f"Unknown part type {part.type!r}")
        if not (is_whole(part.quantity) and is_whole(part.min_level)):
            raise ValidationFailed("Quantities must be whole numbers")
        if (isinstance(part.price, bool)
                or not isinstance(part.price, (int, float))):
            raise ValidationFailed(
                f"Price must be a number, not {part.price!r}"
            )
        if part.quantity < 0 or part.min_level < 0:
            raise ValidationFailed("Quantities cannot be negative")
        if part.price < 0:
            raise ValidationFailed("Price cannot be negative")
        if part.type == PART_SINGLE:
            if part.bom:
                raise ValidationFailed("Only assemblies carry a BOM")
            return

        if not part.bom:
            raise ValidationFailed("An assembly needs at least one component")
        seen = set()
        for line in part.bom:
            if line.part_id == part.id:
                raise ValidationFailed("An assembly cannot contain itself")
            if line.part_id in seen:
                raise ValidationFailed(
                    f"Component {line.part_id} is listed twice"
                )
            seen.add(line.part_id)
            if not is_whole(line.quantity) or line.quantity < 1:
                raise ValidationFailed(
                    f"Component {line.part_id} needs a quantity of at least 1"
                )
            component = self.require_part(line.part_id)
            if component.type != PART_SINGLE:
                raise ValidationFailed(
                    f"Component {component.name} is an assembly; "
                    f"nested assemblies are not supported"
                )

    def create_part(self, part: Part) -> str:
        if not part.location.strip():
            part.location = Config.DEFAULT_LOCATION
        self.validate_part(part)
        part.id = _next_id("p", self.parts)
        self.parts.append(part)
        self.save(COLLECTION_PARTS)
        logger.info("Created part %s (%s)", part.id, part.sku)
        return part.id

    def update_part(self, part: Part):
        """Replace the stored part with the same id.

        *part* must be a separate copy; the stored record stays untouched
        when validation fails.
        """
        for index, existing in enumerate(self.parts):
            if existing.id == part.id:
                break
        else:
            raise NotFound("Part", part.id)
        if part is existing:
            raise ValidationFailed(
                f"Edit a copy of part {part.id}, not the stored record"
            )
        if part.type == PART_SINGLE and existing.type == PART_ASSEMBLY:
            part.bom = []
        self.validate_part(part)
        if part.type == PART_ASSEMBLY:
            users = [
                p.name for p in self.parts
                if p.id != part.id and p.bom_quantity(part.id)
            ]
            if users:
                raise ValidationFailed(
                    f"{part.name} is a component of {', '.join(users)} "
                    f"and cannot become an assembly"
                )
        self.parts[index] = part
        self.save(COLLECTION_PARTS)
        logger.info("Updated part %s", part.id)

    # ── Jobs ────────────────────────────────────────────────────

    def get_all_jobs(self, status: Optional[str] = None) -> list[ServiceJob]:
        if status and status != "all":
            if status not in JOB_STATUSES:
                raise ValidationFailed(f"Unknown job status {status!r}")
            return [j for j in self.jobs if j.status == status]
        return list(self.jobs)

    def get_job(self, job_id: str) -> Optional[ServiceJob]:
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    def require_job(self, job_id: str) -> ServiceJob:
        job = self.get_job(job_id)
        if job is None:
            raise NotFound("Job", job_id)
        return job

    def add_job(self, job: ServiceJob) -> str:
        """Store a new job at the top of the list (newest first)."""
        job.id = _next_id("j", self.jobs)
        self.jobs.insert(0, job)
        self.save(COLLECTION_JOBS)
        return job.id

    def get_open_jobs(self) -> list[ServiceJob]:
        return [j for j in self.jobs if j.is_open]

    # ── Clients ─────────────────────────────────────────────────

    def get_all_clients(self) -> list[Client]:
        return list(self.clients)

    def get_client(self, client_id: str) -> Optional[Client]:
        for client in self.clients:
            if client.id == client_id:
                return client
        return None

    def require_client(self, client_id: str) -> Client:
        client = self.get_client(client_id)
        if client is None:
            raise NotFound("Client", client_id)
        return client

    def search_clients(self, query: str) -> list[Client]:
        if not query.strip():
            return self.get_all_clients()
        return [c for c in self.clients if _matches(query, c.name)]

    def create_client(self, client: Client) -> str:
        if not client.name.strip():
            raise ValidationFailed("Client name is required")
        client.id = _next_id("c", self.clients)
        client.machines = []
        self.clients.append(client)
        self.save(COLLECTION_CLIENTS)
        logger.info("Created client %s (%s)", client.id, client.name)
        return client.id

    def update_client(self, client: Client):
        """Update a client's contact details; machines are left untouched."""
        existing = self.require_client(client.id)
        if not client.name.strip():
            raise ValidationFailed("Client name is required")
        existing.name = client.name
        existing.address = client.address
        existing.contact_person = client.contact_person
        existing.phone = client.phone
        self.save(COLLECTION_CLIENTS)

    def add_machine(self, client_id: str, machine: ClientMachine) -> str:
        client = self.require_client(client_id)
        if not machine.model.strip() or not machine.serial_number.strip():
            raise ValidationFailed("Machine model and serial number are required")
        if not machine.install_date:
            machine.install_date = date.today().isoformat()
        all_machines = [m for c in self.clients for m in c.machines]
        machine.id = _next_id("m", all_machines)
        client.machines.append(machine)
        self.save(COLLECTION_CLIENTS)
        logger.info("Added machine %s to client %s", machine.id, client_id)
        return machine.id

    # ── Users ───────────────────────────────────────────────────

    def get_all_users(self) -> list[User]:
        return list(self.users)

    def get_user(self, user_id: str) -> Optional[User]:
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def require_user(self, user_id: str) -> User:
        user = self.get_user(user_id)
        if user is None:
            raise NotFound("User", user_id)
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        for user in self.users:
            if user.email.lower() == email:
                return user
        return None

    def search_users(self, query: str) -> list[User]:
        if not query.strip():
            return self.get_all_users()
        return [
            u for u in self.users
            if _matches(query, u.name, u.email, u.position)
        ]

    def user_count(self) -> int:
        return len(self.users)

    def _validate_user(self, user: User):
        if not user.name.strip() or not user.email.strip():
            raise ValidationFailed("User name and email are required")
        if user.role not in USER_ROLES:
            raise ValidationFailed(f"Unknown role {user.role!r}")
        unknown = set(user.permissions) - set(PERMISSION_KEYS)
        if unknown:
            raise ValidationFailed(
                f"Unknown permissions: {', '.join(sorted(unknown))}"
            )
        other = self.get_user_by_email(user.email)
        if other is not None and other.id != user.id:
            raise ValidationFailed(f"Email {user.email} is already in use")

    def create_user(self, user: User) -> str:
        if not user.password:
            raise ValidationFailed("A password is required for new users")
        user.id = ""
        self._validate_user(user)
        user.id = _next_id("u", self.users)
        self.users.append(user)
        self.save(COLLECTION_USERS)
        logger.info("Created user %s (%s)", user.id, user.email)
        return user.id

    def update_user(self, user: User):
        """Replace the stored account; an empty password keeps the old one."""
        existing = self.require_user(user.id)
        self._validate_user(user)
        if not user.password:
            user.password = existing.password
        index = self.users.index(existing)
        self.users[index] = user
        self.save(COLLECTION_USERS)
        logger.info("Updated user %s", user.id)

    def delete_user(self, user_id: str):
        user = self.require_user(user_id)
        self.users.remove(user)
        self.save(COLLECTION_USERS)
        logger.info("Deleted user %s", user_id)

    # ── Dashboard ───────────────────────────────────────────────

    def get_dashboard_summary(self) -> dict:
        return {
            "total_parts": len(self.parts),
            "low_stock": len(self.get_low_stock_parts()),
            "open_jobs": len(self.get_open_jobs()),
            "clients": len(self.clients),
            "stock_value": sum(p.stock_value for p in self.parts),
        }
