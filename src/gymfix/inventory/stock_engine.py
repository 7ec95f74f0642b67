"""Stock engine: every quantity change on parts goes through here.

All preconditions are checked before the first write, so a refused
operation leaves parts and jobs exactly as they were. Consumption moves
one unit per call; batches are repeated calls.
"""

import logging

from gymfix.auth.session import Session
from gymfix.database.models import Part, ServiceJob, UsedPart
from gymfix.database.repository import Repository, is_whole
from gymfix.errors import (
    InsufficientAssemblies,
    InsufficientComponents,
    InsufficientStock,
    InvalidJobState,
    ValidationFailed,
)
from gymfix.utils.constants import (
    COLLECTION_JOBS,
    COLLECTION_PARTS,
    JOB_IN_PROGRESS,
    JOB_STATUS_LABELS,
    MANAGE_INVENTORY,
    MANAGE_JOBS,
    VIEW_INVENTORY,
)

logger = logging.getLogger(__name__)


class StockEngine:
    def __init__(self, repo: Repository, session: Session):
        self.repo = repo
        self.session = session

    # ── Receipts & corrections ──────────────────────────────────

    def add_stock(self, part_id: str, amount: int) -> Part:
        """Add *amount* (may be negative for a correction) to a part.

        A correction below zero raises InsufficientStock.
        """
        self.session.require(MANAGE_INVENTORY)
        if not is_whole(amount):
            raise ValidationFailed(
                f"Stock amount must be a whole number, not {amount!r}"
            )
        part = self.repo.require_part(part_id)
        if part.quantity + amount < 0:
            raise InsufficientStock(part.name, part.quantity, -amount)
        part.quantity += amount
        self.repo.save(COLLECTION_PARTS)
        logger.info("Stock %s %+d -> %d", part.sku, amount, part.quantity)
        return part

    # ── Job consumption ─────────────────────────────────────────

    def _active_job(self, job_id: str) -> ServiceJob:
        job = self.repo.require_job(job_id)
        if job.status != JOB_IN_PROGRESS:
            raise InvalidJobState(
                f"Parts can only be booked on a job in progress; "
                f"job {job_id} is {JOB_STATUS_LABELS[job.status]}"
            )
        return job

    def consume_for_job(self, job_id: str, part_id: str) -> UsedPart:
        """Debit one unit of *part_id* and record it on the job."""
        self.session.require(MANAGE_JOBS)
        job = self._active_job(job_id)
        part = self.repo.require_part(part_id)
        if part.quantity <= 0:
            raise InsufficientStock(part.name, part.quantity, 1)

        part.quantity -= 1
        for entry in job.used_parts:
            if entry.part_id == part_id:
                entry.quantity += 1
                break
        else:
            entry = UsedPart(part_id=part_id, quantity=1)
            job.used_parts.append(entry)
        self.repo.save(COLLECTION_PARTS, COLLECTION_JOBS)
        logger.info("Job %s used 1x %s (%d left)", job_id, part.sku,
                    part.quantity)
        return entry

    def return_from_job(self, job_id: str, part_id: str) -> bool:
        """Credit one unit back from the job's used parts.

        Returns False (and changes nothing) when the job never used the part.
        """
        self.session.require(MANAGE_JOBS)
        job = self._active_job(job_id)
        for entry in job.used_parts:
            if entry.part_id == part_id:
                break
        else:
            return False
        part = self.repo.require_part(part_id)

        part.quantity += 1
        entry.quantity -= 1
        if entry.quantity == 0:
            job.used_parts.remove(entry)
        self.repo.save(COLLECTION_PARTS, COLLECTION_JOBS)
        logger.info("Job %s returned 1x %s", job_id, part.sku)
        return True

    # ── Assemblies ──────────────────────────────────────────────

    def _assembly(self, assembly_id: str, count: int) -> Part:
        if not is_whole(count) or count < 1:
            raise ValidationFailed(
                f"Count must be a whole number of at least 1, not {count!r}"
            )
        assembly = self.repo.require_part(assembly_id)
        if not assembly.is_assembly or not assembly.bom:
            raise ValidationFailed(
                f"{assembly.name} is not an assembly with a bill of materials"
            )
        return assembly

    def _components(self, assembly: Part) -> list[tuple[Part, int]]:
        return [
            (self.repo.require_part(line.part_id), line.quantity)
            for line in assembly.bom
        ]

    def max_buildable(self, assembly_id: str) -> int:
        """How many kits the current component stock could produce."""
        self.session.require(VIEW_INVENTORY)
        assembly = self._assembly(assembly_id, 1)
        return min(
            component.quantity // per_unit
            for component, per_unit in self._components(assembly)
        )

    def assemble(self, assembly_id: str, count: int) -> Part:
        """Build *count* kits, consuming their components."""
        self.session.require(MANAGE_INVENTORY)
        assembly = self._assembly(assembly_id, count)
        components = self._components(assembly)
        shortages = [
            (component.id, component.quantity, per_unit * count)
            for component, per_unit in components
            if component.quantity < per_unit * count
        ]
        if shortages:
            raise InsufficientComponents(assembly.name, shortages)

        for component, per_unit in components:
            component.quantity -= per_unit * count
        assembly.quantity += count
        self.repo.save(COLLECTION_PARTS)
        logger.info("Assembled %dx %s", count, assembly.sku)
        return assembly

    def disassemble(self, assembly_id: str, count: int) -> Part:
        """Dismantle *count* kits, returning components to stock."""
        self.session.require(MANAGE_INVENTORY)
        assembly = self._assembly(assembly_id, count)
        if assembly.quantity < count:
            raise InsufficientAssemblies(
                assembly.name, assembly.quantity, count
            )
        components = self._components(assembly)

        assembly.quantity -= count
        for component, per_unit in components:
            component.quantity += per_unit * count
        self.repo.save(COLLECTION_PARTS)
        logger.info("Disassembled %dx %s", count, assembly.sku)
        return assembly
