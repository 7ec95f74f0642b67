"""Service job lifecycle, picklists and per-job part reports."""

import logging
from datetime import date
from typing import Optional

from gymfix.auth.session import Session
from gymfix.database.models import Part, ServiceJob, UsedPart
from gymfix.database.repository import Repository
from gymfix.errors import InvalidJobState, ValidationFailed
from gymfix.utils.constants import (
    COLLECTION_JOBS,
    JOB_CANCELED,
    JOB_COMPLETED,
    JOB_IN_PROGRESS,
    JOB_PENDING,
    JOB_STATUS_LABELS,
    JOB_TRANSITIONS,
    MANAGE_JOBS,
    VIEW_INVENTORY,
    VIEW_JOBS,
)

logger = logging.getLogger(__name__)


class JobLedger:
    def __init__(self, repo: Repository, session: Session):
        self.repo = repo
        self.session = session

    # ── Reads ───────────────────────────────────────────────────

    def list_jobs(self, status: Optional[str] = None) -> list[ServiceJob]:
        self.session.require(VIEW_JOBS)
        return self.repo.get_all_jobs(status)

    def get_job(self, job_id: str) -> ServiceJob:
        self.session.require(VIEW_JOBS)
        return self.repo.require_job(job_id)

    def _lines(self, entries: list[UsedPart]) -> list[tuple[UsedPart, Optional[Part]]]:
        # A part missing from the catalog still shows up, without details
        return [(entry, self.repo.get_part(entry.part_id)) for entry in entries]

    def used_part_lines(self, job_id: str):
        """Used-parts entries paired with their catalog part."""
        return self._lines(self.get_job(job_id).used_parts)

    def picklist_lines(self, job_id: str):
        """Picklist entries paired with their catalog part."""
        return self._lines(self.get_job(job_id).picklist)

    def job_parts_cost(self, job_id: str) -> float:
        """Flat price times quantity over the job's used parts."""
        return sum(
            entry.quantity * part.price
            for entry, part in self.used_part_lines(job_id)
            if part is not None
        )

    # ── Lifecycle ───────────────────────────────────────────────

    def create_job(self, client_name: str, machine_model: str,
                   description: str = "") -> ServiceJob:
        """Open a new PENDING job.

        Client name and machine model are copied onto the job as they
        are today; renaming the client later does not rewrite history.
        """
        self.session.require(MANAGE_JOBS)
        if not client_name.strip() or not machine_model.strip():
            raise ValidationFailed("Client and machine are required")
        job = ServiceJob(
            client_name=client_name,
            machine_model=machine_model,
            description=description,
            status=JOB_PENDING,
            date_created=date.today().isoformat(),
        )
        self.repo.add_job(job)
        logger.info("Created job %s for %s", job.id, client_name)
        return job

    def create_job_for_machine(self, client_id: str, machine_id: str,
                               description: str = "") -> ServiceJob:
        """Open a job from registry ids, snapshotting the names."""
        client = self.repo.require_client(client_id)
        machine = client.get_machine(machine_id)
        if machine is None:
            raise ValidationFailed(
                f"Machine {machine_id} does not belong to {client.name}"
            )
        return self.create_job(client.name, machine.model, description)

    def _transition(self, job: ServiceJob, status: str):
        if status not in JOB_TRANSITIONS.get(job.status, set()):
            raise InvalidJobState(
                f"Job {job.id} cannot go from "
                f"{JOB_STATUS_LABELS[job.status]} to "
                f"{JOB_STATUS_LABELS.get(status, status)}"
            )
        job.status = status

    def advance(self, job_id: str, status: str = JOB_IN_PROGRESS) -> ServiceJob:
        """Move a PENDING job to IN_PROGRESS."""
        self.session.require(MANAGE_JOBS)
        job = self.repo.require_job(job_id)
        if status != JOB_IN_PROGRESS:
            raise InvalidJobState(
                "Use finish() or cancel() for terminal statuses"
            )
        self._transition(job, status)
        self.repo.save(COLLECTION_JOBS)
        logger.info("Job %s started", job_id)
        return job

    def finish(self, job_id: str, notes: str) -> ServiceJob:
        """Complete the job and store the technician's notes.

        Stock is not touched; parts were debited as they were used.
        """
        self.session.require(MANAGE_JOBS)
        job = self.repo.require_job(job_id)
        self._transition(job, JOB_COMPLETED)
        job.technician_notes = notes
        self.repo.save(COLLECTION_JOBS)
        logger.info("Job %s completed", job_id)
        return job

    def cancel(self, job_id: str) -> ServiceJob:
        """Cancel an open job. Parts already used stay consumed."""
        self.session.require(MANAGE_JOBS)
        job = self.repo.require_job(job_id)
        self._transition(job, JOB_CANCELED)
        self.repo.save(COLLECTION_JOBS)
        logger.info("Job %s canceled", job_id)
        return job

    def assign_technician(self, job_id: str, user_id: str) -> ServiceJob:
        self.session.require(MANAGE_JOBS)
        job = self.repo.require_job(job_id)
        self.repo.require_user(user_id)
        job.assigned_technician_id = user_id
        self.repo.save(COLLECTION_JOBS)
        return job

    def record_analysis(self, job_id: str, text: str) -> ServiceJob:
        self.session.require(MANAGE_JOBS)
        job = self.repo.require_job(job_id)
        job.ai_analysis = text
        self.repo.save(COLLECTION_JOBS)
        return job

    # ── Picklist ────────────────────────────────────────────────

    def add_to_picklist(self, job_id: str, part_id: str) -> UsedPart:
        """Stage one more unit of a part for pickup. Stock is unchanged."""
        self.session.require(VIEW_INVENTORY)
        job = self.repo.require_job(job_id)
        self.repo.require_part(part_id)
        for entry in job.picklist:
            if entry.part_id == part_id:
                entry.quantity += 1
                break
        else:
            entry = UsedPart(part_id=part_id, quantity=1)
            job.picklist.append(entry)
        self.repo.save(COLLECTION_JOBS)
        return entry

    def remove_from_picklist(self, job_id: str, part_id: str) -> bool:
        """Drop a part's picklist row entirely. False if it was not listed."""
        self.session.require(VIEW_INVENTORY)
        job = self.repo.require_job(job_id)
        remaining = [e for e in job.picklist if e.part_id != part_id]
        if len(remaining) == len(job.picklist):
            return False
        job.picklist = remaining
        self.repo.save(COLLECTION_JOBS)
        return True
