"""OpenAI-compatible client for repair advice (LM Studio by default)."""

import logging
from typing import Optional

from openai import OpenAI

from gymfix.agent.prompts import (
    CONNECTION_ERROR_MESSAGE,
    NO_ANALYSIS_MESSAGE,
    SYSTEM_PROMPT,
    build_repair_prompt,
)
from gymfix.config import Config
from gymfix.utils.constants import VIEW_INVENTORY

logger = logging.getLogger(__name__)


class RepairAdvisor:
    """Suggests causes and parts for a reported machine fault.

    The advisor never raises: any failure yields a placeholder message,
    and it has no access to stock or jobs.
    """

    def __init__(self, client: Optional[OpenAI] = None):
        self.client = client or OpenAI(
            base_url=Config.LM_STUDIO_BASE_URL,
            api_key=Config.LM_STUDIO_API_KEY,
            timeout=Config.LM_STUDIO_TIMEOUT,
        )

    def analyze(self, machine_model: str, description: str,
                available_parts: list[str]) -> str:
        prompt = build_repair_prompt(machine_model, description,
                                     available_parts)
        try:
            response = self.client.chat.completions.create(
                model=Config.LM_STUDIO_MODEL,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except Exception as e:
            logger.warning("Repair advisor unavailable: %s", e)
            return CONNECTION_ERROR_MESSAGE

        if not response.choices:
            return NO_ANALYSIS_MESSAGE
        return response.choices[0].message.content or NO_ANALYSIS_MESSAGE

    def is_connected(self) -> bool:
        """Check if the endpoint is reachable."""
        try:
            self.client.models.list()
            return True
        except Exception:
            return False


def advise_job(ledger, advisor: RepairAdvisor, job_id: str) -> str:
    """Ask the advisor about a job and store a successful answer on it.

    Parts currently in stock are offered as candidates. Listing them
    needs VIEW_INVENTORY. Placeholder answers are returned but not stored.
    """
    job = ledger.get_job(job_id)
    ledger.session.require(VIEW_INVENTORY)
    in_stock = [p.name for p in ledger.repo.get_all_parts() if p.quantity > 0]
    text = advisor.analyze(job.machine_model, job.description, in_stock)
    if text not in (NO_ANALYSIS_MESSAGE, CONNECTION_ERROR_MESSAGE):
        ledger.record_analysis(job_id, text)
    return text
