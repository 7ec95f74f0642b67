"""Tests for the repair advisor: prompts, fail-open behaviour, job notes."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from gymfix.agent.client import RepairAdvisor, advise_job
from gymfix.agent.prompts import (
    CONNECTION_ERROR_MESSAGE,
    NO_ANALYSIS_MESSAGE,
    SYSTEM_PROMPT,
    build_repair_prompt,
)
from gymfix.auth.session import Session
from gymfix.config import Config
from gymfix.database.models import User
from gymfix.errors import PermissionDenied
from gymfix.inventory.job_ledger import JobLedger


def _response(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def llm():
    return MagicMock()


@pytest.fixture
def advisor(llm):
    return RepairAdvisor(client=llm)


class TestPrompt:
    def test_lists_parts(self):
        prompt = build_repair_prompt("LifeFitness 95T", "Squeaks",
                                     ["Pas", "Smar"])
        assert "LifeFitness 95T" in prompt
        assert "Squeaks" in prompt
        assert "Pas, Smar" in prompt

    def test_no_parts(self):
        assert "(names): -." in build_repair_prompt("X", "Y", [])


class TestAnalyze:
    def test_returns_model_text(self, advisor, llm):
        llm.chat.completions.create.return_value = _response("- worn belt")
        text = advisor.analyze("LifeFitness 95T", "Squeaks", ["Pas"])
        assert text == "- worn belt"

        kwargs = llm.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == Config.LM_STUDIO_MODEL
        assert kwargs["messages"][0] == {"role": "system",
                                         "content": SYSTEM_PROMPT}
        assert "Squeaks" in kwargs["messages"][1]["content"]

    def test_connection_failure_returns_placeholder(self, advisor, llm,
                                                    caplog):
        llm.chat.completions.create.side_effect = ConnectionError("refused")
        assert advisor.analyze("X", "Y", []) == CONNECTION_ERROR_MESSAGE
        assert "Repair advisor unavailable" in caplog.text

    def test_empty_answer(self, advisor, llm):
        llm.chat.completions.create.return_value = _response("")
        assert advisor.analyze("X", "Y", []) == NO_ANALYSIS_MESSAGE

    def test_no_choices(self, advisor, llm):
        llm.chat.completions.create.return_value = SimpleNamespace(choices=[])
        assert advisor.analyze("X", "Y", []) == NO_ANALYSIS_MESSAGE

    def test_is_connected(self, advisor, llm):
        assert advisor.is_connected()
        llm.models.list.side_effect = OSError("down")
        assert not advisor.is_connected()


class TestAdviseJob:
    def test_stores_answer_on_job(self, repo, ledger, advisor, llm):
        llm.chat.completions.create.return_value = _response("- cable")
        assert advise_job(ledger, advisor, "j2") == "- cable"
        assert repo.get_job("j2").ai_analysis == "- cable"

    def test_offers_only_parts_in_stock(self, ledger, advisor, llm):
        llm.chat.completions.create.return_value = _response("ok")
        advise_job(ledger, advisor, "j1")
        prompt = llm.chat.completions.create.call_args.kwargs[
            "messages"][1]["content"]
        assert "Linka stalowa 4mm" in prompt
        # p5 has no stock
        assert "Tapicerka siedziska" not in prompt

    def test_failure_is_not_stored(self, repo, ledger, advisor, llm):
        llm.chat.completions.create.side_effect = TimeoutError()
        assert advise_job(ledger, advisor, "j1") == CONNECTION_ERROR_MESSAGE
        assert repo.get_job("j1").ai_analysis is None

    def test_advice_never_touches_stock(self, repo, ledger, advisor, llm):
        llm.chat.completions.create.return_value = _response("use 5x p1")
        before = {p.id: p.quantity for p in repo.get_all_parts()}
        advise_job(ledger, advisor, "j2")
        assert {p.id: p.quantity for p in repo.get_all_parts()} == before

    def test_requires_view_inventory(self, repo, advisor, llm):
        session = Session(User(id="u9", name="Dyspozytor",
                               permissions={"VIEW_JOBS", "MANAGE_JOBS"}))
        with pytest.raises(PermissionDenied):
            advise_job(JobLedger(repo, session), advisor, "j2")
        llm.chat.completions.create.assert_not_called()
        assert repo.get_job("j2").ai_analysis is None
