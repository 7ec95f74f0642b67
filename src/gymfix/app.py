"""Application entry point: wires the store, session and services together."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from gymfix.agent.client import RepairAdvisor
from gymfix.auth.accounts import AccountService
from gymfix.auth.session import Session
from gymfix.config import Config
from gymfix.database.connection import DatabaseConnection
from gymfix.database.repository import Repository
from gymfix.database.schema import initialize_database
from gymfix.errors import GymFixError
from gymfix.inventory.catalog import CatalogService
from gymfix.inventory.job_ledger import JobLedger
from gymfix.inventory.stock_engine import StockEngine
from gymfix.utils.constants import APP_NAME, APP_VERSION
from gymfix.utils.formatters import format_currency, format_quantity

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything one running session owns; passed to the UI explicitly."""

    repo: Repository
    session: Session
    catalog: CatalogService
    stock: StockEngine
    jobs: JobLedger
    accounts: AccountService
    _advisor: Optional[RepairAdvisor] = field(default=None, repr=False)

    @property
    def advisor(self) -> RepairAdvisor:
        # Built lazily so the app starts without an LLM endpoint
        if self._advisor is None:
            self._advisor = RepairAdvisor()
        return self._advisor

    def reset_to_defaults(self):
        """Restore factory data and re-bind the session to the fresh users."""
        self.repo.reset_to_defaults()
        self.session.refresh(self.repo)


def configure_logging(level: str | None = None):
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(db_path: str | Path | None = None,
               advisor: Optional[RepairAdvisor] = None) -> AppContext:
    """Open (or create) the store and build the service graph."""
    db = DatabaseConnection(db_path or Config.DATABASE_PATH)
    initialize_database(db)
    repo = Repository(db)
    session = Session()
    return AppContext(
        repo=repo,
        session=session,
        catalog=CatalogService(repo, session),
        stock=StockEngine(repo, session),
        jobs=JobLedger(repo, session),
        accounts=AccountService(repo, session),
        _advisor=advisor,
    )


def main(argv: list[str] | None = None) -> int:
    """Log in and print the dashboard summary.

    Usage: ``gymfix EMAIL PASSWORD``
    """
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()
    if len(argv) != 2:
        print(f"usage: gymfix EMAIL PASSWORD  ({APP_NAME} {APP_VERSION})")
        return 2

    ctx = create_app()
    try:
        user = ctx.session.authenticate(ctx.repo, argv[0], argv[1])
    except GymFixError as e:
        print(e)
        return 1

    summary = ctx.repo.get_dashboard_summary()
    print(f"{APP_NAME} - logged in as {user.name}")
    print(f"Parts: {summary['total_parts']}  "
          f"Low stock: {summary['low_stock']}  "
          f"Open jobs: {summary['open_jobs']}  "
          f"Clients: {summary['clients']}")
    print(f"Stock value: {format_currency(summary['stock_value'])}")
    for part in ctx.repo.get_low_stock_parts():
        print(f"  {part.sku:<12} {part.name:<32} "
              f"{format_quantity(part.quantity, part.min_level)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
