"""Shared test fixtures."""

import pytest

from gymfix.auth.accounts import AccountService
from gymfix.auth.session import Session
from gymfix.database.connection import DatabaseConnection
from gymfix.database.models import BomLine, Part
from gymfix.database.repository import Repository
from gymfix.database.schema import initialize_database
from gymfix.inventory.catalog import CatalogService
from gymfix.inventory.job_ledger import JobLedger
from gymfix.inventory.stock_engine import StockEngine

ADMIN_EMAIL = "admin@gymfix.pl"


@pytest.fixture
def db_path(tmp_path):
    """Provide a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def db(db_path):
    """Provide an initialized database connection."""
    conn = DatabaseConnection(db_path)
    initialize_database(conn)
    return conn


@pytest.fixture
def repo(db):
    """Provide a repository loaded with the factory data."""
    return Repository(db)


@pytest.fixture
def admin(repo):
    return repo.get_user_by_email(ADMIN_EMAIL)


@pytest.fixture
def session(admin):
    """Session logged in as the seeded administrator (all permissions)."""
    return Session(admin)


@pytest.fixture
def stock(repo, session):
    return StockEngine(repo, session)


@pytest.fixture
def ledger(repo, session):
    return JobLedger(repo, session)


@pytest.fixture
def catalog(repo, session):
    return CatalogService(repo, session)


@pytest.fixture
def accounts(repo, session):
    return AccountService(repo, session)


@pytest.fixture
def session_for(repo):
    """Factory: a session logged in as the seeded user with *email*."""
    def _make(email):
        return Session(repo.get_user_by_email(email))
    return _make


@pytest.fixture
def roller_kit(repo):
    """Bearing (20 on hand) and a roller kit built from 2 bearings."""
    bearing = Part(name="Bearing", sku="BRG-T", quantity=20, min_level=5)
    repo.create_part(bearing)
    kit = Part(
        name="Roller kit", sku="KIT-T", type="ASSEMBLY",
        quantity=2, min_level=5,
        bom=[BomLine(part_id=bearing.id, quantity=2)],
    )
    repo.create_part(kit)
    return bearing, kit


@pytest.fixture
def active_job(repo, ledger):
    """A fresh job already moved to IN_PROGRESS."""
    job = ledger.create_job("CityFit Centrum", "LifeFitness 95T", "Squeaks")
    ledger.advance(job.id)
    return job
