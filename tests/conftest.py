"""
Pytest fixtures for the ledger kernel test suite.

Provides:
- A fresh SQLite database file per test (real per-session isolation)
- A ``ledger`` helper that inserts and reads rows in short committed sessions
- A deterministic clock and a wired LedgerGateway
- Structured log capture

Environment Variables:
- DATABASE_URL: PostgreSQL URL for tests marked ``postgres``.  Those tests
  are skipped when it is unset.
"""

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from io import StringIO

import pytest
from sqlalchemy.orm import sessionmaker

from ledger_kernel.db.engine import build_engine, create_tables, make_session_factory
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ledger_kernel.models import Contract, ContractStatus, Job, Profile, ProfileType
from ledger_services.gateway import LedgerGateway

FIXED_NOW = datetime(2024, 3, 1, 9, 30, 0, tzinfo=timezone.utc)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "postgres: mark test as requiring PostgreSQL"
    )


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, gateway):
            gateway.pay_job(1, 7)
            logs = captured_logs()
            assert any(r["message"] == "payment_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def session(session_factory):
    """A session for tests that drive services directly.

    The test decides whether to commit; anything left open is rolled back.
    """
    s = session_factory()
    try:
        yield s
    finally:
        s.rollback()
        s.close()


@pytest.fixture
def clock():
    return DeterministicClock(fixed_time=FIXED_NOW)


@pytest.fixture
def gateway(session_factory, clock):
    return LedgerGateway(session_factory=session_factory, clock=clock)


# =============================================================================
# Data helpers
# =============================================================================


@dataclass
class LedgerData:
    """Inserts and reads rows, each call in its own committed session."""

    session_factory: sessionmaker

    def _add(self, obj):
        with self.session_factory() as s:
            s.add(obj)
            s.commit()
            return obj.id

    def client(self, balance="0", first_name="Cli", last_name="Ent") -> int:
        return self._add(Profile(
            first_name=first_name,
            last_name=last_name,
            profession="Buyer",
            balance=Decimal(balance),
            type=ProfileType.CLIENT.value,
        ))

    def contractor(self, profession="Programmer", balance="0",
                   first_name="Con", last_name="Tractor") -> int:
        return self._add(Profile(
            first_name=first_name,
            last_name=last_name,
            profession=profession,
            balance=Decimal(balance),
            type=ProfileType.CONTRACTOR.value,
        ))

    def contract(self, client_id: int, contractor_id: int,
                 status: ContractStatus = ContractStatus.IN_PROGRESS) -> int:
        return self._add(Contract(
            terms="terms",
            status=status.value,
            client_id=client_id,
            contractor_id=contractor_id,
        ))

    def job(self, contract_id: int, price: str, paid: bool | None = False,
            payment_date: datetime | None = None,
            created_at: datetime | None = None) -> int:
        job = Job(
            description="work",
            price=Decimal(price),
            contract_id=contract_id,
            paid=paid,
            payment_date=payment_date,
        )
        if created_at is not None:
            job.created_at = created_at
        return self._add(job)

    def balance(self, profile_id: int) -> Decimal:
        with self.session_factory() as s:
            return s.get(Profile, profile_id).balance

    def job_row(self, job_id: int) -> Job:
        with self.session_factory() as s:
            job = s.get(Job, job_id)
            s.expunge(job)
            return job


@pytest.fixture
def ledger(session_factory):
    return LedgerData(session_factory)


@pytest.fixture
def seeded(session_factory):
    """Load the reference sample data used by the seed script."""
    from scripts.seed_data import seed

    with session_factory() as s:
        seed(s)
        s.commit()


@pytest.fixture
def postgres_url():
    url = os.environ.get("DATABASE_URL")
    if not url or not url.startswith("postgresql"):
        pytest.skip("DATABASE_URL does not point at PostgreSQL")
    return url
