"""
Concurrent payments for the same job against PostgreSQL.

Two callers pay the same job at once.  Row locks and the conditional paid
flip must let exactly one succeed; the other sees JobAlreadyPaidError and
neither balance moves twice.

Run with:
    DATABASE_URL=postgresql://... pytest tests/concurrency -m postgres
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from ledger_kernel.db.engine import (
    build_engine,
    create_tables,
    drop_tables,
    make_session_factory,
)
from ledger_kernel.exceptions import JobAlreadyPaidError
from ledger_kernel.models import Contract, ContractStatus, Job, Profile, ProfileType
from ledger_services.gateway import LedgerGateway

pytestmark = [pytest.mark.postgres]


@pytest.fixture
def pg_factory(postgres_url):
    engine = build_engine(postgres_url)
    drop_tables(engine)
    create_tables(engine)
    yield make_session_factory(engine)
    drop_tables(engine)
    engine.dispose()


@pytest.fixture
def race(pg_factory):
    with pg_factory() as s:
        client = Profile(
            first_name="A", last_name="Client", balance=Decimal("1000.00"),
            type=ProfileType.CLIENT.value,
        )
        contractor = Profile(
            first_name="B", last_name="Contractor", profession="Programmer",
            balance=Decimal("0.00"), type=ProfileType.CONTRACTOR.value,
        )
        s.add_all([client, contractor])
        s.flush()
        contract = Contract(
            terms="t", status=ContractStatus.IN_PROGRESS.value,
            client_id=client.id, contractor_id=contractor.id,
        )
        s.add(contract)
        s.flush()
        job = Job(description="race", price=Decimal("250.50"), contract_id=contract.id)
        s.add(job)
        s.commit()
        return client.id, contractor.id, job.id


@pytest.mark.parametrize("workers", [2, 8])
def test_only_one_payment_wins(pg_factory, race, workers):
    client_id, contractor_id, job_id = race
    gateway = LedgerGateway(pg_factory)
    barrier = threading.Barrier(workers)

    def attempt():
        barrier.wait()
        try:
            gateway.pay_job(client_id, job_id)
            return "paid"
        except JobAlreadyPaidError:
            return "conflict"

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(lambda _: attempt(), range(workers)))

    assert outcomes.count("paid") == 1
    assert outcomes.count("conflict") == workers - 1

    with pg_factory() as s:
        assert s.get(Profile, client_id).balance == Decimal("749.50")
        assert s.get(Profile, contractor_id).balance == Decimal("250.50")
        assert s.get(Job, job_id).paid is True
