"""
Money storage: balances and prices round-trip as integer cents, and sums
computed by the database are exact.
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError, StatementError

from ledger_kernel.models import Job, Profile, ProfileType


def test_balance_stored_as_cents(session_factory, ledger):
    pid = ledger.client(balance="231.11")
    with session_factory() as s:
        raw = s.execute(
            text("SELECT balance FROM profiles WHERE id = :id"), {"id": pid}
        ).scalar_one()
    assert raw == 23111
    assert ledger.balance(pid) == Decimal("231.11")


def test_loaded_values_have_two_places(ledger):
    pid = ledger.client(balance="1150")
    assert str(ledger.balance(pid)) == "1150.00"


def test_database_sum_is_exact(session_factory, ledger):
    client = ledger.client()
    contractor = ledger.contractor()
    contract = ledger.contract(client, contractor)
    for _ in range(10):
        ledger.job(contract, "0.10")
    with session_factory() as s:
        total = s.execute(select(func.sum(Job.price))).scalar_one()
    assert total == Decimal("1.00")


def test_sub_cent_value_refused(session_factory):
    with session_factory() as s:
        s.add(Profile(
            first_name="A", last_name="B", balance=Decimal("0.001"),
            type=ProfileType.CLIENT.value,
        ))
        with pytest.raises(StatementError):
            s.flush()


def test_price_must_be_positive(session_factory, ledger):
    contract = ledger.contract(ledger.client(), ledger.contractor())
    with session_factory() as s:
        s.add(Job(description="free", price=Decimal("0"), contract_id=contract))
        with pytest.raises(IntegrityError):
            s.flush()


def test_new_job_defaults_to_unpaid(ledger):
    contract = ledger.contract(ledger.client(), ledger.contractor())
    job = ledger.job_row(ledger.job(contract, "10"))
    assert job.paid is False
    assert job.payment_date is None
    assert job.created_at is not None
