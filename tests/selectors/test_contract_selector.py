"""Contract lookups and caller-scoped listing."""

import pytest

from ledger_kernel.exceptions import ContractNotFoundError
from ledger_kernel.models import ContractStatus
from ledger_kernel.selectors.contract_selector import ContractSelector


@pytest.fixture
def parties(ledger):
    return ledger.client(), ledger.contractor()


def test_get_returns_dto(session, ledger, parties):
    client, contractor = parties
    cid = ledger.contract(client, contractor, ContractStatus.NEW)
    info = ContractSelector(session).get(cid)
    assert info.id == cid
    assert info.status is ContractStatus.NEW
    assert info.client_id == client
    assert info.to_dict()["ContractorId"] == contractor


def test_get_missing(session):
    with pytest.raises(ContractNotFoundError):
        ContractSelector(session).get(404)


def test_list_active_excludes_terminated(session, ledger, parties):
    client, contractor = parties
    new = ledger.contract(client, contractor, ContractStatus.NEW)
    running = ledger.contract(client, contractor, ContractStatus.IN_PROGRESS)
    ledger.contract(client, contractor, ContractStatus.TERMINATED)

    selector = ContractSelector(session)
    assert [c.id for c in selector.list_active_for(client)] == [new, running]
    assert [c.id for c in selector.list_active_for(contractor)] == [new, running]


def test_list_active_is_scoped_to_caller(session, ledger, parties):
    client, contractor = parties
    ledger.contract(client, contractor)
    stranger = ledger.client()
    assert ContractSelector(session).list_active_for(stranger) == []


def test_in_progress_ids(session, ledger, parties):
    client, contractor = parties
    ledger.contract(client, contractor, ContractStatus.NEW)
    running = ledger.contract(client, contractor, ContractStatus.IN_PROGRESS)
    assert ContractSelector(session).in_progress_ids_for(contractor) == [running]
