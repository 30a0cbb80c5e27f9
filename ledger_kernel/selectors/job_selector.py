"""
Module: ledger_kernel.selectors.job_selector
Responsibility: Unpaid-job listing and the unpaid exposure total used by
    the deposit limiter.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - "Unpaid" means paid IS NOT TRUE, so legacy NULL flags count as unpaid.
    - Totals are summed by the database over integer cents and are exact.
"""

from decimal import Decimal

from sqlalchemy import func, select

from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.dtos import JobInfo
from ledger_kernel.models.contract import Contract
from ledger_kernel.models.job import Job
from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.contract_selector import ContractSelector


class JobSelector(BaseSelector):
    """Read-only job queries."""

    def list_unpaid_for(self, profile_id: int) -> list[JobInfo]:
        """
        Unpaid jobs on the profile's in_progress contracts.

        A job under a new or terminated contract is excluded even when it
        is unpaid.
        """
        contract_ids = ContractSelector(self.session).in_progress_ids_for(profile_id)
        if not contract_ids:
            return []

        stmt = (
            select(Job)
            .where(
                Job.contract_id.in_(contract_ids),
                Job.paid.is_not(True),
            )
            .order_by(Job.id)
        )
        return [JobInfo.from_model(j) for j in self.session.execute(stmt).scalars().all()]

    def total_unpaid_as_client(self, client_id: int) -> Decimal:
        """
        Sum of prices of unpaid jobs on every contract where the profile is
        the client, whatever the contract status.
        """
        stmt = (
            select(func.sum(Job.price))
            .join(Contract, Job.contract_id == Contract.id)
            .where(
                Contract.client_id == client_id,
                Job.paid.is_not(True),
            )
        )
        total = self.session.execute(stmt).scalar_one_or_none()
        return total if total is not None else ZERO
