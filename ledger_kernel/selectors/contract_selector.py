"""
Module: ledger_kernel.selectors.contract_selector
Responsibility: Contract lookups and the caller-scoped contract listing.
Architecture position: Kernel > Selectors.
"""

from sqlalchemy import or_, select

from ledger_kernel.domain.dtos import ContractInfo
from ledger_kernel.exceptions import ContractNotFoundError
from ledger_kernel.models.contract import Contract, ContractStatus
from ledger_kernel.selectors.base import BaseSelector


class ContractSelector(BaseSelector):
    """Read-only contract queries."""

    def get(self, contract_id: int) -> ContractInfo:
        """
        Get a contract by id, regardless of who is asking.

        Ownership is checked by the caller through AccessGuard.

        Raises:
            ContractNotFoundError: If the contract does not exist.
        """
        contract = self.session.get(Contract, contract_id)
        if contract is None:
            raise ContractNotFoundError(contract_id)
        return ContractInfo.from_model(contract)

    def list_active_for(self, profile_id: int) -> list[ContractInfo]:
        """
        Contracts where the profile is client or contractor, excluding
        terminated ones, in id order.
        """
        stmt = (
            select(Contract)
            .where(
                or_(
                    Contract.client_id == profile_id,
                    Contract.contractor_id == profile_id,
                ),
                Contract.status != ContractStatus.TERMINATED.value,
            )
            .order_by(Contract.id)
        )
        return [
            ContractInfo.from_model(c)
            for c in self.session.execute(stmt).scalars().all()
        ]

    def in_progress_ids_for(self, profile_id: int) -> list[int]:
        """Ids of in_progress contracts where the profile is either party."""
        stmt = (
            select(Contract.id)
            .where(
                or_(
                    Contract.client_id == profile_id,
                    Contract.contractor_id == profile_id,
                ),
                Contract.status == ContractStatus.IN_PROGRESS.value,
            )
            .order_by(Contract.id)
        )
        return list(self.session.execute(stmt).scalars().all())
