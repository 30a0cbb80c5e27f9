"""
AccessGuard -- ownership checks for contract-scoped resources.

A caller may see or act on a contract (and the jobs under it) only when it
is one of the contract's parties.  How a failed check surfaces depends on
the operation:

    - Single-resource lookups fail as NOT_FOUND, so non-owners cannot probe
      for existence.
    - Mutations whose request already names the resource fail as FORBIDDEN.
"""

from enum import Enum

from ledger_kernel.domain.dtos import ContractInfo, ProfileInfo
from ledger_kernel.exceptions import (
    AccessDeniedError,
    ContractNotFoundError,
    PaymentNotPermittedError,
)
from ledger_kernel.services.identity_service import parse_profile_id


class ContractParty(str, Enum):
    """Side of a contract a profile can stand on."""

    CLIENT = "client"
    CONTRACTOR = "contractor"


ANY_PARTY: tuple[ContractParty, ...] = (ContractParty.CLIENT, ContractParty.CONTRACTOR)


class AccessGuard:
    """Stateless ownership checks; every method raises or returns None."""

    @staticmethod
    def is_party(
        profile: ProfileInfo,
        contract: ContractInfo,
        parties: tuple[ContractParty, ...] = ANY_PARTY,
    ) -> bool:
        if ContractParty.CLIENT in parties and profile.id == contract.client_id:
            return True
        if ContractParty.CONTRACTOR in parties and profile.id == contract.contractor_id:
            return True
        return False

    def check_contract_visible(
        self,
        profile: ProfileInfo,
        contract: ContractInfo,
        parties: tuple[ContractParty, ...] = ANY_PARTY,
    ) -> None:
        """
        Raises:
            ContractNotFoundError: If profile is not one of ``parties``.
        """
        if not self.is_party(profile, contract, parties):
            raise ContractNotFoundError(contract.id)

    def check_payer(self, profile: ProfileInfo, contract: ContractInfo, job_id: int) -> None:
        """
        Raises:
            PaymentNotPermittedError: If profile is not the contract's client.
        """
        if not self.is_party(profile, contract, (ContractParty.CLIENT,)):
            raise PaymentNotPermittedError(profile.id, job_id)

    def check_self(self, profile: ProfileInfo, target_profile_id: object) -> None:
        """
        A profile may only move its own balance.  target_profile_id may be
        an int or a numeric string, as it arrives from a request path.

        Raises:
            AccessDeniedError: If target_profile_id names someone else or
                is not a profile id at all.
        """
        if target_profile_id is None:
            return
        if parse_profile_id(target_profile_id) != profile.id:
            raise AccessDeniedError(profile.id, "profile", target_profile_id)
