"""
DepositService -- exposure-bounded balance top-ups.

Responsibility:
    A profile may add to its own balance at most ``ratio`` (0.25 by
    default) of the total it still owes on unpaid jobs as a client, summed
    across contracts of every status, at the moment of the deposit.

Invariants enforced:
    - Amount must be positive and cent-exact (InvalidAmountError otherwise).
    - Limit is computed in cents and rounded down; ``amount == limit`` is
      accepted, anything above is DepositLimitExceededError.
    - The profile row is locked before the exposure is read, so two
      concurrent deposits by the same profile are serialized.
    - A deposit increases the balance.
"""

from decimal import Decimal

from ledger_kernel.domain.dtos import MutationResult, ProfileInfo
from ledger_kernel.domain.exposure import (
    DEFAULT_DEPOSIT_LIMIT_RATIO,
    deposit_limit,
    within_deposit_limit,
)
from ledger_kernel.db.types import parse_amount
from ledger_kernel.exceptions import (
    DepositLimitExceededError,
    InvalidAmountError,
    LedgerKernelError,
    ProfileNotFoundError,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.profile import Profile
from ledger_kernel.selectors.job_selector import JobSelector
from ledger_kernel.services.base import BaseService

logger = get_logger("services.deposit")


class DepositService(BaseService):
    """Applies deposits bounded by unpaid exposure."""

    def __init__(self, session, limit_ratio: Decimal = DEFAULT_DEPOSIT_LIMIT_RATIO):
        super().__init__(session)
        self._ratio = limit_ratio

    def deposit(self, profile: ProfileInfo, amount: object) -> MutationResult:
        """
        Add amount to the profile's balance.

        Args:
            profile: Resolved caller, the profile being credited.
            amount: Decimal, int, numeric string or float.

        Returns:
            MutationResult counting the profile rows updated (always 1).

        Raises:
            InvalidAmountError: Missing, malformed or non-positive amount.
            DepositLimitExceededError: Amount over the exposure limit.
            ProfileNotFoundError: Profile vanished since it was resolved.
        """
        try:
            value = parse_amount(amount)
            if value <= 0:
                raise InvalidAmountError(amount, "amount must be positive")

            row = self.session.get(Profile, profile.id, with_for_update=True)
            if row is None:
                raise ProfileNotFoundError(profile.id)

            total_unpaid = JobSelector(self.session).total_unpaid_as_client(profile.id)
            limit = deposit_limit(total_unpaid, self._ratio)
            if not within_deposit_limit(value, limit):
                raise DepositLimitExceededError(profile.id, value, limit)

            row.balance = row.balance + value
            self.session.flush()
        except LedgerKernelError as exc:
            logger.info(
                "deposit_rejected",
                extra={"profile_id": profile.id, "error_code": exc.code},
            )
            raise

        logger.info(
            "deposit_completed",
            extra={
                "profile_id": profile.id,
                "amount": value,
                "limit": limit,
                "balance_after": row.balance,
            },
        )
        return MutationResult(affected_rows=1)
