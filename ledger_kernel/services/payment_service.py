"""
PaymentService -- moves a job's price from the paying client to the
contractor, at most once per job.

Responsibility:
    Executes the payment sequence inside the caller's unit of work:

        1. Lock the job row.                  missing  -> JobNotFoundError
        2. Reject a settled job.              paid     -> JobAlreadyPaidError
        3. Lock the payer, check funds.       short    -> InsufficientFundsError
        4. Load the contract.                 missing  -> ContractNotFoundError
           Payer must be its client.          other    -> PaymentNotPermittedError
        5. Lock the contractor.               missing  -> ProfileNotFoundError
        6. Debit payer, credit contractor, flip paid and stamp payment_date.

    The paid check comes before the funds check, so a retry on a settled
    job is rejected as CONFLICT even when the payer could afford it again.
    Every check runs before the first write.

Invariants enforced:
    - Conservation: payer loses exactly price, contractor gains exactly
      price, to the cent.
    - At-most-once: the paid flip is a conditional UPDATE
      (``WHERE paid IS NOT TRUE``).  If a concurrent payment committed first
      it touches zero rows and the sequence aborts with JobAlreadyPaidError,
      so the unit of work rolls back both balance changes.
    - Lock order is job, payer, contractor.

Non-goals:
    - Contract status is not checked; a job under a terminated contract can
      still be settled.
    - No retry; a caller that loses a race must resubmit.
"""

from sqlalchemy import select, update

from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.dtos import ContractInfo, MutationResult, ProfileInfo
from ledger_kernel.exceptions import (
    ContractNotFoundError,
    InsufficientFundsError,
    JobAlreadyPaidError,
    JobNotFoundError,
    LedgerKernelError,
    ProfileNotFoundError,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.contract import Contract
from ledger_kernel.models.job import Job
from ledger_kernel.models.profile import Profile
from ledger_kernel.services.access_guard import AccessGuard
from ledger_kernel.services.base import BaseService

logger = get_logger("services.payment")


class PaymentService(BaseService):
    """Settles jobs between client and contractor balances."""

    def __init__(
        self,
        session,
        clock: Clock | None = None,
        access_guard: AccessGuard | None = None,
    ):
        super().__init__(session)
        self._clock = clock or SystemClock()
        self._guard = access_guard or AccessGuard()

    def _lock_job(self, job_id: int) -> Job:
        job = self.session.execute(
            select(Job).where(Job.id == job_id).with_for_update()
        ).scalar_one_or_none()
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    def _lock_profile(self, profile_id: int) -> Profile:
        profile = self.session.get(Profile, profile_id, with_for_update=True)
        if profile is None:
            raise ProfileNotFoundError(profile_id)
        return profile

    def _mark_paid(self, job: Job) -> int:
        result = self.session.execute(
            update(Job)
            .where(Job.id == job.id, Job.paid.is_not(True))
            .values(paid=True, payment_date=self._clock.now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise JobAlreadyPaidError(job.id)
        self.session.expire(job)
        return result.rowcount

    def pay(self, job_id: int, payer: ProfileInfo) -> MutationResult:
        """
        Pay for a job out of the payer's balance.

        Args:
            job_id: Job to settle.
            payer: Resolved caller; must be the client on the job's contract.

        Returns:
            MutationResult counting the job rows flipped to paid (always 1).

        Raises:
            JobNotFoundError, JobAlreadyPaidError, InsufficientFundsError,
            ContractNotFoundError, PaymentNotPermittedError,
            ProfileNotFoundError.
        """
        try:
            job = self._lock_job(job_id)
            if job.is_paid:
                raise JobAlreadyPaidError(job.id)

            price = job.price
            payer_row = self._lock_profile(payer.id)
            if price > payer_row.balance:
                raise InsufficientFundsError(payer.id, payer_row.balance, price)

            contract = self.session.get(Contract, job.contract_id)
            if contract is None:
                raise ContractNotFoundError(job.contract_id)
            self._guard.check_payer(payer, ContractInfo.from_model(contract), job.id)

            contractor = self._lock_profile(contract.contractor_id)

            payer_row.balance = payer_row.balance - price
            contractor.balance = contractor.balance + price
            self.session.flush()
            affected = self._mark_paid(job)
        except LedgerKernelError as exc:
            logger.info(
                "payment_rejected",
                extra={"job_id": job_id, "payer_id": payer.id, "error_code": exc.code},
            )
            raise

        logger.info(
            "payment_completed",
            extra={
                "job_id": job_id,
                "payer_id": payer.id,
                "contractor_id": contractor.id,
                "amount": price,
            },
        )
        return MutationResult(affected_rows=affected)
