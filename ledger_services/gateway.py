"""
LedgerGateway -- the operation surface of the ledger.

Contract:
    One method per external operation.  Each method resolves the caller
    token through IdentityResolver and then runs the whole operation,
    resolution included, inside a single UnitOfWork, so every call either
    commits in full or has no effect.  Components receive the session,
    clock and settings by injection; nothing reads process globals.

    Return values are DTOs or plain values, safe to use after the session
    has closed.  Failures propagate as LedgerKernelError subclasses; pair
    with ``ledger_services.errors.error_response`` at the transport edge.

Non-goals:
    - Does NOT retry.  CONFLICT and FORBIDDEN are terminal per request.
    - Does NOT own the engine lifecycle; ``from_settings`` creates one,
      the caller disposes it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, TypeVar
from uuid import uuid4

from sqlalchemy.orm import Session, sessionmaker

from ledger_config.schema import LedgerSettings
from ledger_kernel.db.engine import build_engine, make_session_factory
from ledger_kernel.db.unit_of_work import UnitOfWork
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.dtos import (
    ClientPaymentTotal,
    ContractInfo,
    JobInfo,
    MutationResult,
    ProfileInfo,
)
from ledger_kernel.domain.exposure import DEFAULT_DEPOSIT_LIMIT_RATIO
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.selectors.contract_selector import ContractSelector
from ledger_kernel.selectors.job_selector import JobSelector
from ledger_kernel.services.access_guard import AccessGuard, ContractParty
from ledger_kernel.services.deposit_service import DepositService
from ledger_kernel.services.identity_service import IdentityResolver
from ledger_kernel.services.payment_service import PaymentService
from ledger_kernel.services.reporting_service import (
    DEFAULT_BEST_CLIENTS_LIMIT,
    ReportingService,
)

logger = get_logger("services.gateway")

T = TypeVar("T")

# Single-contract lookup is visible to the contractor only.
CONTRACT_LOOKUP_PARTIES: tuple[ContractParty, ...] = (ContractParty.CONTRACTOR,)


class LedgerGateway:
    """Composes resolver, guard, selectors and services per operation."""

    def __init__(
        self,
        session_factory: sessionmaker[Session] | Callable[[], Session],
        clock: Clock | None = None,
        access_guard: AccessGuard | None = None,
        deposit_limit_ratio: Decimal = DEFAULT_DEPOSIT_LIMIT_RATIO,
        best_clients_default_limit: int = DEFAULT_BEST_CLIENTS_LIMIT,
    ) -> None:
        self._uow = UnitOfWork(session_factory)
        self._clock = clock or SystemClock()
        self._guard = access_guard or AccessGuard()
        self._deposit_limit_ratio = deposit_limit_ratio
        self._best_clients_default_limit = best_clients_default_limit

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def from_settings(
        cls,
        settings: LedgerSettings,
        clock: Clock | None = None,
    ) -> LedgerGateway:
        """Create a gateway with its own engine from settings."""
        engine = build_engine(settings.database_url, echo=settings.echo_sql)
        return cls(
            session_factory=make_session_factory(engine),
            clock=clock,
            deposit_limit_ratio=settings.deposit_limit_ratio,
            best_clients_default_limit=settings.best_clients_default_limit,
        )

    # -------------------------------------------------------------------------
    # Plumbing
    # -------------------------------------------------------------------------

    def _run(
        self,
        operation: str,
        token: object,
        fn: Callable[[Session, ProfileInfo], T],
        job_id: object = None,
    ) -> T:
        def work(session: Session) -> T:
            caller = IdentityResolver(session).resolve(token)
            with LogContext.bind(profile_id=caller.id):
                return fn(session, caller)

        with LogContext.bind(
            correlation_id=str(uuid4()),
            operation=operation,
            job_id=job_id,
        ):
            return self._uow.run(work)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def get_contract(self, token: object, contract_id: int) -> ContractInfo:
        """Contract by id, only if the caller is its contractor."""

        def work(session: Session, caller: ProfileInfo) -> ContractInfo:
            contract = ContractSelector(session).get(contract_id)
            self._guard.check_contract_visible(caller, contract, CONTRACT_LOOKUP_PARTIES)
            return contract

        return self._run("get_contract", token, work)

    def list_contracts(self, token: object) -> list[ContractInfo]:
        """Caller's non-terminated contracts."""
        return self._run(
            "list_contracts",
            token,
            lambda session, caller: ContractSelector(session).list_active_for(caller.id),
        )

    def list_unpaid_jobs(self, token: object) -> list[JobInfo]:
        """Caller's unpaid jobs on in_progress contracts."""
        return self._run(
            "list_unpaid_jobs",
            token,
            lambda session, caller: JobSelector(session).list_unpaid_for(caller.id),
        )

    def pay_job(self, token: object, job_id: int) -> MutationResult:
        """Settle a job from the caller's balance."""

        def work(session: Session, caller: ProfileInfo) -> MutationResult:
            service = PaymentService(session, clock=self._clock, access_guard=self._guard)
            return service.pay(job_id, caller)

        return self._run("pay_job", token, work, job_id=job_id)

    def deposit(
        self,
        token: object,
        amount: object,
        user_id: object = None,
    ) -> MutationResult:
        """Top up the caller's balance, bounded by unpaid exposure."""

        def work(session: Session, caller: ProfileInfo) -> MutationResult:
            self._guard.check_self(caller, user_id)
            service = DepositService(session, limit_ratio=self._deposit_limit_ratio)
            return service.deposit(caller, amount)

        return self._run("deposit", token, work)

    def best_profession(self, token: object, start: object, end: object) -> str:
        """Profession with the highest paid total for jobs created in the window."""
        return self._run(
            "best_profession",
            token,
            lambda session, caller: ReportingService(
                session, self._best_clients_default_limit
            ).best_profession(start, end),
        )

    def best_clients(
        self,
        token: object,
        start: object,
        end: object,
        limit: object = None,
    ) -> list[ClientPaymentTotal]:
        """Top paying clients for jobs paid in the window."""
        return self._run(
            "best_clients",
            token,
            lambda session, caller: ReportingService(
                session, self._best_clients_default_limit
            ).best_clients(start, end, limit),
        )
