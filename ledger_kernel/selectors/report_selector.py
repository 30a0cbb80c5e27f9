"""
Module: ledger_kernel.selectors.report_selector
Responsibility: Grouped earnings aggregates over paid jobs in a time window.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Only jobs with paid = TRUE contribute.
    - best_profession filters on the job's creation timestamp;
      best_clients filters on its payment timestamp.  Both bounds are
      inclusive.
    - Groups order by descending sum; equal sums fall back to profession
      ascending / client id ascending so results are deterministic.
    - Sums are computed by the database over integer cents and are exact.

Failure modes:
    - best_profession raises NoReportDataError when no paid job falls in
      the window.  best_clients returns an empty list instead.
"""

from sqlalchemy import func, select

from ledger_kernel.domain.dtos import ClientPaymentTotal
from ledger_kernel.domain.report_window import ReportWindow
from ledger_kernel.exceptions import NoReportDataError
from ledger_kernel.models.contract import Contract
from ledger_kernel.models.job import Job
from ledger_kernel.models.profile import Profile, ProfileType
from ledger_kernel.selectors.base import BaseSelector


class ReportSelector(BaseSelector):
    """Aggregate reporting queries."""

    def best_profession(self, window: ReportWindow) -> str:
        """
        Profession whose contractors earned the most from jobs created in
        the window.

        Raises:
            NoReportDataError: If no paid job was created in the window.
        """
        earned = func.sum(Job.price).label("earned")
        stmt = (
            select(Profile.profession, earned)
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.contractor_id == Profile.id)
            .where(
                Job.paid.is_(True),
                Job.created_at.between(window.start, window.end),
                Profile.type == ProfileType.CONTRACTOR.value,
            )
            .group_by(Profile.profession)
            .order_by(earned.desc(), Profile.profession.asc())
            .limit(1)
        )
        row = self.session.execute(stmt).first()
        if row is None:
            raise NoReportDataError("best_profession", window.start, window.end)
        return row.profession

    def best_clients(self, window: ReportWindow, limit: int) -> list[ClientPaymentTotal]:
        """
        Clients who paid the most for jobs paid in the window, highest
        first, at most ``limit`` rows.
        """
        paid = func.sum(Job.price).label("paid")
        stmt = (
            select(Profile.id, Profile.first_name, Profile.last_name, paid)
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.client_id == Profile.id)
            .where(
                Job.paid.is_(True),
                Job.payment_date.between(window.start, window.end),
                Profile.type == ProfileType.CLIENT.value,
            )
            .group_by(Profile.id, Profile.first_name, Profile.last_name)
            .order_by(paid.desc(), Profile.id.asc())
            .limit(limit)
        )
        return [
            ClientPaymentTotal(
                id=row.id,
                full_name=f"{row.first_name} {row.last_name}",
                paid=row.paid,
            )
            for row in self.session.execute(stmt).all()
        ]
