"""
Module: ledger_kernel.models.job
Responsibility: ORM persistence for billable units of work under a contract.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - paid transitions at most once, false -> true, and is never reset.
      PaymentService performs the transition with a conditional UPDATE
      (WHERE paid IS NOT TRUE) so two racing payers cannot both win.
    - payment_date is set together with paid and never changes afterwards.
    - price is positive with two fractional digits.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from ledger_kernel.models.contract import Contract


class Job(TrackedBase):
    """A unit of billable work with a price and a paid flag."""

    __tablename__ = "jobs"

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_job_price_positive"),
        Index("idx_job_contract", "contract_id"),
        Index("idx_job_paid", "paid"),
        Index("idx_job_payment_date", "payment_date"),
    )

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    price: Mapped[Decimal] = mapped_column(nullable=False)

    # Legacy rows may carry NULL; NULL means unpaid.
    paid: Mapped[bool | None] = mapped_column(
        Boolean,
        nullable=True,
        default=False,
    )

    payment_date: Mapped[datetime | None] = mapped_column(nullable=True)

    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.id"),
        nullable=False,
    )

    contract: Mapped["Contract"] = relationship(
        "Contract",
        back_populates="jobs",
        lazy="raise",
    )

    @property
    def is_paid(self) -> bool:
        return self.paid is True

    def __repr__(self) -> str:
        return f"<Job {self.id}: {self.price} paid={self.is_paid}>"
