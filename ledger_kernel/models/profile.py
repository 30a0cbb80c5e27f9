"""
Module: ledger_kernel.models.profile
Responsibility: ORM persistence for the accounts that hold money -- clients
    who pay for work and contractors who are paid for it.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - balance is mutated only by PaymentService and DepositService, always
      inside a unit of work and under a row lock.
    - Non-negative balance is the common case but is NOT enforced here.
"""

from decimal import Decimal
from enum import Enum

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase
from ledger_kernel.db.types import ZERO


class ProfileType(str, Enum):
    """Role of a profile in its contracts."""

    CLIENT = "client"
    CONTRACTOR = "contractor"


class Profile(TrackedBase):
    """
    A client or contractor account holding a monetary balance.

    Non-goals:
        - Profiles are created and seeded externally; the kernel never
          inserts or deletes them.
    """

    __tablename__ = "profiles"

    __table_args__ = (
        Index("idx_profile_type", "type"),
        Index("idx_profile_profession", "profession"),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)

    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Contractors only
    profession: Mapped[str | None] = mapped_column(String(100), nullable=True)

    balance: Mapped[Decimal] = mapped_column(nullable=False, default=ZERO)

    type: Mapped[ProfileType] = mapped_column(String(20), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Profile {self.id}: {self.full_name} ({self.type})>"
