"""
Module: ledger_kernel.models.contract
Responsibility: ORM persistence for agreements between one client and one
    contractor.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Every contract has exactly one client and one contractor, so a query
      for "contracts where I am client OR contractor" never yields duplicates.
    - status is created and transitioned externally.  The kernel only reads it.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import TrackedBase

if TYPE_CHECKING:
    from ledger_kernel.models.job import Job
    from ledger_kernel.models.profile import Profile


class ContractStatus(str, Enum):
    """Contract lifecycle status."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"


class Contract(TrackedBase):
    """Agreement between a client and a contractor."""

    __tablename__ = "contracts"

    __table_args__ = (
        Index("idx_contract_status", "status"),
        Index("idx_contract_client", "client_id"),
        Index("idx_contract_contractor", "contractor_id"),
    )

    terms: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[ContractStatus] = mapped_column(
        String(20),
        nullable=False,
        default=ContractStatus.NEW,
    )

    client_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id"),
        nullable=False,
    )

    contractor_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id"),
        nullable=False,
    )

    client: Mapped["Profile"] = relationship(
        "Profile",
        foreign_keys=[client_id],
        lazy="raise",
    )

    contractor: Mapped["Profile"] = relationship(
        "Profile",
        foreign_keys=[contractor_id],
        lazy="raise",
    )

    jobs: Mapped[list["Job"]] = relationship(
        "Job",
        back_populates="contract",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Contract {self.id}: {self.client_id} -> {self.contractor_id} ({self.status})>"
