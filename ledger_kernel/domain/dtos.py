"""
Immutable DTOs returned by selectors and services.

Nothing outside the kernel ever holds an ORM instance: every public method
converts to one of these frozen dataclasses before returning, so results
stay valid after the unit of work closes its session.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ledger_kernel.models.contract import Contract, ContractStatus
from ledger_kernel.models.job import Job
from ledger_kernel.models.profile import Profile, ProfileType


@dataclass(frozen=True)
class ProfileInfo:
    """Immutable DTO for profile data."""

    id: int
    first_name: str
    last_name: str
    profession: str | None
    balance: Decimal
    type: ProfileType

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_model(cls, profile: Profile) -> ProfileInfo:
        return cls(
            id=profile.id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            profession=profile.profession,
            balance=profile.balance,
            type=ProfileType(profile.type),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "profession": self.profession,
            "balance": str(self.balance),
            "type": self.type.value,
        }


@dataclass(frozen=True)
class ContractInfo:
    """Immutable DTO for contract data."""

    id: int
    terms: str
    status: ContractStatus
    client_id: int
    contractor_id: int

    @classmethod
    def from_model(cls, contract: Contract) -> ContractInfo:
        return cls(
            id=contract.id,
            terms=contract.terms,
            status=ContractStatus(contract.status),
            client_id=contract.client_id,
            contractor_id=contract.contractor_id,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "terms": self.terms,
            "status": self.status.value,
            "ClientId": self.client_id,
            "ContractorId": self.contractor_id,
        }


@dataclass(frozen=True)
class JobInfo:
    """Immutable DTO for job data."""

    id: int
    description: str
    price: Decimal
    paid: bool
    payment_date: datetime | None
    contract_id: int

    @classmethod
    def from_model(cls, job: Job) -> JobInfo:
        return cls(
            id=job.id,
            description=job.description,
            price=job.price,
            paid=job.is_paid,
            payment_date=job.payment_date,
            contract_id=job.contract_id,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "price": str(self.price),
            "paid": self.paid,
            "paymentDate": self.payment_date.isoformat() if self.payment_date else None,
            "ContractId": self.contract_id,
        }


@dataclass(frozen=True)
class ClientPaymentTotal:
    """One row of the best-clients report."""

    id: int
    full_name: str
    paid: Decimal

    def to_dict(self) -> dict:
        return {"id": self.id, "fullName": self.full_name, "paid": str(self.paid)}


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a balance-moving operation: rows touched, nothing else."""

    affected_rows: int
