"""Services for the ledger kernel (write side)."""

from ledger_kernel.services.access_guard import AccessGuard, ContractParty
from ledger_kernel.services.deposit_service import DepositService
from ledger_kernel.services.identity_service import IdentityResolver
from ledger_kernel.services.payment_service import PaymentService
from ledger_kernel.services.reporting_service import ReportingService

__all__ = [
    "AccessGuard",
    "ContractParty",
    "DepositService",
    "IdentityResolver",
    "PaymentService",
    "ReportingService",
]
