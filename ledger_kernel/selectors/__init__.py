"""Selectors for the ledger kernel (read side)."""

from ledger_kernel.selectors.contract_selector import ContractSelector
from ledger_kernel.selectors.job_selector import JobSelector
from ledger_kernel.selectors.report_selector import ReportSelector

__all__ = [
    "ContractSelector",
    "JobSelector",
    "ReportSelector",
]
