"""
ReportingService -- admin earnings reports.

Parses and validates the caller's window and limit, delegates the grouped
query to ReportSelector, and logs what was computed.  Read-only.
"""

from ledger_kernel.domain.dtos import ClientPaymentTotal
from ledger_kernel.domain.report_window import parse_limit, parse_report_window
from ledger_kernel.logging_config import get_logger
from ledger_kernel.selectors.report_selector import ReportSelector
from ledger_kernel.services.base import BaseService

logger = get_logger("services.reporting")

DEFAULT_BEST_CLIENTS_LIMIT = 2


class ReportingService(BaseService):
    """Grouped, ordered, limited sums over paid jobs."""

    def __init__(self, session, default_limit: int = DEFAULT_BEST_CLIENTS_LIMIT):
        super().__init__(session)
        self._default_limit = default_limit

    def best_profession(self, start: object, end: object) -> str:
        """
        Raises:
            InvalidReportWindowError: Bad window.
            NoReportDataError: No paid job created in the window.
        """
        window = parse_report_window(start, end)
        profession = ReportSelector(self.session).best_profession(window)
        logger.info(
            "report_computed",
            extra={"report": "best_profession", "start": window.start, "end": window.end},
        )
        return profession

    def best_clients(
        self,
        start: object,
        end: object,
        limit: object = None,
    ) -> list[ClientPaymentTotal]:
        """
        Raises:
            InvalidReportWindowError: Bad window.
            InvalidLimitError: limit present but not a positive integer.
        """
        window = parse_report_window(start, end)
        size = parse_limit(limit, self._default_limit)
        rows = ReportSelector(self.session).best_clients(window, size)
        logger.info(
            "report_computed",
            extra={
                "report": "best_clients",
                "start": window.start,
                "end": window.end,
                "limit": size,
                "rows": len(rows),
            },
        )
        return rows
