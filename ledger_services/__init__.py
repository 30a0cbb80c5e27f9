"""
ledger_services -- operation surface over the ledger kernel.

The gateway composes the kernel's resolver, guard, selectors and services
per operation; ``errors`` maps failures to transport status codes.
"""

from ledger_services.errors import error_response, status_for
from ledger_services.gateway import LedgerGateway

__all__ = ["LedgerGateway", "error_response", "status_for"]
