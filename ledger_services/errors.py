"""
Transport error mapping.

Turns any exception raised by a gateway operation into a status code and a
body with a single human-readable ``message`` field.  Kernel errors map by
kind; anything else is an unclassified fault, logged in full and reported
generically so no store or stack detail leaks to the caller.
"""

from __future__ import annotations

from ledger_kernel.exceptions import ErrorKind, LedgerKernelError
from ledger_kernel.logging_config import get_logger

logger = get_logger("services.errors")

INTERNAL_ERROR_STATUS = 500
INTERNAL_ERROR_MESSAGE = "Internal Server Error"

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_AUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
}


def status_for(exc: BaseException) -> int:
    if isinstance(exc, LedgerKernelError):
        return STATUS_BY_KIND[exc.kind]
    return INTERNAL_ERROR_STATUS


def error_response(exc: BaseException) -> tuple[int, dict[str, str]]:
    """Map an exception to ``(status, {"message": ...})``."""
    if isinstance(exc, LedgerKernelError):
        return STATUS_BY_KIND[exc.kind], {"message": exc.message}
    logger.error("unclassified_fault", exc_info=exc)
    return INTERNAL_ERROR_STATUS, {"message": INTERNAL_ERROR_MESSAGE}
