"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
ERROR KINDS
===============================================================================

Every error raised by the kernel belongs to exactly one kind.  The kind is
what the transport layer matches on; the concrete class and its ``code``
are what logs and tests match on.

    Kind            | Status | Meaning
    ----------------|--------|-----------------------------------------------
    BAD_REQUEST     | 400    | Malformed or missing input
    NOT_AUTHORIZED  | 401    | Caller identity could not be resolved
    FORBIDDEN       | 403    | Authenticated, but not permitted or over limit
    NOT_FOUND       | 404    | Absent, or present but hidden from the caller
    CONFLICT        | 409    | State already advanced (job already paid)

Anything that is not a ``LedgerKernelError`` is an unclassified fault and
is reported generically by the transport layer.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerKernelError (base)
    |
    +-- BadRequestError
    |   +-- InvalidAmountError
    |   +-- InvalidReportWindowError
    |   +-- InvalidLimitError
    |
    +-- NotAuthorizedError
    |   +-- ProfileNotResolvedError
    |
    +-- ForbiddenError
    |   +-- AccessDeniedError
    |   +-- InsufficientFundsError
    |   +-- DepositLimitExceededError
    |   +-- PaymentNotPermittedError
    |
    +-- NotFoundError
    |   +-- ProfileNotFoundError
    |   +-- ContractNotFoundError
    |   +-- JobNotFoundError
    |   +-- NoReportDataError
    |
    +-- ConflictError
        +-- JobAlreadyPaidError

===============================================================================
HANDLING PATTERNS
===============================================================================

1. CATCH BY KIND at the transport edge:

    except NotFoundError as e:
        return 404, {"message": str(e)}

2. CATCH BY CLASS when the caller can act on it:

    except JobAlreadyPaidError as e:
        log.info("already settled", extra={"job_id": e.job_id})

3. NEVER RETRY automatically.  CONFLICT and FORBIDDEN are terminal for the
   request; the caller decides whether to resubmit something different.
"""

from decimal import Decimal
from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to callers."""

    BAD_REQUEST = "bad_request"
    NOT_AUTHORIZED = "not_authorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a ``code`` class attribute for machine-readable
    identification and inherit a ``kind`` from one of the five kind bases.
    """

    code: str = "LEDGER_KERNEL_ERROR"
    kind: ErrorKind
    default_message: str = "Ledger error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# Kind bases


class BadRequestError(LedgerKernelError):
    """Input is missing or malformed."""

    code: str = "BAD_REQUEST"
    kind = ErrorKind.BAD_REQUEST
    default_message = "Bad Request"


class NotAuthorizedError(LedgerKernelError):
    """Caller identity could not be resolved."""

    code: str = "NOT_AUTHORIZED"
    kind = ErrorKind.NOT_AUTHORIZED
    default_message = "Not Authorized"


class ForbiddenError(LedgerKernelError):
    """Caller is known but the operation is not permitted."""

    code: str = "FORBIDDEN"
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(LedgerKernelError):
    """Resource is absent or hidden from the caller."""

    code: str = "NOT_FOUND"
    kind = ErrorKind.NOT_FOUND
    default_message = "Not Found"


class ConflictError(LedgerKernelError):
    """Resource state has already advanced past what the request expects."""

    code: str = "CONFLICT"
    kind = ErrorKind.CONFLICT
    default_message = "Conflict"


# Bad request


class InvalidAmountError(BadRequestError):
    """Amount is missing, non-numeric, non-positive or finer than a cent."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, amount: object, reason: str):
        self.amount = None if amount is None else str(amount)
        self.reason = reason
        super().__init__(f"Invalid amount {amount!r}: {reason}")


class InvalidReportWindowError(BadRequestError):
    """Report window bounds are missing, unparseable or reversed."""

    code: str = "INVALID_REPORT_WINDOW"

    def __init__(self, start: object, end: object, reason: str):
        self.start = None if start is None else str(start)
        self.end = None if end is None else str(end)
        self.reason = reason
        super().__init__(f"Invalid report window [{start}, {end}]: {reason}")


class InvalidLimitError(BadRequestError):
    """Result limit is not a positive integer."""

    code: str = "INVALID_LIMIT"

    def __init__(self, limit: object):
        self.limit = str(limit)
        super().__init__(f"Invalid limit {limit!r}: must be a positive integer")


# Not authorized


class ProfileNotResolvedError(NotAuthorizedError):
    """Caller token does not map to a profile."""

    code: str = "PROFILE_NOT_RESOLVED"

    def __init__(self, token: object):
        self.token = None if token is None else str(token)
        super().__init__("Not Authorized")


# Forbidden


class AccessDeniedError(ForbiddenError):
    """Caller is not a party to the resource it tried to mutate."""

    code: str = "ACCESS_DENIED"

    def __init__(self, profile_id: int, resource: str, resource_id: int | None):
        self.profile_id = profile_id
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"Profile {profile_id} may not act on {resource} {resource_id}"
        )


class InsufficientFundsError(ForbiddenError):
    """Payer balance does not cover the job price."""

    code: str = "INSUFFICIENT_FUNDS"

    def __init__(self, profile_id: int, balance: Decimal, required: Decimal):
        self.profile_id = profile_id
        self.balance = str(balance)
        self.required = str(required)
        super().__init__(
            f"Insufficient funds: balance {balance} is less than {required}"
        )


class DepositLimitExceededError(ForbiddenError):
    """Deposit is larger than the allowed share of unpaid exposure."""

    code: str = "DEPOSIT_LIMIT_EXCEEDED"

    def __init__(self, profile_id: int, amount: Decimal, limit: Decimal):
        self.profile_id = profile_id
        self.amount = str(amount)
        self.limit = str(limit)
        super().__init__(f"Deposit of {amount} exceeds the limit of {limit}")


class PaymentNotPermittedError(ForbiddenError):
    """Payer is not the client of the job's contract."""

    code: str = "PAYMENT_NOT_PERMITTED"

    def __init__(self, profile_id: int, job_id: int):
        self.profile_id = profile_id
        self.job_id = job_id
        super().__init__(f"Profile {profile_id} is not the client for job {job_id}")


# Not found


class ProfileNotFoundError(NotFoundError):
    """Profile with given ID was not found."""

    code: str = "PROFILE_NOT_FOUND"

    def __init__(self, profile_id: int):
        self.profile_id = profile_id
        super().__init__(f"Profile not found: {profile_id}")


class ContractNotFoundError(NotFoundError):
    """Contract was not found, or is not visible to the caller."""

    code: str = "CONTRACT_NOT_FOUND"

    def __init__(self, contract_id: int):
        self.contract_id = contract_id
        super().__init__(f"Contract not found: {contract_id}")


class JobNotFoundError(NotFoundError):
    """Job with given ID was not found."""

    code: str = "JOB_NOT_FOUND"

    def __init__(self, job_id: int):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")


class NoReportDataError(NotFoundError):
    """No paid jobs fall inside the requested report window."""

    code: str = "NO_REPORT_DATA"

    def __init__(self, report: str, start: object, end: object):
        self.report = report
        self.start = str(start)
        self.end = str(end)
        super().__init__(f"No data for {report} between {start} and {end}")


# Conflict


class JobAlreadyPaidError(ConflictError):
    """Job has already been paid; payments are at-most-once."""

    code: str = "JOB_ALREADY_PAID"

    def __init__(self, job_id: int):
        self.job_id = job_id
        super().__init__(f"Job {job_id} is already paid")
