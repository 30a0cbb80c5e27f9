"""
Module: ledger_kernel.db.types
Responsibility: Money column type and the helper functions every model and
    service uses for cent-exact arithmetic.  Centralizes precision and
    rounding so that no caller ever touches a float.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    - Money is persisted as integer minor units (cents).  Sums, comparisons
      and ordering performed by the database are therefore exact on every
      backend, including SQLite.
    - round_money() is the ONLY sanctioned rounding function for monetary
      values.  231.11 - 202.00 is 29.11, never 29.110000000000014.

Failure modes:
    - InvalidAmountError from parse_amount() on non-numeric, non-finite or
      sub-cent input.
    - ValueError from MoneyCents when binding a value finer than a cent.
"""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

from ledger_kernel.exceptions import InvalidAmountError

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP
ZERO = Decimal("0.00")

_CENT = Decimal(1).scaleb(-MONEY_DECIMAL_PLACES)
_CENTS_PER_UNIT = 10**MONEY_DECIMAL_PLACES


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to specified decimal places.

    This is the ONLY sanctioned rounding function for monetary values.

    Args:
        value: The Decimal value to round.
        decimal_places: Number of decimal places to round to.
        rounding: Rounding mode (default: ROUND_HALF_UP).

    Returns:
        Rounded Decimal value.
    """
    return value.quantize(Decimal(1).scaleb(-decimal_places), rounding=rounding)


def money_from_int(value: int, decimal_places: int = MONEY_DECIMAL_PLACES) -> Decimal:
    """
    Create a Money value from integer minor units.

    Example:
        money_from_int(1050) -> Decimal("10.50")
    """
    return Decimal(value).scaleb(-decimal_places).quantize(
        Decimal(1).scaleb(-decimal_places)
    )


def to_minor_units(value: Decimal) -> int:
    """
    Convert a Money value to integer minor units.

    Raises:
        ValueError: If value carries precision finer than a cent.
    """
    quantized = value.quantize(_CENT)
    if quantized != value:
        raise ValueError(f"Monetary value {value} is finer than a cent")
    return int(quantized * _CENTS_PER_UNIT)


def parse_amount(raw: object) -> Decimal:
    """
    Parse caller-supplied input into a Money value.

    Floats are converted through their shortest repr so 100.01 means
    Decimal("100.01"), not the nearest binary fraction.  Booleans are
    rejected even though they are ints.

    Raises:
        InvalidAmountError: If raw is missing, non-numeric, non-finite or
            carries more than two fractional digits.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidAmountError(raw, "amount is required")
    try:
        if isinstance(raw, float):
            value = Decimal(repr(raw))
        elif isinstance(raw, (Decimal, int)):
            value = Decimal(raw)
        elif isinstance(raw, str) and raw.strip():
            value = Decimal(raw.strip())
        else:
            raise InvalidAmountError(raw, "amount is required")
    except InvalidOperation:
        raise InvalidAmountError(raw, "amount is not a number") from None

    if not value.is_finite():
        raise InvalidAmountError(raw, "amount is not finite")
    try:
        quantized = value.quantize(_CENT, rounding=ROUND_DOWN)
    except InvalidOperation:
        raise InvalidAmountError(raw, "amount is out of range") from None
    if quantized != value:
        raise InvalidAmountError(raw, "amount has more than two decimal places")
    return quantized


class MoneyCents(TypeDecorator):
    """
    Decimal money stored as a BIGINT count of minor units.

    Contract:
        Binds Decimal (or int) -> int cents on INSERT/UPDATE and in WHERE
        clauses; loads int cents -> Decimal quantized to two places.

    Guarantees:
        - SUM() over a MoneyCents column returns an exact Decimal because
          the database adds integers and the result is processed back
          through this type.
        - cache_ok=True enables SQLAlchemy statement caching.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return to_minor_units(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return money_from_int(int(value))
