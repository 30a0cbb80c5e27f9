"""
Deposit exposure bound.

A profile may top up its balance by at most a fixed share of what it still
owes on unpaid jobs.  The limit is computed in integer cents and rounded
down, so rounding can never raise the bound above the exact share.
"""

from decimal import ROUND_DOWN, Decimal

from ledger_kernel.db.types import round_money

DEFAULT_DEPOSIT_LIMIT_RATIO = Decimal("0.25")


def deposit_limit(
    total_unpaid: Decimal,
    ratio: Decimal = DEFAULT_DEPOSIT_LIMIT_RATIO,
) -> Decimal:
    """
    Maximum deposit allowed against an unpaid total.

    Example:
        deposit_limit(Decimal("400.00")) -> Decimal("100.00")
        deposit_limit(Decimal("100.01")) -> Decimal("25.00")
    """
    return round_money(total_unpaid * ratio, rounding=ROUND_DOWN)


def within_deposit_limit(amount: Decimal, limit: Decimal) -> bool:
    """True when amount does not exceed limit; the boundary is allowed."""
    return amount <= limit
