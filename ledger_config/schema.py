"""
Configuration schema (``ledger_config.schema``).

Frozen dataclasses describing runtime settings.  Parsing and validation
live in ``ledger_config.loader``; this module only declares shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

DEFAULT_DATABASE_URL = "sqlite:///ledger.db"


@dataclass(frozen=True)
class LedgerSettings:
    """Runtime settings for the ledger gateway.

    Attributes:
        database_url: SQLAlchemy URL for the ledger store.
        echo_sql: Log every SQL statement.
        deposit_limit_ratio: Share of unpaid exposure a deposit may reach.
        best_clients_default_limit: Rows returned by best-clients when the
            caller gives no limit.
        log_level: Level name for the ``ledger_kernel`` logger.
    """

    database_url: str = DEFAULT_DATABASE_URL
    echo_sql: bool = False
    deposit_limit_ratio: Decimal = Decimal("0.25")
    best_clients_default_limit: int = 2
    log_level: str = "INFO"
