#!/usr/bin/env python3
"""
Seed the ledger with the reference sample data.

Drops all tables, recreates them, and loads eight profiles, nine
contracts and fourteen jobs.  Paid jobs are created on their payment date
so both admin reports have something to rank.

Usage:
    python3 scripts/seed_data.py [--db-url sqlite:///ledger.db]
"""

import argparse
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------
# id, first_name, last_name, profession, balance, type
PROFILES = [
    (1, "Harry", "Potter", "Wizard", "1150", "client"),
    (2, "Mr", "Robot", "Hacker", "231.11", "client"),
    (3, "John", "Snow", "Knows nothing", "451.3", "client"),
    (4, "Ash", "Kethcum", "Pokemon master", "1.3", "client"),
    (5, "John", "Lenon", "Musician", "64", "contractor"),
    (6, "Linus", "Torvalds", "Programmer", "1214", "contractor"),
    (7, "Alan", "Turing", "Programmer", "22", "contractor"),
    (8, "Aragorn", "II Elessar Telcontarion", "Fighter", "314", "contractor"),
]

# id, status, client_id, contractor_id
CONTRACTS = [
    (1, "terminated", 1, 5),
    (2, "in_progress", 1, 6),
    (3, "in_progress", 2, 6),
    (4, "in_progress", 2, 7),
    (5, "new", 3, 8),
    (6, "in_progress", 3, 7),
    (7, "in_progress", 4, 7),
    (8, "in_progress", 4, 6),
    (9, "in_progress", 4, 8),
]

_AUG_10 = datetime(2020, 8, 10, 19, 11, 26, 737000, tzinfo=timezone.utc)
_AUG_14 = datetime(2020, 8, 14, 23, 11, 26, 737000, tzinfo=timezone.utc)
_AUG_15 = datetime(2020, 8, 15, 19, 11, 26, 737000, tzinfo=timezone.utc)
_AUG_17 = datetime(2020, 8, 17, 19, 11, 26, 737000, tzinfo=timezone.utc)

# id, price, contract_id, payment_date (None = unpaid)
JOBS = [
    (1, "200", 1, None),
    (2, "201", 2, None),
    (3, "202", 3, None),
    (4, "200", 4, None),
    (5, "200", 7, None),
    (6, "2020", 7, _AUG_15),
    (7, "200", 2, _AUG_15),
    (8, "200", 3, _AUG_15),
    (9, "200", 1, _AUG_15),
    (10, "200", 5, _AUG_17),
    (11, "21", 1, _AUG_10),
    (12, "21", 2, _AUG_15),
    (13, "121", 3, _AUG_15),
    (14, "121", 3, _AUG_14),
]

DB_URL = "sqlite:///ledger.db"


def seed(session) -> None:
    """Insert the sample data into an empty schema (flush only)."""
    from ledger_kernel.models import Contract, Job, Profile

    for pid, first, last, profession, balance, ptype in PROFILES:
        session.add(Profile(
            id=pid,
            first_name=first,
            last_name=last,
            profession=profession,
            balance=Decimal(balance),
            type=ptype,
        ))
    session.flush()

    for cid, status, client_id, contractor_id in CONTRACTS:
        session.add(Contract(
            id=cid,
            terms="bla bla bla",
            status=status,
            client_id=client_id,
            contractor_id=contractor_id,
        ))
    session.flush()

    now = datetime.now(timezone.utc)
    for jid, price, contract_id, paid_at in JOBS:
        session.add(Job(
            id=jid,
            description="work",
            price=Decimal(price),
            contract_id=contract_id,
            paid=paid_at is not None,
            payment_date=paid_at,
            created_at=paid_at or now,
        ))
    session.flush()


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the ledger with sample data.")
    parser.add_argument(
        "--db-url", type=str, default=DB_URL,
        help=f"Database URL (default: {DB_URL})",
    )
    args = parser.parse_args()

    from ledger_kernel.db.engine import (
        build_engine,
        create_tables,
        drop_tables,
        make_session_factory,
        session_scope,
    )
    from ledger_kernel.logging_config import configure_logging

    configure_logging()
    engine = build_engine(args.db_url)
    try:
        drop_tables(engine)
        create_tables(engine)
        with session_scope(make_session_factory(engine)) as session:
            seed(session)
    finally:
        engine.dispose()

    print(
        f"Seeded {len(PROFILES)} profiles, {len(CONTRACTS)} contracts, "
        f"{len(JOBS)} jobs into {args.db_url}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
