"""Database layer - engine, base classes, money type, unit of work."""

from ledger_kernel.db.base import Base, TrackedBase
from ledger_kernel.db.engine import (
    build_engine,
    create_tables,
    drop_tables,
    make_session_factory,
    session_scope,
)
from ledger_kernel.db.types import MoneyCents
from ledger_kernel.db.unit_of_work import UnitOfWork

__all__ = [
    "build_engine",
    "make_session_factory",
    "session_scope",
    "create_tables",
    "drop_tables",
    "Base",
    "TrackedBase",
    "MoneyCents",
    "UnitOfWork",
]
