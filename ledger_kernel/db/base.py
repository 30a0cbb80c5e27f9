"""
Declarative bases for the ledger models.

Every table gets an autoincrementing integer ``id``; profile ids double as
caller tokens.  Annotating a column ``Mapped[Decimal]`` stores it as
integer cents through MoneyCents, and ``Mapped[datetime]`` becomes a
timezone-aware timestamp.  Nothing here imports from models/ or above.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ledger_kernel.db.types import MoneyCents


class Base(DeclarativeBase):
    type_annotation_map: ClassVar[dict] = {
        Decimal: MoneyCents(),
        datetime: DateTime(timezone=True),
    }

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TrackedBase(Base):
    """
    Adds insert and update timestamps.

    ``Job.created_at`` is the date the best-profession report filters on,
    so loaders of historic data set it explicitly.  The defaults are
    computed in Python so stored values keep the microsecond precision
    that window bounds are compared at.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
        nullable=False,
    )
