"""
Common base for the write-side services (payment, deposit) and the
session-bound helpers they lean on (identity, reporting).

A service works inside a session it was handed.  It may flush so that a
later query in the same sequence sees its writes, but committing or rolling
back belongs to ``UnitOfWork.run``; that is what lets a failed payment leave
both balances untouched.
"""

from sqlalchemy.orm import Session


class BaseService:
    """Holds the caller's session.  Never commits."""

    def __init__(self, session: Session):
        self.session = session
