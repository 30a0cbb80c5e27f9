"""
Read-side base class.

Each selector method is one fixed query parameterized by the caller's
profile id (or a report window); nothing composes filters from request
fields.  Selectors never add, flush, commit or delete, and they hand back
DTOs or plain values instead of ORM rows.
"""

from sqlalchemy.orm import Session


class BaseSelector:
    """Read-only queries over the caller's session."""

    def __init__(self, session: Session):
        self.session = session
