"""
Module: ledger_kernel.db.unit_of_work
Responsibility: The atomic unit of work.  Every read-modify-write sequence
    in the ledger (payment, deposit) and every read that must see one
    consistent snapshot runs as ``UnitOfWork.run(fn)``, so the boundary of
    atomicity is visible at each call site.
Architecture position: Kernel > DB.  Depends only on SQLAlchemy and the
    logging configuration.

Invariants enforced:
    - fn(session) either commits in full or leaves zero observable side
      effects.  Any exception raised by fn, kernel error or otherwise,
      rolls the transaction back and propagates unchanged.
    - Services called inside fn only flush; they never commit or roll back.
"""

from typing import Callable, TypeVar

from sqlalchemy.orm import Session, sessionmaker

from ledger_kernel.exceptions import LedgerKernelError
from ledger_kernel.logging_config import get_logger

logger = get_logger("db.unit_of_work")

T = TypeVar("T")


class UnitOfWork:
    """
    Runs a function of a Session inside one transaction.

    Usage:
        uow = UnitOfWork(session_factory)
        job = uow.run(lambda session: PaymentService(session, clock).pay(7, payer))
    """

    def __init__(self, session_factory: sessionmaker[Session] | Callable[[], Session]):
        self._session_factory = session_factory

    def run(self, fn: Callable[[Session], T]) -> T:
        session = self._session_factory()
        logger.debug("unit_of_work_started")
        try:
            result = fn(session)
            session.commit()
            logger.debug("unit_of_work_committed")
            return result
        except LedgerKernelError as exc:
            session.rollback()
            logger.info(
                "unit_of_work_rolled_back",
                extra={"error_code": exc.code},
            )
            raise
        except Exception:
            session.rollback()
            logger.warning("unit_of_work_rolled_back", exc_info=True)
            raise
        finally:
            session.close()
