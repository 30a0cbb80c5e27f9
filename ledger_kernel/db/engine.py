"""
Module: ledger_kernel.db.engine
Responsibility: Build engines and session factories for the ledger store,
    and create or drop its schema.  There is no process-wide engine: callers
    build one and pass the session factory to whatever needs it.
Architecture position: Kernel > DB.  create_tables/drop_tables import
    ledger_kernel.models so the metadata is complete; nothing else here
    reaches above db/.

Invariants enforced:
    - PostgreSQL runs at READ COMMITTED.  The payment and deposit paths take
      explicit row locks (SELECT ... FOR UPDATE) on top of that.
    - SQLite ignores FOR UPDATE, so every SQLite transaction opens with
      BEGIN IMMEDIATE and holds the write lock from its first read.  The
      driver's own transaction handling is switched off; it would only
      begin a transaction at the first INSERT or UPDATE.
    - In-memory SQLite shares one connection through StaticPool, otherwise
      every new connection would see an empty database.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from ledger_kernel.logging_config import get_logger

logger = get_logger("db.engine")


def _begin_immediate_on(engine: Engine) -> None:
    """Make every SQLite transaction take the write lock up front."""

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(
    database_url: str,
    echo: bool = False,
    pool_size: int = 20,
    max_overflow: int = 10,
    pool_timeout: int = 30,
) -> Engine:
    """Create an Engine configured for the URL's backend."""
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        options: dict = {
            "connect_args": {
                "check_same_thread": False,
                "isolation_level": None,
                "timeout": pool_timeout,
            },
        }
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **options)
        _begin_immediate_on(engine)
    else:
        engine = create_engine(
            url,
            echo=echo,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_pre_ping=True,
            isolation_level="READ COMMITTED",
        )

    logger.info(
        "engine_built",
        extra={"dialect": engine.dialect.name, "echo": echo},
    )
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Session factory for one engine.

    expire_on_commit is off so DTOs built inside a unit of work can still
    read loaded attributes after it commits.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """
    Commit on a clean exit, roll back on any exception.

    For scripts; gateway operations go through UnitOfWork instead.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("session_scope_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables(engine: Engine) -> None:
    from ledger_kernel.db.base import Base
    import ledger_kernel.models  # noqa: F401

    Base.metadata.create_all(engine)


def drop_tables(engine: Engine) -> None:
    from ledger_kernel.db.base import Base
    import ledger_kernel.models  # noqa: F401

    Base.metadata.drop_all(engine)
