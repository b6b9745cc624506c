"""
Module: erp_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory management,
    and read scope utilities.  This is the single point of database
    connection configuration for the analytics layer.
Architecture position: Kernel > DB.  May import from db/tables.py.
    MUST NOT import from selectors/, domain/, or outer layers.

Invariants enforced:
    - The analytics layer only reads.  ``read_scope`` never commits; it
      rolls back on exit so no accidental write survives a request.

Failure modes:
    - EngineNotInitializedError if get_engine/get_session is called before
      init_engine_from_url().
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from erp_kernel.db.tables import metadata
from erp_kernel.exceptions import EngineNotInitializedError
from erp_kernel.logging_config import get_logger

logger = get_logger("db.engine")

# Module-level engine and session factory
_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def init_engine_from_url(database_url: str, echo: bool = False, **engine_kwargs: Any) -> Engine:
    """
    Initialize the SQLAlchemy engine from a database URL.

    Postconditions: Module-level _engine and _SessionFactory are initialized.
        A second call replaces the first.

    Args:
        database_url: SQLAlchemy URL (``postgresql://...`` in production,
            ``sqlite://`` in tests).
        echo: If True, log all SQL statements.
        engine_kwargs: Passed through to ``create_engine`` (pool sizing etc.).
    """
    global _engine, _SessionFactory

    _engine = create_engine(database_url, echo=echo, **engine_kwargs)
    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    logger.info(
        "engine_initialized",
        extra={"dialect": _engine.dialect.name, "echo": echo},
    )
    return _engine


def get_engine() -> Engine:
    """Get the current engine instance."""
    if _engine is None:
        raise EngineNotInitializedError()
    return _engine


def get_session() -> Session:
    """Get a new session instance."""
    if _SessionFactory is None:
        raise EngineNotInitializedError()
    return _SessionFactory()


@contextmanager
def read_scope() -> Generator[Session, None, None]:
    """
    Provide a read-only scope around a series of selector calls.

    The session is always rolled back and closed on exit; exceptions
    propagate to the caller.
    """
    session = get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def create_tables() -> None:
    """Create every table in ``erp_kernel.db.tables.metadata`` (tests and local dev)."""
    engine = get_engine()
    metadata.create_all(engine)
    logger.info("tables_created", extra={"table_count": len(metadata.tables)})


def drop_tables() -> None:
    """Drop every table in ``erp_kernel.db.tables.metadata``."""
    metadata.drop_all(get_engine())


def reset_engine() -> None:
    """Dispose of the engine and forget the session factory. FOR TESTING ONLY."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None
