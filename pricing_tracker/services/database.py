"""
Engine and session handling for the pricing database.

Services never create sessions themselves; they use ``session_scope()``,
which commits on success and rolls back when the block raises. The test
suite swaps ``get_session_factory`` for an in-memory session.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..utils.config import get_config
from ..models.base import Base

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("business_profiles", "recipes", "recipe_lines")

_engine: Optional[Engine] = None
_SessionFactory: Optional[sessionmaker] = None


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
    """Turn on foreign keys for SQLite so deleting a profile cascades."""
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def create_database_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Build an engine for ``database_url`` (the configured URL by default).

    In-memory SQLite URLs get a StaticPool so every session sees the same
    database.
    """
    if database_url is None:
        config = get_config()
        config.ensure_directories()
        database_url = config.database_url

    logger.info(f"Opening database: {database_url}")

    in_memory = ":memory:" in database_url or "mode=memory" in database_url
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)
    if in_memory:
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False, "timeout": 30},
    )


def get_engine(force_recreate: bool = False) -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine

    if force_recreate or _engine is None:
        _engine = create_database_engine()
    return _engine


def get_session_factory() -> sessionmaker:
    """Return the process-wide session factory bound to ``get_engine()``."""
    global _SessionFactory

    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _SessionFactory


def get_session() -> Session:
    return get_session_factory()()


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Run a block of database work as one transaction.

    Example:
        with session_scope() as session:
            session.add(FixedExpense(profile_id=1, name="Rent", monthly_value=1500))
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_database(engine: Optional[Engine] = None) -> None:
    """Create any missing tables. Existing tables are left alone."""
    # Importing the package registers every model on Base.metadata
    from .. import models  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.create_all(engine)
    logger.info("Database tables ready")


def verify_database() -> bool:
    """True when the database answers and holds the pricing tables."""
    try:
        tables = set(inspect(get_engine()).get_table_names())
    except SQLAlchemyError as e:
        logger.error(f"Database check failed: {e}")
        return False
    return all(name in tables for name in REQUIRED_TABLES)


def close_connections() -> None:
    """Dispose of the engine; the next session opens a new one."""
    global _engine, _SessionFactory

    _SessionFactory = None
    if _engine is not None:
        _engine.dispose()
        _engine = None
    logger.info("Database connections closed")


def initialize_app_database() -> None:
    """Prepare the configured database for use, creating it if needed."""
    config = get_config()

    if config.uses_file_database:
        state = "existing" if config.database_exists() else "new"
        logger.info(f"Using {state} database at {config.database_path}")

    init_database(get_engine())
