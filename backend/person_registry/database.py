import logging
from contextlib import contextmanager
from typing import Iterator
from typing import Optional

from sqlalchemy import Connection
from sqlalchemy import Engine
from sqlalchemy import create_engine
from sqlalchemy import inspect
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from person_registry.config import DatabaseConfig
from person_registry.exceptions import storage_error
from person_registry.models.tables import PEOPLE_TABLE_NAME
from person_registry.models.tables import metadata
from person_registry.models.tables import people

logger = logging.getLogger(__name__)


def make_engine(db_url: str, **kwargs) -> Engine:
    """Create a SQLAlchemy engine with the given URL and options.

    Args:
        db_url: Database connection URL
        **kwargs: Additional arguments for create_engine

    Returns:
        A SQLAlchemy Engine instance
    """
    connect_args = kwargs.pop("connect_args", {})
    if db_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", 30)
        # Every pooled connection to ``:memory:`` is a brand-new empty database.
        # A single shared connection keeps connection-per-operation callers
        # looking at the same data.
        if ":memory:" in db_url:
            kwargs.setdefault("poolclass", StaticPool)

    return create_engine(db_url, connect_args=connect_args, **kwargs)


def engine_from_config(config: DatabaseConfig) -> Engine:
    """Build an engine for an explicit :class:`DatabaseConfig`."""
    logger.info("Creating database engine for environment %s", config.environment.name)
    return make_engine(config.url, echo=config.echo)


@contextmanager
def db_connection(engine: Engine, *, transactional: bool = True) -> Iterator[Connection]:
    """Acquire a connection for exactly one unit of work.

    With ``transactional=True`` the work is committed on success and rolled
    back on error.  The connection is always returned to the pool.

    Usage:
        with db_connection(engine) as conn:
            conn.execute(stmt)
    """
    if transactional:
        with engine.begin() as conn:
            yield conn
    else:
        with engine.connect() as conn:
            yield conn


def initialize_database(engine: Engine) -> None:
    """Create the ``people`` table if it does not exist yet."""
    try:
        metadata.create_all(bind=engine)
    except SQLAlchemyError as exc:
        logger.error("Error initialising database: %s", exc)
        raise storage_error("Error initialising database", exc) from exc
    logger.info("Table %s created or already present", PEOPLE_TABLE_NAME)


def table_exists(engine: Engine, table_name: str) -> bool:
    """Return *True* when *table_name* exists; failures are logged and read as *False*."""
    try:
        return inspect(engine).has_table(table_name)
    except SQLAlchemyError as exc:
        logger.warning("Error checking whether table %s exists: %s", table_name, exc)
        return False


def clear_database(engine: Engine) -> None:
    """Delete every person row, leaving the schema in place."""
    if not table_exists(engine, PEOPLE_TABLE_NAME):
        logger.info("Table %s does not exist, nothing to clear", PEOPLE_TABLE_NAME)
        return

    try:
        with db_connection(engine) as conn:
            conn.execute(people.delete())
    except SQLAlchemyError as exc:
        logger.error("Error clearing database: %s", exc)
        raise storage_error("Error clearing database", exc) from exc
    logger.info("Database cleared")


def drop_database(engine: Engine) -> None:
    """Drop the ``people`` table."""
    try:
        metadata.drop_all(bind=engine)
    except SQLAlchemyError as exc:
        logger.error("Error dropping database tables: %s", exc)
        raise storage_error("Error dropping database tables", exc) from exc


def is_connection_available(engine: Engine) -> bool:
    """Return *True* when a connection can be opened and queried."""
    try:
        with db_connection(engine, transactional=False) as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as exc:
        logger.warning("No database connection available: %s", exc)
        return False


def dispose_engine(engine: Optional[Engine]) -> None:
    """Close pooled connections that are no longer needed."""
    if engine is None:
        return
    engine.dispose()
    logger.info("Database connections closed")
