# restobill/db/engine.py

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from restobill.config import settings
from restobill.errors import LedgerError, StorageError

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record) -> None:
    # SQLite ships with foreign keys off; bill_items/credit_bills rely on them
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    engine = create_engine(url, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache(maxsize=None)
def _cached_engine(url: str, echo: bool) -> Engine:
    return build_engine(url, echo=echo)


def get_engine() -> Engine:
    """
    Return the process-wide engine for settings.DATABASE_URL.

    Also used as a FastAPI dependency, so tests can swap it through
    app.dependency_overrides.
    """
    return _cached_engine(settings.DATABASE_URL, settings.DB_ECHO)


@contextmanager
def write_transaction(engine: Engine, action: str) -> Iterator[Connection]:
    """
    One all-or-nothing unit of work. Any exception rolls back every row
    written inside the block; SQLAlchemy failures come out as StorageError.
    """
    try:
        with engine.begin() as conn:
            yield conn
    except LedgerError:
        raise
    except IntegrityError as exc:
        logger.warning("%s rejected by the store: %s", action, exc.orig)
        raise StorageError(
            f"{action} rejected by the store: {exc.orig}",
            constraint_violation=True,
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception("%s failed", action)
        raise StorageError(f"{action} failed: {exc}") from exc


@contextmanager
def read_connection(engine: Engine, action: str) -> Iterator[Connection]:
    try:
        with engine.connect() as conn:
            yield conn
    except SQLAlchemyError as exc:
        logger.exception("%s failed", action)
        raise StorageError(f"{action} failed: {exc}") from exc
