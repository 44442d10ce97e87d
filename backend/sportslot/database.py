import logging
import time
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .errors import PersistenceError

logger = logging.getLogger(__name__)

IMMEDIATE_OPTION = "sportslot_begin_immediate"


def _connect_args(url: str) -> dict:
    wait = settings.transaction_max_wait_seconds
    if url.startswith("sqlite"):
        # check_same_thread=False: FastAPI runs sync endpoints on a threadpool.
        # timeout = how long a writer waits for the database lock.
        return {"check_same_thread": False, "timeout": wait}
    if url.startswith("postgresql"):
        lock_ms = int(wait * 1000)
        statement_ms = int(settings.transaction_timeout_seconds * 1000)
        return {"options": f"-c lock_timeout={lock_ms} -c statement_timeout={statement_ms}"}
    return {}


def create_db_engine(url: str) -> Engine:
    """Create an engine with the transaction budgets applied."""
    engine = create_engine(url, connect_args=_connect_args(url))

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _sqlite_connect(dbapi_connection, _):
            # Let SQLAlchemy emit BEGIN itself (see _sqlite_begin)
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            # Readers never block the writer and vice versa
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _sqlite_begin(conn):
            # Units of work take the write lock up front: a deferred transaction
            # that reads and then writes fails with SQLITE_BUSY instead of waiting.
            if conn.get_execution_options().get(IMMEDIATE_OPTION):
                conn.exec_driver_sql("BEGIN IMMEDIATE")
            else:
                conn.exec_driver_sql("BEGIN")

    return engine


engine = create_db_engine(settings.resolved_database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _has_pending_changes(db: Session) -> bool:
    return bool(db.new or db.dirty or db.deleted)


@contextmanager
def atomic(db: Session, timeout_seconds: float | None = None) -> Iterator[Session]:
    """
    Unit of work: everything inside the block commits together or not at all.

    A read transaction the session already holds is ended first, so the
    block always starts with the write lock taken.

    Raises PersistenceError when storage fails or the execution budget
    (settings.transaction_timeout_seconds) is exceeded before commit.
    """
    budget = settings.transaction_timeout_seconds if timeout_seconds is None else timeout_seconds
    started = time.monotonic()
    try:
        if db.in_transaction() and not _has_pending_changes(db):
            db.commit()
        if not db.in_transaction():
            db.connection(execution_options={IMMEDIATE_OPTION: True})
        yield db
        db.flush()
        elapsed = time.monotonic() - started
        if budget and elapsed > budget:
            raise PersistenceError(
                f"Transaction exceeded its {budget:g}s budget ({elapsed:.1f}s), please retry"
            )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Transaction rolled back")
        raise PersistenceError("Storage unavailable, please retry") from e
    except Exception:
        db.rollback()
        raise
