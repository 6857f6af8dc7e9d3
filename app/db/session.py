"""SQLAlchemy engine and session management."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generator, Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import StoreAppError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ignores ON DELETE CASCADE unless this pragma is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for the given URL.

    SQLite engines get foreign key enforcement, and in-memory SQLite databases
    share one connection so every session sees the same tables.
    """

    kwargs: dict[str, Any] = {"echo": echo}
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_engine() -> Engine:
    """Return a singleton engine bound to the configured database."""

    global _engine
    if _engine is None:
        _engine = build_engine(settings.db.url, echo=settings.db.echo)
    return _engine


def get_sessionmaker() -> sessionmaker[Session]:
    """Return a lazily initialised session factory."""

    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(), autoflush=False, expire_on_commit=False
        )
    return _session_factory


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a session and closes it afterwards."""

    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """Create tables for all registered models if they do not exist."""

    # Import models to ensure metadata is populated before create_all.
    from app import models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())


@contextmanager
def store_errors(session: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise SQLAlchemy failures as StoreAppError.

    Args:
        session: Session whose transaction is abandoned on failure.
        operation: Short name of the operation, logged and returned in details.

    Raises:
        StoreAppError: Wrapping the original SQLAlchemyError.
    """

    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(
            "store.operation_failed",
            extra={
                "operation": operation,
                "error_type": type(exc).__name__,
                "error_msg": str(exc),
            },
        )
        raise StoreAppError(
            code="store_error",
            message="The data store failed to complete the operation",
            details={"operation": operation},
        ) from exc
