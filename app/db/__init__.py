"""Database session and metadata helpers."""

from app.db.session import (
    Base,
    build_engine,
    get_db,
    get_engine,
    get_sessionmaker,
    init_db,
)

__all__ = [
    "Base",
    "build_engine",
    "get_db",
    "get_engine",
    "get_sessionmaker",
    "init_db",
]
