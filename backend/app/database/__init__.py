"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings

logger = logging.getLogger(__name__)

_DEFAULT_POOL_KWARGS: dict[str, Any] = {
    "pool_size": 5,
    "max_overflow": 10,
    # Fail fast when the pool is exhausted instead of blocking the request
    "pool_timeout": 5,
    "pool_recycle": 1800,
    "pool_pre_ping": True,
}


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"}


def build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """Engine options per dialect."""

    kwargs: dict[str, Any] = {"echo": settings.sql_echo, "future": True}
    if _is_sqlite(db_url):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(db_url):
            # A single shared connection, otherwise each checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        return kwargs

    kwargs.update(_DEFAULT_POOL_KWARGS)
    kwargs["connect_args"] = {
        "connect_timeout": 5,
        "options": "-c statement_timeout=15000",
        "application_name": "mentorship_backend",
    }
    return kwargs


def create_db_engine(db_url: str) -> Engine:
    """Create an engine with the project defaults applied."""
    new_engine = create_engine(db_url, **build_engine_kwargs(db_url))
    if _is_sqlite(db_url):
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite ignores ON DELETE actions unless foreign keys are switched on per connection."""
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


db_url = settings.get_database_url()
engine: Engine = create_db_engine(db_url)


# Log pool events for monitoring
@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
    connection_record.info["connect_time"] = datetime.now()
    logger.debug("Database connection established")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, always closed."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = [
    "Base",
    "SessionLocal",
    "build_engine_kwargs",
    "create_db_engine",
    "engine",
    "get_db",
]
