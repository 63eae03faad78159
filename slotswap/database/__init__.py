"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

import logging
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker

from slotswap.core.config import settings

logger = logging.getLogger(__name__)

_DEFAULT_POOL_KWARGS: dict[str, Any] = {
    "pool_pre_ping": True,
    "pool_recycle": 300,
}


def build_engine_kwargs(db_url: str, *, echo: bool = False) -> dict[str, Any]:
    """Engine options for the given URL; SQLite needs thread sharing for the API threadpool."""

    if db_url.startswith("sqlite"):
        return {"echo": echo, "connect_args": {"check_same_thread": False}}
    kwargs = dict(_DEFAULT_POOL_KWARGS)
    kwargs["echo"] = echo
    return kwargs


def create_db_engine(db_url: str, *, echo: bool = False) -> Engine:
    db_engine = create_engine(db_url, **build_engine_kwargs(db_url, echo=echo))
    if db_url.startswith("sqlite"):
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)
    return db_engine


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine: Engine = create_db_engine(settings.database_url, echo=settings.database_echo)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables for registered models (development and tests)."""
    from slotswap import models  # noqa: F401  - registers mappers on Base.metadata

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Database tables ensured", extra={"event": "db_init", "url": str(target.url)})


__all__ = [
    "Base",
    "SessionLocal",
    "build_engine_kwargs",
    "create_db_engine",
    "engine",
    "get_db",
    "init_db",
]
