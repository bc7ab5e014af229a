from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config_loader import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(
    url: str,
    *,
    pool_min: int = 2,
    pool_max: int = 10,
    pool_timeout: int = 60,
    echo: bool = False,
) -> Engine:
    """Create the engine for ``url``.

    Server databases get a bounded pool: ``pool_min`` connections kept open,
    at most ``pool_max`` in flight, and callers beyond that wait up to
    ``pool_timeout`` seconds for a free connection. SQLite gets foreign key
    enforcement switched on for every connection; in-memory SQLite shares a
    single connection so every session sees the same database.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_size=pool_min,
        max_overflow=max(pool_max - pool_min, 0),
        pool_timeout=pool_timeout,
        pool_pre_ping=True,
        echo=echo,
    )


class Database:
    """Owns the engine and hands out sessions scoped to one unit of work."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = build_engine(
            settings.DATABASE_URL,
            pool_min=settings.DB_POOL_MIN,
            pool_max=settings.DB_POOL_MAX,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            echo=settings.DB_ECHO,
        )
        return cls(engine)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            try:
                db.close()
            except Exception:
                logger.exception("Failed to release database session")

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("Database connectivity check failed")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database pool closed")


def get_database(request: Request) -> Database:
    return request.app.state.database


# dependency for FastAPI
def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    with database.session() as db:
        yield db
