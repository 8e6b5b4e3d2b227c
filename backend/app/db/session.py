from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.models import Base

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 5


def create_engine_from_url(database_url: str, pool_size: int = DEFAULT_POOL_SIZE) -> Engine:
    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        # Needed for FastAPI + SQLite usage with multiple threads.
        connect_args = {"check_same_thread": False}
    # If we are using an in-memory SQLite database for tests, make sure the
    # same connection is reused (otherwise each session gets a fresh empty DB).
    if database_url in {"sqlite://", "sqlite:///:memory:"} or ":memory:" in database_url:
        return create_engine(
            database_url,
            connect_args=connect_args,
            poolclass=StaticPool,
            pool_pre_ping=True,
        )
    # Fixed-capacity pool: callers wait for a free connection, no overflow.
    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_size=pool_size,
        max_overflow=0,
        pool_pre_ping=True,
    )


@dataclass
class Database:
    engine: Engine
    SessionLocal: sessionmaker

    @classmethod
    def from_url(cls, database_url: str, pool_size: int = DEFAULT_POOL_SIZE) -> "Database":
        engine = create_engine_from_url(database_url, pool_size=pool_size)
        SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
        return cls(engine=engine, SessionLocal=SessionLocal)

    def create_tables(self) -> None:
        logger.info("Ensuring schema on %s", self.engine.url.render_as_string(hide_password=True))
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
