"""Database engine, session factory and the FastAPI `get_db` dependency."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import get_settings

Base = declarative_base()


def _build_engine(database_url: str) -> Engine:
    settings = get_settings()
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        # One shared connection so in-memory databases survive across sessions
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args={"application_name": settings.app_name},
    )


class DatabaseManager:
    """Owns the engine and session factory for the process."""

    def __init__(self, database_url: str | None = None) -> None:
        self.engine = _build_engine(database_url or get_settings().database_url)
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    @contextmanager
    def db_session(self) -> Generator[Session, None, None]:
        """Session scope for code running outside a request (relay, tasks)."""
        db = self.session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


db_manager = DatabaseManager()
engine = db_manager.engine
SessionLocal = db_manager.session_factory


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
