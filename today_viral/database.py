"""SQLAlchemy engine and sessions for the hosted PostgreSQL store (sqlite in tests)."""
from __future__ import annotations

from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings

settings = get_settings()


def _engine_options(database_url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True, "future": True}
    if make_url(database_url).get_backend_name() == "sqlite":
        # Request handlers run in a worker thread pool.
        options["connect_args"] = {"check_same_thread": False}
    return options


engine: Engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
    expire_on_commit=False,
)

Base = declarative_base()


def get_session() -> Generator[Session, None, None]:
    """Yield one session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_session() -> Session:
    """Session for page renders outside the dependency system."""
    return SessionLocal()


def init_db() -> None:
    """Create the profiles, posts, likes and comments tables when missing."""
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


__all__ = [
    "Base",
    "SessionLocal",
    "create_session",
    "engine",
    "get_session",
    "init_db",
]
