"""Engine construction and request-scoped sessions."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from terminal_terrors.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for the players, save, and presence tables."""


# Registers every table on Base.metadata.
import terminal_terrors.models  # noqa: E402,F401


def make_engine(url: str | None = None, **kwargs: Any) -> Engine:
    """Build an engine for ``url`` (the configured database by default).

    SQLite connections may be used from FastAPI's worker threads; server
    databases get a liveness check on checkout.
    """
    url = url or settings.effective_database_url
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    else:
        kwargs.setdefault("pool_pre_ping", True)
    kwargs.setdefault("echo", settings.sql_debug)
    return create_engine(url, **kwargs)


engine = make_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine | None = None) -> None:
    """Create any missing tables on ``bind`` (the app engine by default)."""
    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine | None = None) -> None:
    Base.metadata.drop_all(bind=bind or engine)
