"""SQLModel session management."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from radarcheck.core.config import settings

T = TypeVar("T")


def build_engine(url: str | None = None, **kwargs) -> Engine:
    database_url = url or settings.database_url
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
    return create_engine(database_url, echo=settings.database_echo, **kwargs)


engine = build_engine()


def init_db(target: Engine | None = None) -> None:
    # Registers every table on SQLModel.metadata
    from radarcheck import models  # noqa: F401

    SQLModel.metadata.create_all(target or engine)


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session as a context manager (for use with 'with' statement).

    For FastAPI dependency injection, use get_session_dep() instead.
    """
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()


def run_in_session(fn: Callable[[Session], T], session: Optional[Session] = None) -> T:
    """Run ``fn`` on the given session, or on a short-lived one."""
    if session is not None:
        return fn(session)
    with get_session() as db:
        return fn(db)


def get_session_dep() -> Iterator[Session]:
    """Get a database session for FastAPI dependency injection.

    Plain generator (not a context manager) because FastAPI's Depends()
    drives it.
    """
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
