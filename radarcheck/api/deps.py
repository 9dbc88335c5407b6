"""API dependencies."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlmodel import Session

from radarcheck.db.session import get_session
from radarcheck.services.reporting import ReportService


def get_db() -> Generator[Session, None, None]:
    with get_session() as session:
        yield session


def get_report_service(session: Session = Depends(get_db)) -> ReportService:
    """Report service bound to the request session, highway and inspector from settings."""
    return ReportService(session)
