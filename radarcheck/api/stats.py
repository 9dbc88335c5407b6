"""Dashboard counters."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from radarcheck.api.deps import get_db
from radarcheck.services.stats import StatsService, stats_payload

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
def get_stats(
    recent: int | None = Query(None, ge=0, le=50),
    session: Session = Depends(get_db),
) -> dict[str, Any]:
    return stats_payload(StatsService(session).dashboard(recent_limit=recent))


__all__ = ["router"]
