"""Log buffer and notification endpoints for the dashboard."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from radarcheck.core.logging_config import get_log_buffer
from radarcheck.services.notifications import NOTIFICATIONS

router = APIRouter(tags=["logs"])


@router.get("/logs")
def list_logs(
    limit: int = Query(100, ge=1, le=500),
    level: str | None = Query(None, pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$"),
) -> dict[str, list[dict[str, str]]]:
    return {"logs": get_log_buffer(limit=limit, level=level)}


@router.get("/notifications")
def list_notifications(
    limit: int = Query(20, ge=1, le=200),
    level: str | None = Query(None, pattern="^(info|success|warning|error)$"),
) -> dict[str, list[dict[str, Any]]]:
    return {"notifications": [n.as_dict() for n in NOTIFICATIONS.recent(limit=limit, level=level)]}


__all__ = ["router"]
