"""Dashboard aggregation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Sequence

from sqlmodel import Session, select

from radarcheck.core.config import settings
from radarcheck.db.session import run_in_session
from radarcheck.models import Checklist, Radar, RadarStatus
from radarcheck.models.columns import sort_timestamp


@dataclass
class RecentChecklist:
    checklist: Checklist
    radar_km: str


@dataclass
class DashboardStats:
    total: int = 0
    compliant: int = 0
    non_compliant: int = 0
    pending: int = 0
    recent_checklists: list[RecentChecklist] = field(default_factory=list)


def _inspected_at(checklist: Checklist) -> datetime:
    return sort_timestamp(checklist.inspected_at)


def compute_stats(
    radares: Sequence[Radar], checklists: Iterable[Checklist], recent_limit: int = 5
) -> DashboardStats:
    """Count radars per status and pick the newest checklists across all radars."""
    stats = DashboardStats(total=len(radares))
    for radar in radares:
        if radar.status == RadarStatus.COMPLIANT:
            stats.compliant += 1
        elif radar.status == RadarStatus.NON_COMPLIANT:
            stats.non_compliant += 1
        elif not radar.status or radar.status == RadarStatus.PENDING:
            stats.pending += 1

    km_by_id = {radar.id: radar.km for radar in radares}
    recent = sorted(checklists, key=_inspected_at, reverse=True)[: max(0, recent_limit)]
    stats.recent_checklists = [
        RecentChecklist(checklist=c, radar_km=km_by_id.get(c.radar_id) or "N/A") for c in recent
    ]
    return stats


def latest_checklist_by_radar(checklists: Iterable[Checklist]) -> dict[int, Checklist]:
    """Newest checklist (by inspection date) for each radar id."""
    latest: dict[int, Checklist] = {}
    for checklist in checklists:
        current = latest.get(checklist.radar_id)
        if current is None or _inspected_at(checklist) > _inspected_at(current):
            latest[checklist.radar_id] = checklist
    return latest


class StatsService:
    def __init__(self, session: Session | None = None) -> None:
        self.session = session

    def dashboard(self, recent_limit: int | None = None) -> DashboardStats:
        limit = settings.recent_activity_limit if recent_limit is None else recent_limit

        def _load(db: Session) -> DashboardStats:
            radares = db.exec(select(Radar)).all()
            checklists = db.exec(select(Checklist)).all()
            return compute_stats(radares, checklists, recent_limit=limit)

        return run_in_session(_load, self.session)


def stats_payload(stats: DashboardStats) -> dict[str, Any]:
    return {
        "total": stats.total,
        "compliant": stats.compliant,
        "non_compliant": stats.non_compliant,
        "pending": stats.pending,
        "recent_checklists": [
            {
                "id": item.checklist.id,
                "radar_id": item.checklist.radar_id,
                "radar_km": item.radar_km,
                "status": item.checklist.status,
                "sign_distance_m": item.checklist.sign_distance_m,
                "inspected_at": item.checklist.inspected_at.isoformat()
                if item.checklist.inspected_at
                else None,
            }
            for item in stats.recent_checklists
        ],
    }


__all__ = [
    "DashboardStats",
    "RecentChecklist",
    "StatsService",
    "compute_stats",
    "latest_checklist_by_radar",
    "stats_payload",
]
