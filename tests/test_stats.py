from __future__ import annotations

from datetime import datetime

from sqlmodel import Session

from radarcheck.models import Checklist, Radar, RadarStatus
from radarcheck.services.checklists import ChecklistPayload, save_checklist
from radarcheck.services.radares import RadarPayload, create_radar
from radarcheck.services.stats import (
    StatsService,
    compute_stats,
    latest_checklist_by_radar,
    stats_payload,
)


def _radar(radar_id: int, km: str, status: str | None) -> Radar:
    return Radar(id=radar_id, km=km, speed_kmh=60, status=status)


def test_compute_stats_counts_and_recent() -> None:
    radares = [
        _radar(1, "10+000", RadarStatus.COMPLIANT),
        _radar(2, "20+000", "non-compliant"),
        _radar(3, "30+000", RadarStatus.PENDING),
        _radar(4, "40+000", None),
    ]
    checklists = [
        Checklist(id=i, radar_id=rid, inspected_at=datetime(2024, 5, day))
        for i, (rid, day) in enumerate([(1, 1), (2, 4), (1, 3), (9, 2), (3, 5), (2, 6)], start=1)
    ]

    stats = compute_stats(radares, checklists, recent_limit=5)

    assert (stats.total, stats.compliant, stats.non_compliant, stats.pending) == (4, 1, 1, 2)
    assert stats.compliant + stats.non_compliant + stats.pending == stats.total
    assert [item.checklist.id for item in stats.recent_checklists] == [6, 5, 2, 3, 4]
    assert stats.recent_checklists[-1].radar_km == "N/A"


def test_compute_stats_empty() -> None:
    stats = compute_stats([], [], recent_limit=5)
    assert (stats.total, stats.compliant, stats.non_compliant, stats.pending) == (0, 0, 0, 0)
    assert stats.recent_checklists == []


def test_latest_checklist_by_radar() -> None:
    checklists = [
        Checklist(id=1, radar_id=1, inspected_at=datetime(2024, 5, 1)),
        Checklist(id=2, radar_id=1, inspected_at=datetime(2024, 5, 3)),
        Checklist(id=3, radar_id=2, inspected_at=datetime(2024, 5, 2)),
    ]
    latest = latest_checklist_by_radar(checklists)
    assert {rid: c.id for rid, c in latest.items()} == {1: 2, 2: 3}


def test_stats_service_reads_store(session: Session) -> None:
    radar = create_radar(RadarPayload(km="50+300", speed_kmh=60), session=session)
    create_radar(RadarPayload(km="50+500", speed_kmh=60), session=session)
    save_checklist(
        ChecklistPayload(radar_id=radar.id, status=RadarStatus.NON_COMPLIANT, sign_distance_m=120),
        session=session,
    )

    payload = stats_payload(StatsService(session).dashboard())

    assert payload["total"] == 2
    assert payload["non_compliant"] == 1
    assert payload["pending"] == 1
    assert payload["recent_checklists"][0]["radar_km"] == "50+300"
    assert payload["recent_checklists"][0]["sign_distance_m"] == 120
