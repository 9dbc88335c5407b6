"""Read-only access to the sign-distance rules."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from radarcheck.models import RadarStatus, RoadClassification
from radarcheck.services.rules import DEFAULT_ENGINE

router = APIRouter(prefix="/rules", tags=["rules"])


class EvaluatePayload(BaseModel):
    classification: Optional[str] = None
    speed_kmh: Optional[int] = None
    distance_m: Optional[float] = None


@router.get("/interval")
def get_interval(
    classification: str | None = Query(None),
    speed_kmh: int | None = Query(None),
) -> dict[str, Any]:
    interval = DEFAULT_ENGINE.lookup_interval(classification, speed_kmh)
    return {
        "classification": classification,
        "speed_kmh": speed_kmh,
        **interval.as_dict(),
    }


@router.post("/evaluate")
def evaluate(payload: EvaluatePayload) -> dict[str, Any]:
    check = DEFAULT_ENGINE.check_distance(payload.classification, payload.speed_kmh, payload.distance_m)
    return {
        "interval": check.interval.as_dict(),
        "verdict": check.verdict.value,
        "description": check.description,
    }


@router.get("/labels")
def get_labels() -> dict[str, dict[str, str]]:
    return {
        "status": {s.value: DEFAULT_ENGINE.label_for_status(s) for s in RadarStatus},
        "classification": {
            c.value: DEFAULT_ENGINE.label_for_classification(c) for c in RoadClassification
        },
    }


__all__ = ["router"]
