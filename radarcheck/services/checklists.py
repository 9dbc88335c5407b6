"""Checklist persistence and radar status propagation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field
from sqlmodel import Session, select

from radarcheck.core.errors import MissingInput, NotFound
from radarcheck.db.session import run_in_session
from radarcheck.models import Checklist, Radar, RadarStatus
from radarcheck.models.columns import as_utc, sort_timestamp, utcnow
from radarcheck.services.notifications import NOTIFICATIONS

logger = logging.getLogger(__name__)


class ChecklistPayload(BaseModel):
    radar_id: Optional[int] = None
    sign_present: bool = False
    sign_legible: bool = False
    lane_paint_adequate: bool = False
    unobstructed: bool = False
    speed_plate_visible: bool = False
    sign_distance_m: Optional[int] = Field(default=None, ge=0)
    observations: str = ""
    photos: list[dict[str, Any]] = Field(default_factory=list)
    status: Optional[RadarStatus] = None
    inspected_at: Optional[datetime] = None


@dataclass
class ChecklistSaveResult:
    checklist: Checklist
    warnings: list[str] = field(default_factory=list)


def list_checklists(radar_id: int | None = None, session: Session | None = None) -> list[Checklist]:
    """Checklists newest first, optionally for a single radar."""

    def _list(db: Session) -> list[Checklist]:
        stmt = select(Checklist)
        if radar_id is not None:
            stmt = stmt.where(Checklist.radar_id == radar_id)
        rows = db.exec(stmt).all()
        return sorted(rows, key=lambda c: sort_timestamp(c.inspected_at), reverse=True)

    return run_in_session(_list, session)


def get_checklist(checklist_id: int, session: Session | None = None) -> Checklist:
    def _get(db: Session) -> Checklist:
        checklist = db.get(Checklist, checklist_id)
        if checklist is None:
            raise NotFound("checklist", checklist_id)
        return checklist

    return run_in_session(_get, session)


def save_checklist(
    payload: ChecklistPayload,
    checklist_id: int | None = None,
    session: Session | None = None,
) -> ChecklistSaveResult:
    """Create (or update, when ``checklist_id`` is given) and propagate status."""

    if payload.radar_id is None:
        raise MissingInput("Checklist must reference a radar (radar_id).")

    def _save(db: Session) -> ChecklistSaveResult:
        now = utcnow()
        data = payload.model_dump(exclude={"inspected_at"})
        inspected_at = as_utc(payload.inspected_at) if payload.inspected_at else None

        if checklist_id is not None:
            checklist = db.get(Checklist, checklist_id)
            if checklist is None:
                raise NotFound("checklist", checklist_id)
            for key, value in data.items():
                setattr(checklist, key, value)
            if inspected_at is not None:
                checklist.inspected_at = inspected_at
            checklist.updated_at = now
        else:
            checklist = Checklist(**data, inspected_at=inspected_at or now, created_at=now, updated_at=now)

        db.add(checklist)
        db.commit()
        db.refresh(checklist)

        warnings: list[str] = []
        warning = propagate_status(db, checklist)
        if warning:
            warnings.append(warning)
        db.refresh(checklist)
        return ChecklistSaveResult(checklist=checklist, warnings=warnings)

    return run_in_session(_save, session)


def propagate_status(db: Session, checklist: Checklist) -> str | None:
    """Copy the checklist verdict and date onto its radar.

    The last saved checklist wins, even when an older inspection is re-saved
    after a newer one. A checklist without a verdict leaves the radar as it
    is. Returns a warning message when the radar is missing.
    """
    if not checklist.status or checklist.radar_id is None:
        return None

    radar = db.get(Radar, checklist.radar_id)
    if radar is None:
        message = f"Radar {checklist.radar_id} not found; status not updated"
        logger.warning(message, extra={"checklist_id": checklist.id})
        NOTIFICATIONS.add("warning", message, {"checklist_id": checklist.id})
        return message

    radar.status = RadarStatus(checklist.status)
    radar.last_checklist_at = checklist.inspected_at
    radar.updated_at = utcnow()
    db.add(radar)
    db.commit()
    return None


def delete_checklist(checklist_id: int, session: Session | None = None) -> None:
    """Delete a checklist. The radar keeps whatever status was last propagated."""

    def _delete(db: Session) -> None:
        checklist = db.get(Checklist, checklist_id)
        if checklist is None:
            raise NotFound("checklist", checklist_id)
        db.delete(checklist)
        db.commit()

    run_in_session(_delete, session)
    logger.info("Checklist deleted", extra={"checklist_id": checklist_id})


__all__ = [
    "ChecklistPayload",
    "ChecklistSaveResult",
    "delete_checklist",
    "get_checklist",
    "list_checklists",
    "propagate_status",
    "save_checklist",
]
