"""Radar registration, editing, deletion and bulk import."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError as PayloadError, ValidationInfo, field_validator
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from radarcheck.core.config import settings
from radarcheck.core.errors import NotFound
from radarcheck.db.session import run_in_session
from radarcheck.models import Checklist, Radar, RadarStatus, RoadClassification
from radarcheck.models.columns import utcnow
from radarcheck.services.kilometer import sort_by_km
from radarcheck.services.notifications import NOTIFICATIONS

logger = logging.getLogger(__name__)


class RadarPayload(BaseModel):
    """User-editable radar fields. Status is derived and never accepted here."""

    km: str = Field(min_length=1, max_length=32)
    highway: Optional[str] = Field(default=None, max_length=32)
    direction: Optional[str] = Field(default=None, max_length=64)
    speed_kmh: int = Field(ge=0, le=300)
    classification: RoadClassification = RoadClassification.RURAL
    radar_type: Optional[str] = Field(default=None, max_length=32)
    municipality: Optional[str] = Field(default=None, max_length=128)
    description: str = ""
    photos: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("km")
    @classmethod
    def _strip_km(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("km must not be blank")
        return value

    @field_validator("highway", "radar_type")
    @classmethod
    def _null_means_default(cls, value: Optional[str], info: ValidationInfo) -> str:
        # Both columns are NOT NULL; null maps to the configured default
        if value is not None:
            return value
        return settings.highway if info.field_name == "highway" else settings.default_radar_type


@dataclass
class ImportResult:
    imported: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {"imported": self.imported, "failed": self.failed, "errors": self.errors}


def _to_model(payload: RadarPayload) -> Radar:
    data = payload.model_dump(exclude_none=True)
    return Radar(**data, status=RadarStatus.PENDING)


def list_radares(
    search: str | None = None,
    status: RadarStatus | None = None,
    session: Session | None = None,
) -> list[Radar]:
    """List radars ordered by kilometer post, optionally filtered."""

    def _list(db: Session) -> list[Radar]:
        stmt = select(Radar)
        if status is not None:
            stmt = stmt.where(Radar.status == RadarStatus(status))
        rows = db.exec(stmt).all()
        if search:
            term = search.lower()
            rows = [
                r
                for r in rows
                if term in str(r.km).lower()
                or (r.municipality and term in r.municipality.lower())
                or (r.description and term in r.description.lower())
            ]
        return sort_by_km(rows)

    return run_in_session(_list, session)


def get_radar(radar_id: int, session: Session | None = None) -> Radar:
    def _get(db: Session) -> Radar:
        radar = db.get(Radar, radar_id)
        if radar is None:
            raise NotFound("radar", radar_id)
        return radar

    return run_in_session(_get, session)


def create_radar(payload: RadarPayload, session: Session | None = None) -> Radar:
    def _create(db: Session) -> Radar:
        radar = _to_model(payload)
        db.add(radar)
        db.commit()
        db.refresh(radar)
        logger.info("Radar registered", extra={"radar_id": radar.id, "km": radar.km})
        return radar

    return run_in_session(_create, session)


def update_radar(radar_id: int, payload: RadarPayload, session: Session | None = None) -> Radar:
    """Apply a user edit; status and last-checklist timestamp stay untouched."""

    def _update(db: Session) -> Radar:
        radar = db.get(Radar, radar_id)
        if radar is None:
            raise NotFound("radar", radar_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(radar, key, value)
        radar.updated_at = utcnow()
        db.add(radar)
        db.commit()
        db.refresh(radar)
        return radar

    return run_in_session(_update, session)


def delete_radar(radar_id: int, session: Session | None = None) -> int:
    """Delete a radar and all of its checklists. Returns the checklist count removed."""

    def _delete(db: Session) -> int:
        radar = db.get(Radar, radar_id)
        if radar is None:
            raise NotFound("radar", radar_id)
        checklists = db.exec(select(Checklist).where(Checklist.radar_id == radar_id)).all()
        for checklist in checklists:
            db.delete(checklist)
        db.delete(radar)
        db.commit()
        logger.info("Radar deleted", extra={"radar_id": radar_id, "checklists": len(checklists)})
        return len(checklists)

    return run_in_session(_delete, session)


def import_radares(
    payloads: Iterable[RadarPayload | Mapping[str, Any]],
    batch_size: int | None = None,
    session: Session | None = None,
) -> ImportResult:
    """Insert radars in bounded chunks, each committed on its own.

    A chunk that fails is rolled back and replayed row by row, so only the
    offending rows are lost.
    """
    size = max(1, batch_size or settings.import_batch_size)
    result = ImportResult()

    valid: list[RadarPayload] = []
    for index, raw in enumerate(payloads, start=1):
        try:
            valid.append(raw if isinstance(raw, RadarPayload) else RadarPayload.model_validate(raw))
        except PayloadError as exc:
            result.failed += 1
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ())) or "row"
            result.errors.append(f"row {index}: {location}: {first.get('msg', 'invalid')}")

    def _import(db: Session) -> ImportResult:
        for start in range(0, len(valid), size):
            chunk = valid[start:start + size]
            try:
                db.add_all([_to_model(p) for p in chunk])
                db.commit()
                result.imported += len(chunk)
            except SQLAlchemyError:
                db.rollback()
                logger.warning("Import chunk failed; retrying row by row", extra={"offset": start})
                _import_rows(db, chunk, start, result)
        return result

    run_in_session(_import, session)

    level = "warning" if result.failed else "success"
    NOTIFICATIONS.add(level, f"{result.imported} radares importados", result.as_dict())
    logger.info("Radar import finished", extra=result.as_dict())
    return result


def _import_rows(db: Session, chunk: Sequence[RadarPayload], offset: int, result: ImportResult) -> None:
    for position, payload in enumerate(chunk, start=offset + 1):
        try:
            db.add(_to_model(payload))
            db.commit()
            result.imported += 1
        except SQLAlchemyError as exc:
            db.rollback()
            result.failed += 1
            result.errors.append(f"row {position}: {exc.__class__.__name__}")


def count_radares(session: Session | None = None) -> int:
    return run_in_session(lambda db: len(db.exec(select(Radar.id)).all()), session)


def clear_all(session: Session | None = None) -> None:
    """Delete every checklist and radar."""

    def _clear(db: Session) -> None:
        db.exec(delete(Checklist))
        db.exec(delete(Radar))
        db.commit()

    run_in_session(_clear, session)
    logger.warning("All radar and checklist records deleted")


__all__ = [
    "ImportResult",
    "RadarPayload",
    "clear_all",
    "count_radares",
    "create_radar",
    "delete_radar",
    "get_radar",
    "import_radares",
    "list_radares",
    "update_radar",
]
