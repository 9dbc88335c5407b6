"""Inspection checklist model."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from radarcheck.models.columns import UTCDateTime, string_enum, utcnow
from radarcheck.models.enums import RadarStatus


class Checklist(SQLModel, table=True):
    """Findings of one inspection visit to a radar."""

    __tablename__ = "checklists"

    id: Optional[int] = Field(default=None, primary_key=True)
    # Integrity is kept by the store: a missing radar only skips status propagation
    radar_id: int = Field(index=True)
    sign_present: bool = Field(default=False)
    sign_legible: bool = Field(default=False)
    lane_paint_adequate: bool = Field(default=False)
    unobstructed: bool = Field(default=False)
    speed_plate_visible: bool = Field(default=False)
    sign_distance_m: Optional[int] = Field(default=None, description="Null when not measured")
    observations: str = Field(default="")
    photos: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    # Null when the inspector gave no verdict; such a checklist leaves its radar alone
    status: Optional[RadarStatus] = Field(
        default=None,
        sa_column=Column(string_enum(RadarStatus, 16), nullable=True),
    )
    inspected_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False, index=True)
    )
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))


__all__ = ["Checklist"]
