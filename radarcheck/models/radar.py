"""Radar (inspected site) model."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from radarcheck.core.config import settings
from radarcheck.models.columns import UTCDateTime, string_enum, utcnow
from radarcheck.models.enums import RadarStatus, RoadClassification


class Radar(SQLModel, table=True):
    """Roadside speed-enforcement or educational-signage installation."""

    __tablename__ = "radares"

    id: Optional[int] = Field(default=None, primary_key=True)
    km: str = Field(max_length=32, index=True, description="Kilometer post, e.g. 118+700")
    highway: str = Field(default_factory=lambda: settings.highway, max_length=32)
    direction: Optional[str] = Field(default=None, max_length=64)
    speed_kmh: int = Field(description="Posted speed limit in km/h")
    classification: RoadClassification = Field(
        default=RoadClassification.RURAL,
        sa_column=Column(string_enum(RoadClassification, 48), nullable=False, default=RoadClassification.RURAL),
    )
    radar_type: str = Field(default_factory=lambda: settings.default_radar_type, max_length=32)
    municipality: Optional[str] = Field(default=None, max_length=128)
    description: str = Field(default="")
    photos: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    # Written only by checklist status propagation
    status: RadarStatus = Field(
        default=RadarStatus.PENDING,
        sa_column=Column(string_enum(RadarStatus, 16), nullable=False, index=True, default=RadarStatus.PENDING),
    )
    last_checklist_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCDateTime, nullable=True))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime, nullable=False))


__all__ = ["Radar"]
