"""Database models."""

from .checklist import Checklist
from .enums import RadarStatus, RoadClassification
from .radar import Radar

__all__ = [
    "Checklist",
    "Radar",
    "RadarStatus",
    "RoadClassification",
]
