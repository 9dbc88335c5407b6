"""
Compliance rule engine for speed-camera warning signs.

Decides where the warning sign ahead of a radar must stand and whether a
measured placement complies:

  lookup_interval      -> allowed [min, max] distance for a road class and speed
  evaluate_distance    -> compliant / non-compliant / unknown for one measurement
  label_for_status     -> display label of a status
  label_for_classification -> display label of a road class

Distance table (CONTRAN signage resolution), in meters:

  classification                     speed >= 80     speed < 80
  urban                              400 - 500       100 - 300
  rural-with-urban-characteristics   400 - 500       100 - 300
  rural                              1000 - 2000     300 - 1000

Unknown classifications use the rural row. The tables are immutable and are
handed to ComplianceRuleEngine, so alternate tables can be injected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from radarcheck.core.errors import MissingInput, ValidationError
from radarcheck.models.enums import RadarStatus, RoadClassification


# ==============================================================
# Value types
# ==============================================================

class DistanceVerdict(str, Enum):
    """Outcome of checking one measured sign distance."""
    UNKNOWN = "unknown"              # distance not measured
    COMPLIANT = "compliant"
    NON_COMPLIANT = "non-compliant"


@dataclass(frozen=True)
class DistanceInterval:
    """Closed interval [min, max] in meters."""
    min: int
    max: int

    def __post_init__(self) -> None:
        for bound in (self.min, self.max):
            if isinstance(bound, bool) or not isinstance(bound, (int, float)):
                raise ValidationError(f"Interval bounds must be numeric, got {bound!r}.")
            if bound < 0:
                raise ValidationError(f"Interval bounds must not be negative, got {bound!r}.")
        if self.min > self.max:
            raise ValidationError(f"Malformed interval: min {self.min} > max {self.max}.")

    def contains(self, distance: float) -> bool:
        return self.min <= distance <= self.max

    def as_dict(self) -> dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class SpeedBands:
    high: DistanceInterval   # speed >= threshold
    low: DistanceInterval    # speed <  threshold


@dataclass(frozen=True)
class DistanceCheck:
    interval: DistanceInterval
    verdict: DistanceVerdict
    description: str


# ==============================================================
# Rule tables
# ==============================================================

@dataclass(frozen=True)
class RuleTables:
    intervals: Mapping[RoadClassification, SpeedBands]
    status_labels: Mapping[RadarStatus, str]
    classification_labels: Mapping[RoadClassification, str]
    speed_threshold_kmh: int = 80
    fallback_classification: RoadClassification = RoadClassification.RURAL
    default_status_label: str = "Pendente"
    default_classification_label: str = "N/A"

    def __post_init__(self) -> None:
        if self.fallback_classification not in self.intervals:
            raise ValidationError(
                f"Interval table has no row for fallback {self.fallback_classification.value!r}."
            )
        # Freeze caller-supplied dicts
        object.__setattr__(self, "intervals", MappingProxyType(dict(self.intervals)))
        object.__setattr__(self, "status_labels", MappingProxyType(dict(self.status_labels)))
        object.__setattr__(
            self, "classification_labels", MappingProxyType(dict(self.classification_labels))
        )


_URBAN_BANDS = SpeedBands(high=DistanceInterval(400, 500), low=DistanceInterval(100, 300))

DEFAULT_TABLES = RuleTables(
    intervals={
        RoadClassification.URBAN: _URBAN_BANDS,
        RoadClassification.RURAL_URBAN: _URBAN_BANDS,
        RoadClassification.RURAL: SpeedBands(
            high=DistanceInterval(1000, 2000), low=DistanceInterval(300, 1000)
        ),
    },
    status_labels={
        RadarStatus.COMPLIANT: "Conforme",
        RadarStatus.NON_COMPLIANT: "Não Conforme",
        RadarStatus.PENDING: "Pendente",
    },
    classification_labels={
        RoadClassification.URBAN: "Via Urbana",
        RoadClassification.RURAL_URBAN: "Rural c/ caract. urbana",
        RoadClassification.RURAL: "Via Rural",
    },
)

# Codes used in the spreadsheet and PDF columns
_SHORT_CODES = {
    RoadClassification.URBAN: "URBANA",
    RoadClassification.RURAL_URBAN: "RCU",
    RoadClassification.RURAL: "RURAL",
}


# ==============================================================
# Engine
# ==============================================================

@dataclass(frozen=True)
class ComplianceRuleEngine:
    """Pure, stateless evaluation over a set of rule tables."""

    tables: RuleTables = field(default=DEFAULT_TABLES)

    def lookup_interval(
        self, classification: RoadClassification | str | None, speed_kmh: Optional[int]
    ) -> DistanceInterval:
        """Return the allowed sign distance interval for a road class and speed."""
        speed = _validate_speed(speed_kmh)
        road = _coerce_classification(classification) or self.tables.fallback_classification
        bands = self.tables.intervals.get(road) or self.tables.intervals[self.tables.fallback_classification]
        return bands.high if speed >= self.tables.speed_threshold_kmh else bands.low

    def evaluate_distance(
        self, distance: Optional[float], interval: DistanceInterval | tuple[int, int]
    ) -> DistanceVerdict:
        """Classify a measured distance; ``None`` means not measured."""
        if not isinstance(interval, DistanceInterval):
            try:
                interval = DistanceInterval(*interval)
            except TypeError as exc:
                raise ValidationError(f"Malformed interval {interval!r}.") from exc
        if distance is None:
            return DistanceVerdict.UNKNOWN
        if isinstance(distance, bool) or not isinstance(distance, (int, float)):
            raise ValidationError(f"Distance must be numeric, got {distance!r}.")
        if interval.contains(distance):
            return DistanceVerdict.COMPLIANT
        return DistanceVerdict.NON_COMPLIANT

    def check_distance(
        self,
        classification: RoadClassification | str | None,
        speed_kmh: Optional[int],
        distance: Optional[float],
    ) -> DistanceCheck:
        interval = self.lookup_interval(classification, speed_kmh)
        return DistanceCheck(
            interval=interval,
            verdict=self.evaluate_distance(distance, interval),
            description=describe_interval(interval),
        )

    def label_for_status(self, status: RadarStatus | str | None) -> str:
        member = _coerce(RadarStatus, status)
        if member is None:
            return self.tables.default_status_label
        return self.tables.status_labels.get(member, self.tables.default_status_label)

    def label_for_classification(self, classification: RoadClassification | str | None) -> str:
        member = _coerce_classification(classification)
        if member is None:
            return self.tables.default_classification_label
        return self.tables.classification_labels.get(member, self.tables.default_classification_label)


# ==============================================================
# Table-free helpers
# ==============================================================

def describe_interval(interval: DistanceInterval) -> str:
    return f"{interval.min} a {interval.max} metros"


def normalize_classification(text: Any) -> RoadClassification:
    """
    Map free text from spreadsheets to a road class.

    "urban" and "rural" both present -> rural-with-urban-characteristics,
    "urban" alone -> urban, anything else (including empty) -> rural.
    Portuguese "urbana" matches "urban".
    """
    lower = str(text or "").lower()
    has_urban = "urban" in lower
    if has_urban and "rural" in lower:
        return RoadClassification.RURAL_URBAN
    if has_urban:
        return RoadClassification.URBAN
    return RoadClassification.RURAL


def short_classification_code(classification: RoadClassification | str | None) -> str:
    member = _coerce_classification(classification)
    return _SHORT_CODES.get(member, "RURAL")


def _validate_speed(speed_kmh: Any) -> int:
    if speed_kmh is None:
        raise MissingInput("Speed limit is required to look up the sign distance interval.")
    if isinstance(speed_kmh, bool) or not isinstance(speed_kmh, int):
        raise ValidationError(f"Speed limit must be an integer km/h, got {speed_kmh!r}.")
    if speed_kmh < 0:
        raise ValidationError(f"Speed limit must not be negative, got {speed_kmh}.")
    return speed_kmh


def _coerce(enum_cls, value):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _coerce_classification(value: Any) -> Optional[RoadClassification]:
    return _coerce(RoadClassification, value)


# ==============================================================
# Default engine
# ==============================================================

DEFAULT_ENGINE = ComplianceRuleEngine()

lookup_interval = DEFAULT_ENGINE.lookup_interval
evaluate_distance = DEFAULT_ENGINE.evaluate_distance
check_distance = DEFAULT_ENGINE.check_distance
label_for_status = DEFAULT_ENGINE.label_for_status
label_for_classification = DEFAULT_ENGINE.label_for_classification


__all__ = [
    "ComplianceRuleEngine",
    "DEFAULT_ENGINE",
    "DEFAULT_TABLES",
    "DistanceCheck",
    "DistanceInterval",
    "DistanceVerdict",
    "RuleTables",
    "SpeedBands",
    "check_distance",
    "describe_interval",
    "evaluate_distance",
    "label_for_classification",
    "label_for_status",
    "lookup_interval",
    "normalize_classification",
    "short_classification_code",
]
