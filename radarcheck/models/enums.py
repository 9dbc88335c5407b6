"""Closed enumerations shared by the store, the rule engine and the reports."""

from __future__ import annotations

from enum import Enum


class RadarStatus(str, Enum):
    """Compliance status of a checklist, copied onto its radar."""

    COMPLIANT = "compliant"
    NON_COMPLIANT = "non-compliant"
    PENDING = "pending"

    @classmethod
    def _missing_(cls, value: object) -> "RadarStatus | None":
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
            return _LEGACY_STATUS.get(key)
        return None


class RoadClassification(str, Enum):
    """Road type governing the required sign-distance interval."""

    URBAN = "urban"
    RURAL_URBAN = "rural-with-urban-characteristics"
    RURAL = "rural"

    @classmethod
    def _missing_(cls, value: object) -> "RoadClassification | None":
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
            return _LEGACY_CLASSIFICATION.get(key)
        return None


# Spellings used by the spreadsheets and the first data exports
_LEGACY_STATUS = {
    "conforme": RadarStatus.COMPLIANT,
    "nao-conforme": RadarStatus.NON_COMPLIANT,
    "não-conforme": RadarStatus.NON_COMPLIANT,
    "pendente": RadarStatus.PENDING,
}

_LEGACY_CLASSIFICATION = {
    "urbana": RoadClassification.URBAN,
    "rural-urbana": RoadClassification.RURAL_URBAN,
    "rcu": RoadClassification.RURAL_URBAN,
}


__all__ = ["RadarStatus", "RoadClassification"]
