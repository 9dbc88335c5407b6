"""Service-layer utilities."""

from .notifications import NOTIFICATIONS
from .radares import ImportResult, RadarPayload
from .reporting import ReportService
from .rules import DEFAULT_ENGINE, ComplianceRuleEngine
from .stats import StatsService

__all__ = [
    "ComplianceRuleEngine",
    "DEFAULT_ENGINE",
    "ImportResult",
    "NOTIFICATIONS",
    "RadarPayload",
    "ReportService",
    "StatsService",
]
