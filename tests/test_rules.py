from __future__ import annotations

import pytest

from radarcheck.core.errors import MissingInput, ValidationError
from radarcheck.models import RadarStatus, RoadClassification
from radarcheck.services.rules import (
    DEFAULT_TABLES,
    ComplianceRuleEngine,
    DistanceInterval,
    DistanceVerdict,
    RuleTables,
    SpeedBands,
    check_distance,
    evaluate_distance,
    label_for_classification,
    label_for_status,
    lookup_interval,
    normalize_classification,
    short_classification_code,
)


@pytest.mark.parametrize(
    ("classification", "speed", "expected"),
    [
        (RoadClassification.RURAL, 80, (1000, 2000)),
        (RoadClassification.RURAL, 79, (300, 1000)),
        (RoadClassification.URBAN, 80, (400, 500)),
        (RoadClassification.URBAN, 60, (100, 300)),
        (RoadClassification.RURAL_URBAN, 110, (400, 500)),
        (RoadClassification.RURAL_URBAN, 0, (100, 300)),
        ("rural", 100, (1000, 2000)),
    ],
)
def test_lookup_interval_table(classification, speed: int, expected: tuple[int, int]) -> None:
    interval = lookup_interval(classification, speed)
    assert (interval.min, interval.max) == expected


@pytest.mark.parametrize("classification", ["garbage", "", None])
def test_unknown_classification_uses_rural_row(classification) -> None:
    assert lookup_interval(classification, 80) == lookup_interval(RoadClassification.RURAL, 80)
    assert lookup_interval(classification, 40) == lookup_interval(RoadClassification.RURAL, 40)


def test_lookup_interval_requires_speed() -> None:
    with pytest.raises(MissingInput):
        lookup_interval(RoadClassification.URBAN, None)


@pytest.mark.parametrize("speed", [-1, "80", 80.5, True])
def test_lookup_interval_rejects_bad_speed(speed) -> None:
    with pytest.raises(ValidationError):
        lookup_interval(RoadClassification.URBAN, speed)


def test_evaluate_distance_is_inclusive_at_both_bounds() -> None:
    interval = DistanceInterval(400, 500)
    assert evaluate_distance(400, interval) is DistanceVerdict.COMPLIANT
    assert evaluate_distance(500, interval) is DistanceVerdict.COMPLIANT
    assert evaluate_distance(399, interval) is DistanceVerdict.NON_COMPLIANT
    assert evaluate_distance(501, interval) is DistanceVerdict.NON_COMPLIANT
    assert evaluate_distance(450.5, interval) is DistanceVerdict.COMPLIANT


def test_unmeasured_distance_is_unknown() -> None:
    assert evaluate_distance(None, (400, 500)) is DistanceVerdict.UNKNOWN


def test_zero_distance_is_a_measurement() -> None:
    assert evaluate_distance(0, (100, 300)) is DistanceVerdict.NON_COMPLIANT


def test_evaluate_distance_rejects_non_numeric_distance() -> None:
    with pytest.raises(ValidationError):
        evaluate_distance("450", (400, 500))


@pytest.mark.parametrize("bounds", [(500, 400), (-1, 10), ("a", 10)])
def test_malformed_interval(bounds) -> None:
    with pytest.raises(ValidationError):
        evaluate_distance(450, bounds)


def test_check_distance_combines_lookup_and_verdict() -> None:
    check = check_distance("urban", 80, 450)
    assert check.interval == DistanceInterval(400, 500)
    assert check.verdict is DistanceVerdict.COMPLIANT
    assert check.description == "400 a 500 metros"


def test_labels_and_defaults() -> None:
    assert label_for_status(RadarStatus.COMPLIANT) == "Conforme"
    assert label_for_status("non-compliant") == "Não Conforme"
    assert label_for_status(RadarStatus.PENDING) == "Pendente"
    assert label_for_status("whatever") == "Pendente"
    assert label_for_status(None) == "Pendente"
    assert label_for_classification(RoadClassification.URBAN) == "Via Urbana"
    assert label_for_classification("rural-with-urban-characteristics") == "Rural c/ caract. urbana"
    assert label_for_classification("rural") == "Via Rural"
    assert label_for_classification("garbage") == "N/A"


def test_legacy_spellings_are_accepted() -> None:
    assert label_for_status("conforme") == "Conforme"
    assert label_for_classification("rcu") == "Rural c/ caract. urbana"
    assert short_classification_code("rural-with-urban-characteristics") == "RCU"
    assert short_classification_code(None) == "RURAL"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Urbana", RoadClassification.URBAN),
        ("Rural Urbana", RoadClassification.RURAL_URBAN),
        ("RURAL", RoadClassification.RURAL),
        ("", RoadClassification.RURAL),
        (None, RoadClassification.RURAL),
        ("pista dupla", RoadClassification.RURAL),
    ],
)
def test_normalize_classification(text, expected: RoadClassification) -> None:
    assert normalize_classification(text) is expected


def test_engine_accepts_alternate_tables() -> None:
    tables = RuleTables(
        intervals={
            RoadClassification.RURAL: SpeedBands(high=DistanceInterval(10, 20), low=DistanceInterval(1, 5)),
        },
        status_labels={RadarStatus.COMPLIANT: "OK"},
        classification_labels={},
        speed_threshold_kmh=50,
        default_status_label="?",
    )
    engine = ComplianceRuleEngine(tables=tables)

    assert engine.lookup_interval(RoadClassification.URBAN, 50) == DistanceInterval(10, 20)
    assert engine.lookup_interval("rural", 49) == DistanceInterval(1, 5)
    assert engine.label_for_status("compliant") == "OK"
    assert engine.label_for_status("pending") == "?"
    # The default engine is untouched
    assert lookup_interval("rural", 50) == DistanceInterval(300, 1000)


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_TABLES.intervals[RoadClassification.URBAN] = DEFAULT_TABLES.intervals[RoadClassification.RURAL]  # type: ignore[index]


def test_tables_require_fallback_row() -> None:
    with pytest.raises(ValidationError):
        RuleTables(intervals={}, status_labels={}, classification_labels={})
