from __future__ import annotations

from types import SimpleNamespace

import pytest

from radarcheck.services.kilometer import parse_km, sort_by_km


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("118+700", 118.7),
        ("50+300", 50.3),
        ("KM 523+800", 523.8),
        ("12.5", 12.5),
        ("7", 7.0),
        (42, 42.0),
        (3.25, 3.25),
    ],
)
def test_parse_km(value, expected: float) -> None:
    assert parse_km(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [None, "", "abc", "+", float("nan")])
def test_parse_km_unparseable(value) -> None:
    assert parse_km(value) is None


def test_short_meter_suffix_reads_as_decimal_digits() -> None:
    # "523+20" is read as 523.20, the same position as "523+200"
    assert parse_km("523+20") == parse_km("523+200")


def test_sort_by_km_puts_unparseable_last_and_is_stable() -> None:
    items = [
        SimpleNamespace(km="s/n", tag="a"),
        SimpleNamespace(km="118+700", tag="b"),
        SimpleNamespace(km="50+300", tag="c"),
        SimpleNamespace(km="?", tag="d"),
        SimpleNamespace(km="118.7", tag="e"),
    ]
    ordered = [item.tag for item in sort_by_km(items)]
    assert ordered == ["c", "b", "e", "a", "d"]


def test_sort_by_km_with_custom_key() -> None:
    rows = [{"pos": "10+000"}, {"pos": "2+500"}]
    assert sort_by_km(rows, key=lambda row: row["pos"]) == [{"pos": "2+500"}, {"pos": "10+000"}]
