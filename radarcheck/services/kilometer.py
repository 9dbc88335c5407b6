"""Kilometer-post parsing and ordering helpers."""

from __future__ import annotations

import math
import re
from typing import Any, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_NUMBER = re.compile(r"^\d*\.?\d+|^\d+\.?")


def parse_km(value: Any) -> Optional[float]:
    """Read a kilometer post such as ``"118+700"`` as a number (118.7).

    The first ``+`` becomes the decimal point, every other non-digit,
    non-dot character is dropped and the leading decimal number is read.
    Returns ``None`` when nothing numeric is left.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return None if math.isnan(value) else float(value)
    cleaned = _NON_NUMERIC.sub("", str(value).replace("+", ".", 1))
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None
    return float(match.group(0))


def sort_by_km(items: Iterable[T], key: Callable[[T], Any] = lambda item: item.km) -> List[T]:
    """Stable ascending sort by kilometer post; unparseable posts go last."""

    def _sort_key(item: T) -> tuple[int, float]:
        position = parse_km(key(item))
        return (1, 0.0) if position is None else (0, position)

    return sorted(items, key=_sort_key)


__all__ = ["parse_km", "sort_by_km"]
