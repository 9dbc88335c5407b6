"""Column types shared by the tables."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from sqlalchemy import DateTime, Enum as SAEnum
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTC_MIN = datetime.min.replace(tzinfo=timezone.utc)


def sort_timestamp(value: Optional[datetime]) -> datetime:
    """Sort key for optional timestamps; missing ones sort oldest."""
    return as_utc(value) if value else UTC_MIN


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC timestamps, also on backends that drop the offset (SQLite)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        return None if value is None else as_utc(value)

    def process_result_value(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        return None if value is None else as_utc(value)


def string_enum(enum_cls: type[Enum], length: int) -> SAEnum:
    """VARCHAR column type storing the enum's value and loading members back."""
    return SAEnum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        length=length,
    )


__all__ = ["UTCDateTime", "UTC_MIN", "as_utc", "sort_timestamp", "string_enum", "utcnow"]
