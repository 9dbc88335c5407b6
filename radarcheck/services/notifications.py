"""In-memory log of non-blocking, user-facing notifications."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Deque, Iterable

from radarcheck.core.config import settings
from radarcheck.models.columns import utcnow


@dataclass
class Notification:
    level: str  # info|success|warning|error
    message: str
    created_at: datetime
    context: dict | None = None

    def as_dict(self) -> dict:
        return {
            "level": self.level,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
            "context": self.context,
        }


class NotificationLog:
    """Capped, newest-first log; failures are reported here instead of raised."""

    def __init__(self, max_items: int = 50) -> None:
        self.max_items = max_items
        self._items: Deque[Notification] = deque(maxlen=max_items)

    def add(self, level: str, message: str, context: dict | None = None) -> Notification:
        note = Notification(level=level, message=message, created_at=utcnow(), context=context)
        self._items.appendleft(note)
        return note

    def recent(self, limit: int | None = None, level: str | None = None) -> Iterable[Notification]:
        items = [n for n in self._items if level is None or n.level == level]
        return items if limit is None else items[:limit]

    def clear(self) -> None:
        self._items.clear()


NOTIFICATIONS = NotificationLog(max_items=settings.notification_capacity)

__all__ = ["Notification", "NotificationLog", "NOTIFICATIONS"]
