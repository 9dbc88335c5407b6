"""Shared logging configuration for the API and the command-line scripts."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

from radarcheck.core.config import settings

_CONFIGURED = False
_LOG_BUFFER: deque[dict[str, str]] = deque(maxlen=settings.log_buffer_size)


class _ServiceNameFilter(logging.Filter):
    """Stamps every record with the process that emitted it (API or a script)."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


class _BufferHandler(logging.Handler):
    """Keeps the latest records in memory for the /logs endpoint."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            _LOG_BUFFER.appendleft(
                {
                    "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                    "level": record.levelname,
                    "service": getattr(record, "service", settings.service_name),
                    "name": record.name,
                    "message": record.getMessage(),
                }
            )
        except Exception:  # noqa: BLE001
            self.handleError(record)


def setup_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> None:
    """Configure root logging with a JSON formatter and the in-memory buffer.

    Level and service name default to ``RADARCHECK_LOG_LEVEL`` and
    ``RADARCHECK_SERVICE_NAME``; scripts pass their own service name.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    service_filter = _ServiceNameFilter(service_name or settings.service_name)

    handler = logging.StreamHandler()
    handler.setFormatter(
        jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(service)s")
    )
    handler.addFilter(service_filter)
    buffer_handler = _BufferHandler()
    buffer_handler.addFilter(service_filter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.addHandler(buffer_handler)
    root.setLevel((level or settings.log_level).upper())
    logging.captureWarnings(True)
    _CONFIGURED = True


def get_log_buffer(limit: int = 100, level: Optional[str] = None) -> list[dict[str, str]]:
    entries = [e for e in _LOG_BUFFER if level is None or e["level"] == level.upper()]
    return entries[:limit]


__all__ = ["setup_logging", "get_log_buffer"]
