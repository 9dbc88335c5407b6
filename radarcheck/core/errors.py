"""Error taxonomy shared by the rule engine, the record store and the API."""

from __future__ import annotations


class RadarCheckError(Exception):
    """Base error; ``status_code`` is the HTTP status the API maps it to."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:  # pragma: no cover - human-friendly
        return self.message


class MissingInput(RadarCheckError):
    """A required value was not supplied (speed, owning radar, ...)."""

    status_code = 422


class NotFound(RadarCheckError):
    status_code = 404

    def __init__(self, kind: str, identifier: object) -> None:
        super().__init__(f"{kind} {identifier} not found")
        self.kind = kind
        self.identifier = identifier


class ValidationError(RadarCheckError):
    """Input rejected before it reaches a lookup table or the store."""

    status_code = 422


class ImportFormatError(ValidationError):
    pass


class NothingToExport(ValidationError):
    pass


__all__ = [
    "RadarCheckError",
    "MissingInput",
    "NotFound",
    "ValidationError",
    "ImportFormatError",
    "NothingToExport",
]
