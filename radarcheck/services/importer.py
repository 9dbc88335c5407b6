"""Read radar rosters from Excel spreadsheets."""

from __future__ import annotations

import io
import re
import logging
from pathlib import Path
from typing import Any, BinaryIO, Collection, Sequence
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from radarcheck.core.config import settings
from radarcheck.core.errors import ImportFormatError
from radarcheck.services.rules import normalize_classification

logger = logging.getLogger(__name__)

# Header substrings tried in order for each column
KM_HEADERS = ("km", "quilometro", "quilômetro")
SPEED_HEADERS = ("velocidade", "vel", "km/h")
CLASSIFICATION_HEADERS = ("tipo", "via", "tipo de via")
MUNICIPALITY_HEADERS = ("municipio", "município", "cidade")
DIRECTION_HEADERS = ("sentido", "direção", "direcao")


def _matches(header: str, name: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(name)}(?!\w)", header) is not None


def find_column(headers: Sequence[str], candidates: Sequence[str], claimed: Collection[int] = ()) -> int:
    """Index of the first unclaimed header containing a candidate as a whole word, or -1."""
    for name in candidates:
        for index, header in enumerate(headers):
            if index not in claimed and _matches(header, name):
                return index
    return -1


def _cell(row: Sequence[Any], index: int) -> Any:
    if index < 0 or index >= len(row):
        return None
    return row[index]


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _speed(value: Any, default: int) -> Any:
    try:
        speed = int(float(value))
    except (TypeError, ValueError):
        return default
    return speed if speed > 0 else default


def _map_columns(headers: Sequence[str]) -> dict[str, int]:
    columns: dict[str, int] = {}
    for field_name, candidates in (
        ("km", KM_HEADERS),
        ("speed_kmh", SPEED_HEADERS),
        ("classification", CLASSIFICATION_HEADERS),
        ("municipality", MUNICIPALITY_HEADERS),
        ("direction", DIRECTION_HEADERS),
    ):
        claimed = {index for index in columns.values() if index >= 0}
        columns[field_name] = find_column(headers, candidates, claimed)
    return columns


def parse_rows(rows: Sequence[Sequence[Any]]) -> list[dict[str, Any]]:
    """Turn raw sheet rows (first row = headers) into radar records.

    Records are plain mappings; ``import_radares`` validates them one by one
    so an out-of-range row is counted as failed instead of voiding the sheet.
    """
    if len(rows) < 2:
        raise ImportFormatError("Planilha vazia ou sem dados")

    columns = _map_columns([_text(h).lower() for h in rows[0]])
    logger.debug("Import column indexes", extra=columns)

    records: list[dict[str, Any]] = []
    for row in rows[1:]:
        if not row or all(v is None or _text(v) == "" for v in row):
            continue
        km = _text(_cell(row, columns["km"])).replace(",", ".")
        if not km:
            continue
        records.append(
            {
                "km": km,
                "speed_kmh": _speed(_cell(row, columns["speed_kmh"]), settings.default_import_speed_kmh),
                "classification": normalize_classification(_cell(row, columns["classification"])),
                "municipality": _text(_cell(row, columns["municipality"])) or None,
                "direction": _text(_cell(row, columns["direction"])) or None,
                "highway": settings.highway,
            }
        )

    if not records:
        raise ImportFormatError("Nenhum radar válido encontrado na planilha")
    return records


def read_workbook(source: str | Path | bytes | BinaryIO) -> list[dict[str, Any]]:
    """Parse the first sheet of an .xlsx workbook."""
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    try:
        workbook = load_workbook(source, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError, OSError, ValueError) as exc:
        raise ImportFormatError(f"Arquivo de planilha inválido: {exc}") from exc
    try:
        sheet = workbook.worksheets[0]
        rows = [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()
    return parse_rows(rows)


__all__ = ["find_column", "parse_rows", "read_workbook"]
