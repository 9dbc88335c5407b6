from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from radarcheck.core.errors import ImportFormatError
from radarcheck.models import RoadClassification
from radarcheck.services.importer import find_column, parse_rows, read_workbook


def _workbook_bytes(rows: list[list]) -> bytes:
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def test_find_column_matches_whole_words() -> None:
    headers = ["km", "velocidade máxima", "tipo de via"]
    assert find_column(headers, ("velocidade", "vel")) == 1
    assert find_column(headers, ("tipo",)) == 2
    assert find_column(headers, ("cidade",)) == -1
    assert find_column(["vel"], ("vel",)) == 0


def test_find_column_skips_claimed_columns() -> None:
    headers = ["tipo de via", "via"]
    assert find_column(headers, ("via",)) == 0
    assert find_column(headers, ("via",), claimed={0}) == 1
    assert find_column(headers, ("via",), claimed={0, 1}) == -1


def test_parse_rows_without_municipality_column() -> None:
    rows = [
        ["KM", "Velocidade", "Tipo"],
        ["50+300", 60, "Urbana"],
    ]

    (record,) = parse_rows(rows)

    assert record["municipality"] is None
    assert record["speed_kmh"] == 60
    assert record["classification"] is RoadClassification.URBAN


def test_parse_rows_maps_columns_and_defaults() -> None:
    rows = [
        ["KM", "Velocidade", "Tipo de Via", "Município", "Sentido"],
        ["118,7", 60, "Urbana", "Juiz de Fora", "Norte"],
        [None, None, None, None, None],
        ["", 60, "Rural", None, None],
        ["200+100", "abc", "Rural urbana", None, None],
        ["300", 0, None, None, None],
    ]

    payloads = parse_rows(rows)

    assert [p["km"] for p in payloads] == ["118.7", "200+100", "300"]
    first, second, third = payloads
    assert first["speed_kmh"] == 60
    assert first["classification"] is RoadClassification.URBAN
    assert first["municipality"] == "Juiz de Fora"
    assert first["direction"] == "Norte"
    assert first["highway"] == "BR-040"
    assert second["speed_kmh"] == 80
    assert second["classification"] is RoadClassification.RURAL_URBAN
    assert third["speed_kmh"] == 80
    assert third["classification"] is RoadClassification.RURAL


def test_parse_rows_rejects_empty_sheet() -> None:
    with pytest.raises(ImportFormatError, match="Planilha vazia"):
        parse_rows([["KM", "Velocidade"]])


def test_parse_rows_without_valid_radar() -> None:
    with pytest.raises(ImportFormatError, match="Nenhum radar"):
        parse_rows([["KM", "Velocidade"], [None, 60], ["", 80]])


def test_read_workbook_from_bytes() -> None:
    content = _workbook_bytes(
        [
            ["Km", "Vel", "Tipo"],
            ["50+300", 60, "RURAL"],
            ["118+700", 80, "urbana"],
        ]
    )
    payloads = read_workbook(content)
    assert [(p["km"], p["speed_kmh"]) for p in payloads] == [("50+300", 60), ("118+700", 80)]
    assert payloads[1]["classification"] is RoadClassification.URBAN


def test_read_workbook_rejects_garbage() -> None:
    with pytest.raises(ImportFormatError):
        read_workbook(b"this is not a spreadsheet")
