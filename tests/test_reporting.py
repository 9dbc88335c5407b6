from __future__ import annotations

import io
from datetime import date, datetime, timezone

import pytest
from openpyxl import load_workbook
from sqlmodel import Session

from radarcheck.core.errors import NothingToExport
from radarcheck.models import RadarStatus, RoadClassification
from radarcheck.services.checklists import ChecklistPayload, save_checklist
from radarcheck.services.pdf_report import distance_label, summary_row
from radarcheck.services.radares import RadarPayload, create_radar
from radarcheck.services.reporting import ReportService, decode_photo, format_datetime


@pytest.fixture()
def populated(session: Session, png_photo: dict[str, str]) -> Session:
    with_photo = create_radar(
        RadarPayload(
            km="118+700",
            speed_kmh=80,
            classification=RoadClassification.RURAL_URBAN,
            direction="Norte",
            photos=[png_photo],
        ),
        session=session,
    )
    plain = create_radar(RadarPayload(km="50+300", speed_kmh=60), session=session)
    save_checklist(
        ChecklistPayload(
            radar_id=with_photo.id,
            sign_present=True,
            sign_distance_m=450,
            status=RadarStatus.COMPLIANT,
            observations="Placa nova",
            photos=[png_photo],
            inspected_at=datetime(2024, 5, 2, 10, 15, tzinfo=timezone.utc),
        ),
        session=session,
    )
    save_checklist(
        ChecklistPayload(radar_id=plain.id, status=RadarStatus.NON_COMPLIANT),
        session=session,
    )
    return session


def _service(session: Session) -> ReportService:
    return ReportService(session, today=date(2024, 5, 3))


def test_decode_photo(png_photo: dict[str, str]) -> None:
    raw = decode_photo(png_photo)
    assert raw is not None and raw.startswith(b"\x89PNG")
    assert decode_photo({"data": "data:image/png;base64,@@@"}) is None
    assert decode_photo(None) is None


def test_format_datetime() -> None:
    assert format_datetime(datetime(2024, 5, 2, 9, 5)) == "02/05/2024 09:05"
    assert format_datetime(None) == ""


def test_filenames() -> None:
    service = ReportService(today=date(2024, 5, 3))
    assert service.filename("pdf") == "Radares_BR040_2024-05-03.pdf"
    assert service.filename("xlsx") == "Radares_BR040_2024-05-03.xlsx"
    assert service.filename("html") == "Fotos_Radares_BR040_2024-05-03.html"


def test_empty_store_has_nothing_to_export(session: Session) -> None:
    with pytest.raises(NothingToExport):
        _service(session).export_excel()


def test_load_orders_rows_by_km(populated: Session) -> None:
    data = _service(populated).load()
    assert [row.radar.km for row in data.rows] == ["50+300", "118+700"]
    assert data.stats.compliant == 1
    assert data.stats.non_compliant == 1
    first, second = data.rows
    assert first.photo_count == 0
    assert second.photo_count == 2
    assert second.classification_code == "RCU"
    assert second.status_label == "Conforme"
    assert second.observations == "Placa nova"
    assert second.distance_m == 450


def test_excel_export(populated: Session) -> None:
    content = _service(populated).export_excel()
    wb = load_workbook(io.BytesIO(content))

    assert wb.sheetnames == ["Radares", "Checklists"]
    ws = wb["Radares"]
    assert ws.cell(row=1, column=2).value == "RADARES BR-040"
    assert ws.cell(row=4, column=1).value == "Local"
    assert ws.cell(row=5, column=1).value == "KM 50+300"
    assert ws.cell(row=6, column=1).value == "KM 118+700"
    assert ws.cell(row=6, column=7).value == 450
    assert ws.cell(row=6, column=11).value == "Conforme"

    checklists = wb["Checklists"]
    assert checklists.cell(row=1, column=1).value == "Local"
    assert checklists.max_row == 3


def test_html_export_only_lists_radars_with_photos(populated: Session) -> None:
    html = _service(populated).export_html()

    assert "Fotos dos Radares BR-040" in html
    assert "Km 118+700" in html
    assert "Km 50+300" not in html
    assert "Foto Radar 1" in html
    assert "Foto Checklist 1 - 02/05/2024 10:15" in html
    assert "data:image/png;base64," in html


def test_html_export_without_photos(session: Session) -> None:
    create_radar(RadarPayload(km="1+000", speed_kmh=60), session=session)
    with pytest.raises(NothingToExport):
        _service(session).export_html()


def test_pdf_export(populated: Session) -> None:
    content = _service(populated).export_pdf()
    assert content.startswith(b"%PDF")
    assert len(content) > 1000


def test_pdf_export_skips_unreadable_photos(session: Session) -> None:
    create_radar(
        RadarPayload(km="1+000", speed_kmh=60, photos=[{"data": "data:image/png;base64,aGVsbG8="}]),
        session=session,
    )
    assert _service(session).export_pdf().startswith(b"%PDF")


def test_pdf_shows_zero_sign_distance(session: Session) -> None:
    radar = create_radar(RadarPayload(km="1+000", speed_kmh=60), session=session)
    save_checklist(
        ChecklistPayload(radar_id=radar.id, sign_distance_m=0, status=RadarStatus.NON_COMPLIANT),
        session=session,
    )
    service = _service(session)
    data = service.load()

    assert summary_row(data.rows[0])[5] == "0m"
    assert distance_label(None) == "-"
    assert service.export_pdf(data).startswith(b"%PDF")
