"""Report data assembly and Excel/HTML/PDF export."""

from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Sequence

from jinja2 import Environment, PackageLoader, select_autoescape
from openpyxl import Workbook
from openpyxl.styles import Font
from sqlmodel import Session, select

from radarcheck.core.config import settings
from radarcheck.core.errors import NothingToExport
from radarcheck.db.session import run_in_session
from radarcheck.models import Checklist, Radar, RadarStatus
from radarcheck.models.columns import sort_timestamp
from radarcheck.services.kilometer import sort_by_km
from radarcheck.services.rules import (
    DEFAULT_ENGINE,
    ComplianceRuleEngine,
    short_classification_code,
)
from radarcheck.services.stats import DashboardStats, compute_stats, latest_checklist_by_radar

logger = logging.getLogger(__name__)

_templates = Environment(
    loader=PackageLoader("radarcheck", "templates"),
    autoescape=select_autoescape(["html"]),
)

RADAR_COLUMNS = [
    ("Local", 18),
    ("Tipo", 12),
    ("Velocidade", 12),
    ("Classificação", 14),
    ("Sentido", 10),
    ("Placa 01 - Se Rural", 18),
    ("Distância Placa (m)", 18),
    ("Placa Legível", 14),
    ("Pintura Solo", 14),
    ("Sem Obstrução", 14),
    ("Status", 14),
    ("Qtd Fotos", 10),
    ("Última Verificação", 20),
    ("Observações", 25),
]

CHECKLIST_COLUMNS = [
    ("Local", 18),
    ("Data", 20),
    ("Status", 14),
    ("Placa R-19 Presente", 18),
    ("Distância (m)", 14),
    ("Placa Legível", 14),
    ("Pintura Solo", 14),
    ("Sem Obstrução", 14),
    ("Placa Velocidade", 16),
    ("Qtd Fotos", 10),
    ("Observações", 30),
]


def format_datetime(value: Optional[datetime]) -> str:
    return value.strftime("%d/%m/%Y %H:%M") if value else ""


def decode_photo(photo: dict[str, Any] | str | None) -> Optional[bytes]:
    """Raw image bytes from a stored photo (data URL or bare base64)."""
    data = photo.get("data") if isinstance(photo, dict) else photo
    if not data or not isinstance(data, str):
        return None
    if data.startswith("data:"):
        _, _, data = data.partition(",")
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None


@dataclass
class ReportRow:
    """A radar joined with its newest checklist and display labels."""

    radar: Radar
    last_checklist: Optional[Checklist]
    classification_code: str
    status_label: str
    radar_photos: list[dict[str, Any]] = field(default_factory=list)
    checklist_photos: list[dict[str, Any]] = field(default_factory=list)

    @property
    def photo_count(self) -> int:
        return len(self.radar_photos) + len(self.checklist_photos)

    @property
    def status_value(self) -> str:
        status = self.radar.status or RadarStatus.PENDING
        return RadarStatus(status).value

    @property
    def observations(self) -> str:
        if self.radar.description:
            return self.radar.description
        return self.last_checklist.observations if self.last_checklist else ""

    @property
    def distance_m(self) -> Optional[int]:
        return self.last_checklist.sign_distance_m if self.last_checklist else None


@dataclass
class ReportData:
    rows: list[ReportRow]
    checklists: list[Checklist]
    stats: DashboardStats
    highway: str
    inspector: str
    generated_on: date


def build_rows(
    radares: Sequence[Radar],
    checklists: Sequence[Checklist],
    engine: ComplianceRuleEngine = DEFAULT_ENGINE,
) -> list[ReportRow]:
    latest = latest_checklist_by_radar(checklists)
    rows = []
    for radar in sort_by_km(radares):
        last = latest.get(radar.id)
        rows.append(
            ReportRow(
                radar=radar,
                last_checklist=last,
                classification_code=short_classification_code(radar.classification),
                status_label=engine.label_for_status(radar.status),
                radar_photos=list(radar.photos or []),
                checklist_photos=list(last.photos or []) if last else [],
            )
        )
    return rows


class ReportService:
    """Collects store data once and renders it in the supported formats."""

    def __init__(
        self,
        session: Session | None = None,
        engine: ComplianceRuleEngine = DEFAULT_ENGINE,
        highway: str | None = None,
        inspector: str | None = None,
        today: date | None = None,
    ) -> None:
        self.session = session
        self.engine = engine
        self.highway = highway or settings.highway
        self.inspector = inspector or settings.inspector_name
        self.today = today or date.today()

    def load(self) -> ReportData:
        def _load(db: Session) -> ReportData:
            radares = db.exec(select(Radar)).all()
            checklists = db.exec(select(Checklist)).all()
            if not radares:
                raise NothingToExport("Nenhum dado para exportar")
            checklists = sorted(checklists, key=lambda c: sort_timestamp(c.inspected_at), reverse=True)
            logger.info("Report data loaded", extra={"radares": len(radares), "checklists": len(checklists)})
            return ReportData(
                rows=build_rows(radares, checklists, self.engine),
                checklists=checklists,
                stats=compute_stats(radares, checklists, recent_limit=0),
                highway=self.highway,
                inspector=self.inspector,
                generated_on=self.today,
            )

        return run_in_session(_load, self.session)

    def filename(self, fmt: str) -> str:
        stamp = self.today.isoformat()
        slug = self.highway.replace("-", "").replace(" ", "")
        if fmt == "html":
            return f"Fotos_Radares_{slug}_{stamp}.html"
        return f"Radares_{slug}_{stamp}.{fmt}"

    # ------------------------------------------------------------------
    # Excel
    # ------------------------------------------------------------------

    def export_excel(self, data: ReportData | None = None) -> bytes:
        data = data or self.load()
        wb = Workbook()
        ws = wb.active
        ws.title = "Radares"

        last_col = len(RADAR_COLUMNS)
        ws.cell(row=1, column=2, value=f"RADARES {data.highway}").font = Font(bold=True, size=14)
        ws.cell(row=1, column=last_col - 1, value="Data:")
        ws.cell(row=1, column=last_col, value=data.generated_on.strftime("%d/%m/%Y"))
        ws.cell(row=2, column=last_col - 1, value="Responsável:")
        ws.cell(row=2, column=last_col, value=data.inspector)

        header_row = 4
        for col, (title, width) in enumerate(RADAR_COLUMNS, start=1):
            cell = ws.cell(row=header_row, column=col, value=title)
            cell.font = Font(bold=True)
            ws.column_dimensions[cell.column_letter].width = width

        for offset, row in enumerate(data.rows, start=1):
            for col, value in enumerate(self._radar_sheet_values(row), start=1):
                ws.cell(row=header_row + offset, column=col, value=value)

        if data.checklists:
            self._append_checklist_sheet(wb, data)

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    def _radar_sheet_values(self, row: ReportRow) -> list[Any]:
        radar, last = row.radar, row.last_checklist
        return [
            f"KM {radar.km}",
            radar.radar_type or settings.default_radar_type,
            radar.speed_kmh,
            row.classification_code,
            radar.direction or "",
            "SIM" if last and last.sign_present else "",
            row.distance_m if row.distance_m is not None else "",
            "SIM" if last and last.sign_legible else "",
            "SIM" if last and last.lane_paint_adequate else "",
            "SIM" if last and last.unobstructed else "",
            row.status_label,
            row.photo_count or "",
            format_datetime(last.inspected_at) if last else "",
            row.observations,
        ]

    def _append_checklist_sheet(self, wb: Workbook, data: ReportData) -> None:
        ws = wb.create_sheet("Checklists")
        km_by_id = {row.radar.id: row.radar.km for row in data.rows}
        ws.append([title for title, _ in CHECKLIST_COLUMNS])
        for col, (_, width) in enumerate(CHECKLIST_COLUMNS, start=1):
            ws.cell(row=1, column=col).font = Font(bold=True)
            ws.column_dimensions[ws.cell(row=1, column=col).column_letter].width = width

        def yes_no(flag: bool) -> str:
            return "Sim" if flag else "Não"

        for c in data.checklists:
            ws.append(
                [
                    f"KM {km_by_id.get(c.radar_id, '')}",
                    format_datetime(c.inspected_at),
                    self.engine.label_for_status(c.status),
                    yes_no(c.sign_present),
                    c.sign_distance_m if c.sign_distance_m is not None else "",
                    yes_no(c.sign_legible),
                    yes_no(c.lane_paint_adequate),
                    yes_no(c.unobstructed),
                    yes_no(c.speed_plate_visible),
                    len(c.photos or []),
                    c.observations or "",
                ]
            )

    # ------------------------------------------------------------------
    # HTML photo report
    # ------------------------------------------------------------------

    def export_html(self, data: ReportData | None = None) -> str:
        data = data or self.load()
        with_photos = [row for row in data.rows if row.photo_count]
        if not with_photos:
            raise NothingToExport("Nenhum radar com fotos")
        template = _templates.get_template("photo_report.html")
        return template.render(
            rows=with_photos,
            highway=data.highway,
            inspector=data.inspector,
            generated_on=data.generated_on.strftime("%d/%m/%Y"),
            format_datetime=format_datetime,
        )

    # ------------------------------------------------------------------
    # PDF
    # ------------------------------------------------------------------

    def export_pdf(self, data: ReportData | None = None) -> bytes:
        from radarcheck.services.pdf_report import render_pdf

        return render_pdf(data or self.load(), engine=self.engine)


__all__ = [
    "ReportData",
    "ReportRow",
    "ReportService",
    "build_rows",
    "decode_photo",
    "format_datetime",
]
