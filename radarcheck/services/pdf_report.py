"""PDF rendering of the radar inspection report."""

from __future__ import annotations

import io
import logging
from typing import Any, List
from xml.sax.saxutils import escape

from PIL import Image as PILImage, UnidentifiedImageError
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from radarcheck.core.config import settings
from radarcheck.services.reporting import ReportData, ReportRow, decode_photo, format_datetime
from radarcheck.services.rules import DEFAULT_ENGINE, ComplianceRuleEngine

logger = logging.getLogger(__name__)

PAGE_SIZE = landscape(A4)
PAGE_MARGIN = 14 * mm
PHOTO_WIDTH = 85 * mm
PHOTO_HEIGHT = 65 * mm
PHOTOS_PER_ROW = 3
ACCENT = colors.Color(99 / 255, 102 / 255, 241 / 255)

styles = getSampleStyleSheet()

TITLE_STYLE = ParagraphStyle(
    name="ReportTitle",
    parent=styles["Title"],
    fontName="Helvetica-Bold",
    fontSize=24,
    leading=30,
    textColor=ACCENT,
    spaceBefore=60 * mm,
)

SUBTITLE_STYLE = ParagraphStyle(
    name="ReportSubtitle",
    parent=styles["Title"],
    fontName="Helvetica",
    fontSize=18,
    leading=24,
    textColor=colors.grey,
)

CENTER_STYLE = ParagraphStyle(
    name="Centered",
    fontName="Helvetica",
    fontSize=12,
    leading=16,
    alignment=1,
    textColor=colors.grey,
)

HEADING_STYLE = ParagraphStyle(
    name="SectionHeading",
    fontName="Helvetica-Bold",
    fontSize=16,
    leading=20,
    textColor=ACCENT,
    spaceAfter=6,
    keepWithNext=True,
)

BODY_STYLE = ParagraphStyle(
    name="BodyText",
    fontName="Helvetica",
    fontSize=10,
    leading=13,
    textColor=colors.Color(60 / 255, 60 / 255, 60 / 255),
    wordWrap="CJK",
)

CAPTION_STYLE = ParagraphStyle(
    name="Caption",
    parent=BODY_STYLE,
    fontSize=8,
    leading=10,
    alignment=1,
    textColor=colors.grey,
)

SUMMARY_HEADER = ["Local", "Tipo", "Vel.", "Classif.", "Sentido", "Dist.", "Status", "Fotos"]
SUMMARY_WIDTHS = [28 * mm, 22 * mm, 15 * mm, 20 * mm, 18 * mm, 18 * mm, 25 * mm, 18 * mm]


def _para(value: Any, style: ParagraphStyle = BODY_STYLE) -> Paragraph:
    text = escape(str(value or "").strip()).replace("\n", "<br/>")
    return Paragraph(text, style)


def _photo_flowable(photo: dict[str, Any]) -> Image | None:
    raw = decode_photo(photo)
    if raw is None:
        return None
    try:
        with PILImage.open(io.BytesIO(raw)) as img:
            buffer = io.BytesIO()
            img.convert("RGB").save(buffer, format="JPEG")
    except (UnidentifiedImageError, OSError) as exc:
        logger.warning("Skipping unreadable photo", extra={"error": str(exc)})
        return None
    buffer.seek(0)
    return Image(buffer, width=PHOTO_WIDTH, height=PHOTO_HEIGHT)


def _title_page(data: ReportData) -> List[Any]:
    stats = data.stats
    return [
        Paragraph("Relatório de Fiscalização de Radares", TITLE_STYLE),
        Paragraph(escape(data.highway), SUBTITLE_STYLE),
        Spacer(1, 6 * mm),
        Paragraph(f"Data: {data.generated_on.strftime('%d/%m/%Y')}", CENTER_STYLE),
        Paragraph(f"Responsável: {escape(data.inspector)}", CENTER_STYLE),
        Spacer(1, 12 * mm),
        Paragraph(
            f"Total: {stats.total} | Conformes: {stats.compliant} | "
            f"Não Conformes: {stats.non_compliant} | Pendentes: {stats.pending}",
            CENTER_STYLE,
        ),
        PageBreak(),
    ]


def distance_label(distance_m: int | None) -> str:
    return "-" if distance_m is None else f"{distance_m}m"


def summary_row(row: ReportRow) -> List[str]:
    radar = row.radar
    return [
        f"Km {radar.km}",
        radar.radar_type or settings.default_radar_type,
        str(radar.speed_kmh),
        row.classification_code,
        radar.direction or "-",
        distance_label(row.distance_m),
        row.status_label,
        "SIM" if row.photo_count else "-",
    ]


def _summary_table(rows: List[ReportRow]) -> Table:
    body = [SUMMARY_HEADER] + [summary_row(row) for row in rows]
    table = Table(body, colWidths=SUMMARY_WIDTHS, repeatRows=1, hAlign="LEFT")
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), ACCENT),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, 0), 9),
                ("FONTSIZE", (0, 1), (-1, -1), 8),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.Color(245 / 255, 245 / 255, 250 / 255)]),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )
    return table


def _radar_section(row: ReportRow, highway: str, engine: ComplianceRuleEngine) -> List[Any]:
    radar, last = row.radar, row.last_checklist
    story: List[Any] = [
        PageBreak(),
        _para(f"Km {radar.km} - {highway}", HEADING_STYLE),
        _para(
            f"Tipo: {radar.radar_type or settings.default_radar_type} | "
            f"Velocidade: {radar.speed_kmh} km/h | Classificação: {row.classification_code}"
        ),
        _para(f"Sentido: {radar.direction or '-'} | Status: {engine.label_for_status(radar.status)}"),
    ]
    if last:
        story.append(
            _para(
                f"Distância Placa: {distance_label(last.sign_distance_m)} | "
                f"Verificado: {format_datetime(last.inspected_at)}"
            )
        )
    story.append(Spacer(1, 6 * mm))

    captioned = [(p, f"Foto Radar {i}") for i, p in enumerate(row.radar_photos, start=1)]
    captioned += [(p, f"Foto Checklist {i}") for i, p in enumerate(row.checklist_photos, start=1)]
    cells = []
    for photo, caption in captioned:
        image = _photo_flowable(photo)
        if image is not None:
            cells.append([image, _para(caption, CAPTION_STYLE)])

    if cells:
        grid = [cells[i:i + PHOTOS_PER_ROW] for i in range(0, len(cells), PHOTOS_PER_ROW)]
        grid[-1] += [""] * (PHOTOS_PER_ROW - len(grid[-1]))
        photo_table = Table(grid, colWidths=[PHOTO_WIDTH + 3 * mm] * PHOTOS_PER_ROW, hAlign="LEFT")
        photo_table.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        story.append(photo_table)

    if row.observations:
        story += [Spacer(1, 6 * mm), _para("Observações:"), _para(row.observations)]
    return story


def render_pdf(data: ReportData, engine: ComplianceRuleEngine = DEFAULT_ENGINE) -> bytes:
    """Title page, summary table, then one section per radar with photos."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZE,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=f"Radares {data.highway}",
        author=data.inspector,
    )
    story: List[Any] = _title_page(data)
    story += [_para("Resumo dos Radares", HEADING_STYLE), _summary_table(data.rows)]
    for row in data.rows:
        if row.photo_count:
            story += _radar_section(row, data.highway, engine)
    doc.build(story)
    return buffer.getvalue()


__all__ = ["distance_label", "render_pdf", "summary_row"]
