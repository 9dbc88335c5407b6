"""Report downloads."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from radarcheck.api.deps import get_report_service
from radarcheck.services.reporting import ReportService

router = APIRouter(prefix="/exports", tags=["exports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _download(content: bytes | str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/pdf")
def export_pdf(service: ReportService = Depends(get_report_service)) -> Response:
    return _download(service.export_pdf(), "application/pdf", service.filename("pdf"))


@router.get("/xlsx")
def export_xlsx(service: ReportService = Depends(get_report_service)) -> Response:
    return _download(service.export_excel(), XLSX_MEDIA_TYPE, service.filename("xlsx"))


@router.get("/html")
def export_html(service: ReportService = Depends(get_report_service)) -> Response:
    return _download(service.export_html(), "text/html; charset=utf-8", service.filename("html"))


__all__ = ["router"]
