"""Radar CRUD and spreadsheet import endpoints."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlmodel import Session

from radarcheck.api.deps import get_db
from radarcheck.models import Checklist, Radar, RadarStatus
from radarcheck.services.checklists import list_checklists
from radarcheck.services.importer import read_workbook
from radarcheck.services.radares import (
    RadarPayload,
    create_radar,
    delete_radar,
    get_radar,
    import_radares,
    list_radares,
    update_radar,
)

router = APIRouter(prefix="/radares", tags=["radares"])

XLSX_SUFFIXES = (".xlsx", ".xlsm")


@router.get("", response_model=List[Radar])
def get_radares(
    search: str | None = Query(None, max_length=64),
    status: RadarStatus | None = None,
    session: Session = Depends(get_db),
) -> Any:
    return list_radares(search=search, status=status, session=session)


@router.post("", response_model=Radar, status_code=201)
def post_radar(payload: RadarPayload, session: Session = Depends(get_db)) -> Any:
    return create_radar(payload, session=session)


@router.post("/import")
async def import_spreadsheet(
    file: UploadFile = File(...),
    session: Session = Depends(get_db),
) -> dict[str, Any]:
    filename = (file.filename or "").lower()
    if not filename.endswith(XLSX_SUFFIXES):
        raise HTTPException(status_code=400, detail="unsupported_file_type")
    payloads = read_workbook(await file.read())
    return import_radares(payloads, session=session).as_dict()


@router.get("/{radar_id}", response_model=Radar)
def get_radar_endpoint(radar_id: int, session: Session = Depends(get_db)) -> Any:
    return get_radar(radar_id, session=session)


@router.put("/{radar_id}", response_model=Radar)
def put_radar(radar_id: int, payload: RadarPayload, session: Session = Depends(get_db)) -> Any:
    return update_radar(radar_id, payload, session=session)


@router.delete("/{radar_id}")
def delete_radar_endpoint(radar_id: int, session: Session = Depends(get_db)) -> Any:
    removed = delete_radar(radar_id, session=session)
    return {"deleted": radar_id, "checklists_deleted": removed}


@router.get("/{radar_id}/checklists", response_model=List[Checklist])
def get_radar_checklists(radar_id: int, session: Session = Depends(get_db)) -> Any:
    get_radar(radar_id, session=session)
    return list_checklists(radar_id=radar_id, session=session)


__all__ = ["router"]
