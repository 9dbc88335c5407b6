"""Checklist CRUD endpoints. Saving a checklist updates its radar's status."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from radarcheck.api.deps import get_db
from radarcheck.models import Checklist
from radarcheck.services.checklists import (
    ChecklistPayload,
    delete_checklist,
    get_checklist,
    list_checklists,
    save_checklist,
)

router = APIRouter(prefix="/checklists", tags=["checklists"])


class ChecklistSaveResponse(BaseModel):
    checklist: Checklist
    warnings: list[str] = Field(default_factory=list)


@router.get("", response_model=List[Checklist])
def get_checklists(radar_id: int | None = None, session: Session = Depends(get_db)) -> Any:
    return list_checklists(radar_id=radar_id, session=session)


@router.post("", response_model=ChecklistSaveResponse, status_code=201)
def post_checklist(payload: ChecklistPayload, session: Session = Depends(get_db)) -> Any:
    result = save_checklist(payload, session=session)
    return ChecklistSaveResponse(checklist=result.checklist, warnings=result.warnings)


@router.get("/{checklist_id}", response_model=Checklist)
def get_checklist_endpoint(checklist_id: int, session: Session = Depends(get_db)) -> Any:
    return get_checklist(checklist_id, session=session)


@router.put("/{checklist_id}", response_model=ChecklistSaveResponse)
def put_checklist(checklist_id: int, payload: ChecklistPayload, session: Session = Depends(get_db)) -> Any:
    result = save_checklist(payload, checklist_id=checklist_id, session=session)
    return ChecklistSaveResponse(checklist=result.checklist, warnings=result.warnings)


@router.delete("/{checklist_id}")
def delete_checklist_endpoint(checklist_id: int, session: Session = Depends(get_db)) -> Any:
    delete_checklist(checklist_id, session=session)
    return {"deleted": checklist_id}


__all__ = ["router"]
