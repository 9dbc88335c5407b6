"""Initial radar roster loader and startup bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from sqlmodel import Session

from radarcheck.core.config import settings
from radarcheck.models import RoadClassification
from radarcheck.services.radares import ImportResult, RadarPayload, count_radares, import_radares

logger = logging.getLogger(__name__)


class SeedRadar(BaseModel):
    """One roster entry as written in the YAML file."""

    km: str
    tipo: str = "PER"
    velocidade: int = 60
    classificacao: str = "RURAL"
    sentido: str = ""
    municipio: str = ""
    descricao: str = ""


class SeedFile(BaseModel):
    highway: str | None = None
    radares: list[SeedRadar] = Field(default_factory=list)


def load_seed_file(path: str | Path | None = None) -> SeedFile:
    seed_path = Path(path or settings.seed_data_path)
    data: dict[str, Any] = {}
    if seed_path.exists():
        data = yaml.safe_load(seed_path.read_text(encoding="utf-8")) or {}
    else:
        logger.warning("Seed roster not found", extra={"path": str(seed_path)})
    return SeedFile.model_validate(data)


def seed_payloads(seed: SeedFile) -> list[RadarPayload]:
    highway = seed.highway or settings.highway
    return [
        RadarPayload(
            km=entry.km,
            highway=highway,
            direction=entry.sentido or None,
            speed_kmh=entry.velocidade or 60,
            # The roster only distinguishes RCU from rural
            classification=RoadClassification.RURAL_URBAN
            if entry.classificacao.upper() == "RCU"
            else RoadClassification.RURAL,
            radar_type=entry.tipo,
            municipality=entry.municipio or None,
            description=entry.descricao,
        )
        for entry in seed.radares
    ]


def bootstrap_radares(path: str | Path | None = None, session: Session | None = None) -> int:
    """Load the roster when the store holds no radars. Returns the number loaded."""
    if count_radares(session=session) > 0:
        return 0
    payloads = seed_payloads(load_seed_file(path))
    if not payloads:
        return 0
    result: ImportResult = import_radares(payloads, session=session)
    logger.info("Loaded initial radar roster", extra={"count": result.imported})
    return result.imported


__all__ = ["SeedFile", "SeedRadar", "bootstrap_radares", "load_seed_file", "seed_payloads"]
