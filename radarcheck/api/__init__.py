"""API router definitions."""

from fastapi import APIRouter

from .checklists import router as checklists_router
from .exports import router as exports_router
from .logs import router as logs_router
from .radares import router as radares_router
from .routes import health_router
from .rules import router as rules_router
from .stats import router as stats_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(radares_router)
api_router.include_router(checklists_router)
api_router.include_router(stats_router)
api_router.include_router(rules_router)
api_router.include_router(exports_router)
api_router.include_router(logs_router)

__all__ = ["api_router"]
