"""Radar Check FastAPI application package."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api import api_router
from .core.config import settings
from .core.errors import RadarCheckError
from .core.logging_config import setup_logging
from .db.session import init_db
from .services.notifications import NOTIFICATIONS
from .services.seed import bootstrap_radares


def create_app() -> FastAPI:
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Initializing Radar Check API", extra={"highway": settings.highway})

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.exception_handler(RadarCheckError)
    async def radar_check_error_handler(request: Request, exc: RadarCheckError) -> JSONResponse:
        logger.warning(
            "Request rejected",
            extra={"path": request.url.path, "error": exc.__class__.__name__, "detail": exc.message},
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Provide a friendly landing response for the bare hostname."""

        return {
            "message": (
                f"{settings.app_name} API is online. Try GET "
                f"{settings.api_prefix}/health for a health check."
            )
        }

    @app.on_event("startup")
    def _bootstrap() -> None:
        init_db()
        if settings.seed_on_startup:
            loaded = bootstrap_radares()
            if loaded:
                NOTIFICATIONS.add("info", f"{loaded} radares carregados do cadastro inicial")

    return app


app = create_app()
