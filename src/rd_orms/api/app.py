"""
rd_orms.api.app

FastAPI app factory for the placeholder services.

Responsibilities:
- Build one FastAPI application per service definition.
- Register the greeting route and request-logging middleware.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from rd_orms import __version__
from rd_orms.api.routers.greeting import build_router
from rd_orms.api.services import ServiceDefinition
from rd_orms.observability.logging import configure_logging, get_logger
from rd_orms.observability.middleware import RequestContextMiddleware
from rd_orms.settings import Settings

log = get_logger(__name__)


def create_app(*, service: ServiceDefinition, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=f"{service.key}-service", level=settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        log.info("startup", env=settings.env)
        yield
        log.info("shutdown")

    # Docs and OpenAPI routes stay off: `GET /` is the whole surface.
    app = FastAPI(
        title=service.title,
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(build_router(service))
    return app


# --- Module Notes -----------------------------------------------------------
# All five services share this factory; only the `ServiceDefinition` differs.
