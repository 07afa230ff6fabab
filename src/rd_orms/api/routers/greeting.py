"""
rd_orms.api.routers.greeting

The one route every placeholder service exposes.

Responsibilities:
- Answer `GET /` with the service's fixed text body.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from rd_orms.api.services import ServiceDefinition


def build_router(service: ServiceDefinition) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_class=PlainTextResponse)
    async def greeting() -> str:
        return service.body

    return router
