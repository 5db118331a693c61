"""Liveness and readiness endpoints."""

import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import async_sessionmaker

from shortify.api import schemas
from shortify.api.dependencies import get_settings
from shortify.core.config import Settings
from shortify.db.base import DatabaseHealthCheck
from shortify.db.session import get_session_factory

# Mounted at the root: answers without touching the database
probe_router = APIRouter(tags=["health"])

router = APIRouter(tags=["health"])


@probe_router.get("/test", response_model=schemas.MessageResponse)
async def test_probe():
    return {"message": "test request"}


@router.get(
    "/health",
    summary="Get system health status",
    response_description="Health status of the database",
)
async def health_check(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    settings: Settings = Depends(get_settings),
):
    """Check that the database answers a trivial query."""
    database = await DatabaseHealthCheck.check_connection(session_factory)
    healthy = database["status"] == "healthy"

    body = {
        "status": "healthy" if healthy else "unhealthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {"database": database},
    }
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body,
    )
