"""Liveness routes.

The hosting platform probes ``/``; ``/health`` reports which build runs.
"""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from gate.config import Settings
from gate.util.observability import SERVICE_VERSION

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Build and environment of the running process."""

    status: str = "healthy"
    timestamp: datetime
    version: str = SERVICE_VERSION
    git_sha: str
    environment: str


@router.get("/", response_class=PlainTextResponse)
async def liveness() -> str:
    return "OK"


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report the running build; no dependency is probed."""
    return HealthResponse(
        timestamp=datetime.now(timezone.utc),
        git_sha=settings.git_sha,
        environment=settings.environment,
    )
