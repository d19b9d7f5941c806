"""Liveness and readiness checks."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from jwtauth.config import Settings
from jwtauth.domain.repository import SessionStore

router = APIRouter(prefix="/health", tags=["health"], route_class=DishkaRoute)

# Never written; reading it round-trips the session store
_READINESS_KEY = "readiness-check@localhost"


class HealthResponse(BaseModel):
    status: str
    checked_at: datetime
    version: str
    environment: str
    git_sha: str


def _healthy(settings: Settings) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        checked_at=datetime.now(timezone.utc),
        version=settings.version,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )


@router.get("", response_model=HealthResponse)
async def liveness(settings: FromDishka[Settings]) -> HealthResponse:
    """Process is up. Touches no backing store."""
    return _healthy(settings)


@router.get("/ready", response_model=HealthResponse)
async def readiness(
    settings: FromDishka[Settings], session_store: FromDishka[SessionStore]
) -> HealthResponse:
    """Session store answers within its timeout.

    An unreachable store surfaces as the usual 503 adapter error.
    """
    await session_store.get(_READINESS_KEY)
    return _healthy(settings)
