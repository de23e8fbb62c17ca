"""Health check endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

API_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


class StoreStatus(BaseModel):
    """Reachability of the profile/swipe/match store."""

    status: str
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    service: str
    status: str
    version: str
    timestamp: str
    environment: str
    store: StoreStatus | None = None


def _base(status: str, store: StoreStatus | None = None) -> HealthResponse:
    return HealthResponse(
        service=settings.app_name,
        status=status,
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        store=store,
    )


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return _base("healthy")


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Readiness probe: pings the store the swipe and match core writes to.

    Reports ``degraded`` instead of failing so dashboards can still render.
    """
    started = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return _base("degraded", StoreStatus(status="unavailable", error=type(e).__name__))

    latency = round((time.perf_counter() - started) * 1000, 2)
    return _base("healthy", StoreStatus(status="available", latency_ms=latency))
