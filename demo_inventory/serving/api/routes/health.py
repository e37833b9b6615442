"""
Health Check Endpoints

Provides health and readiness checks for orchestration systems.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from demo_inventory.config import Settings
from demo_inventory.database.connection import check_database_health
from demo_inventory.serving.api.dependencies import InMemoryStore, get_app_settings, get_store

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    environment: str
    timestamp: datetime
    checks: Dict[str, Any]


async def _storage_health(store: Optional[InMemoryStore]) -> Dict[str, Any]:
    if store is not None:
        return {"status": "healthy", "backend": "in-memory"}
    return {**await check_database_health(), "backend": "postgresql"}


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    store: Optional[InMemoryStore] = Depends(get_store),
) -> HealthResponse:
    """
    Comprehensive health check endpoint.

    Checks:
    - Application status
    - Storage backend connectivity
    """
    storage = await _storage_health(store)

    return HealthResponse(
        status="healthy" if storage.get("status") == "healthy" else "degraded",
        version=settings.version,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
        checks={"database": storage},
    )


@router.get("/health/live")
async def liveness_check() -> Dict[str, str]:
    """
    Kubernetes liveness probe endpoint.

    Returns 200 if the application is running.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_check(
    response: Response,
    store: Optional[InMemoryStore] = Depends(get_store),
) -> Dict[str, str]:
    """
    Kubernetes readiness probe endpoint.

    Returns 200 if the application is ready to receive traffic.
    """
    storage = await _storage_health(store)
    if storage.get("status") != "healthy":
        response.status_code = 503
        return {"status": "not_ready", "reason": "database_unavailable"}
    return {"status": "ready"}
