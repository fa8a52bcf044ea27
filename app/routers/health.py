"""
Health Endpoint Module.

This module defines the `/health` endpoint used for application health checks.
It provides a simple way to verify that the FastAPI application is running
and responsive, and reports whether the Redis cache answers.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.dependencies import get_cache
from app.services.db import CacheService

router = APIRouter(
    prefix="/health",
    tags=['health']
)


@router.get("/", summary="Health Check", response_description="Health status of the API")
async def health_check(cache: CacheService = Depends(get_cache)) -> dict[str, str]:
    """
    Perform a basic health check.

    Returns a JSON response with:
    - `status`: Static string `"ok"` indicating the API is alive.
    - `cache`: `"ok"` when Redis answers a round trip, `"unavailable"` otherwise.
    - `timestamp`: Current UTC timestamp in ISO 8601 format.
    """
    cache_ok = await cache.set("health:ping", "pong", ttl_seconds=10)
    return {
        "status": "ok",
        "cache": "ok" if cache_ok else "unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
