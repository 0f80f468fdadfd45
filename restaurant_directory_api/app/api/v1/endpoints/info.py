"""
Service information endpoints.

``GET /`` echoes the deployment configuration (table, region, cache
endpoint and whether the cache is enabled).  ``GET /health`` is a
liveness probe and ``GET /cache/stats`` reports the read-through
cache counters.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from restaurant_directory_api.app.api.dependencies import get_cache, get_settings
from restaurant_directory_api.app.core.cache import RestaurantCache
from restaurant_directory_api.app.core.config import Settings


router = APIRouter()


@router.get("/", response_model=Dict[str, Any])
async def config_echo(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return settings.public_view()


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@router.get("/cache/stats", response_model=Dict[str, Any])
async def cache_stats(cache: Optional[RestaurantCache] = Depends(get_cache)) -> Dict[str, Any]:
    """Return cache counters.  When caching is disabled only ``enabled`` is reported."""
    if cache is None:
        return {"enabled": False}
    return {"enabled": True, **cache.stats()}
