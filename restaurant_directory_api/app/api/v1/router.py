"""
Top-level router for version 1 of the API.

Aggregates the domain routers.  The restaurant routes live under
``/restaurants``; the information routes (``/``, ``/health``,
``/cache/stats``) have no prefix.
"""

from fastapi import APIRouter

from .endpoints import info, restaurants

router = APIRouter()

router.include_router(info.router, tags=["info"])
router.include_router(restaurants.router, prefix="/restaurants", tags=["restaurants"])
