"""
FastAPI dependencies.

The application factory stores the immutable settings, the restaurant
service and the optional cache on ``app.state``; these helpers hand
them to route handlers.
"""

from typing import Optional

from fastapi import Request

from ..core.cache import RestaurantCache
from ..core.config import Settings
from ..services.restaurant_service import RestaurantService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_restaurant_service(request: Request) -> RestaurantService:
    return request.app.state.restaurant_service


def get_cache(request: Request) -> Optional[RestaurantCache]:
    return request.app.state.cache
