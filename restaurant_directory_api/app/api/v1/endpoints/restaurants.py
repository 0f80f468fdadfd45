"""
Restaurant endpoints for API v1.

These routes expose creation, retrieval and deletion of restaurants,
rating submission and the top-rated queries.  Request bodies are
accepted as raw JSON objects and validated by the service so that
missing fields produce a 400.  Service errors carry their own status
code and are re-raised as ``HTTPException``.

Routes with fixed segments (``/rating``, ``/cuisine/...``,
``/region/...``) are declared before ``/{name}``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from restaurant_directory_api.app.api.dependencies import get_restaurant_service
from restaurant_directory_api.app.core.errors import RestaurantError
from restaurant_directory_api.app.schemas.restaurant import (
    ErrorResponse,
    RestaurantRead,
    SuccessResponse,
)
from restaurant_directory_api.app.services.restaurant_service import (
    DEFAULT_LIMIT,
    RestaurantService,
    parse_limit,
    parse_min_rating,
)


router = APIRouter(responses={500: {"model": ErrorResponse, "description": "Store error"}})


def _errors(*codes: int) -> Dict[int, Dict[str, Any]]:
    return {code: {"model": ErrorResponse} for code in codes}


def _raise_http(e: RestaurantError) -> None:
    raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.post(
    "",
    response_model=SuccessResponse,
    responses=_errors(400, 409),
    summary="Create a restaurant",
)
async def create_restaurant(
    body: Any = Body(None),
    service: RestaurantService = Depends(get_restaurant_service),
) -> Dict[str, bool]:
    """Create a restaurant from ``{name, cuisine, region}``.

    Returns 400 when a field is missing and 409 when the name exists.
    """
    try:
        return await service.create_restaurant(body)
    except RestaurantError as e:
        _raise_http(e)


@router.post(
    "/rating",
    response_model=SuccessResponse,
    responses=_errors(400, 404),
    summary="Submit a rating",
)
async def add_rating(
    body: Any = Body(None),
    service: RestaurantService = Depends(get_restaurant_service),
) -> Dict[str, bool]:
    """Add a rating from ``{name, rating}`` to a restaurant's average."""
    try:
        return await service.add_rating(body)
    except RestaurantError as e:
        _raise_http(e)


@router.get(
    "/cuisine/{cuisine}",
    response_model=List[RestaurantRead],
    responses=_errors(400),
    summary="Top-rated restaurants by cuisine",
)
async def top_by_cuisine(
    cuisine: str,
    limit: int = Query(DEFAULT_LIMIT),
    min_rating: float = Query(0.0, alias="minRating"),
    service: RestaurantService = Depends(get_restaurant_service),
) -> List[RestaurantRead]:
    """Restaurants of ``cuisine`` rated at least ``minRating``, best first.

    ``limit`` is capped at 100; ``minRating`` must be between 0 and 5.
    """
    try:
        return await service.top_by_cuisine(
            cuisine,
            limit=parse_limit(limit),
            min_rating=parse_min_rating(min_rating),
        )
    except RestaurantError as e:
        _raise_http(e)


@router.get(
    "/region/{region}",
    response_model=List[RestaurantRead],
    responses=_errors(400),
    summary="Top-rated restaurants by region",
)
async def top_by_region(
    region: str,
    limit: int = Query(DEFAULT_LIMIT),
    service: RestaurantService = Depends(get_restaurant_service),
) -> List[RestaurantRead]:
    try:
        return await service.top_by_region(region, limit=parse_limit(limit))
    except RestaurantError as e:
        _raise_http(e)


@router.get(
    "/region/{region}/cuisine/{cuisine}",
    response_model=List[RestaurantRead],
    responses=_errors(400),
    summary="Top-rated restaurants by region and cuisine",
)
async def top_by_region_and_cuisine(
    region: str,
    cuisine: str,
    limit: int = Query(DEFAULT_LIMIT),
    service: RestaurantService = Depends(get_restaurant_service),
) -> List[RestaurantRead]:
    try:
        return await service.top_by_region_and_cuisine(region, cuisine, limit=parse_limit(limit))
    except RestaurantError as e:
        _raise_http(e)


@router.get(
    "/{name}",
    response_model=RestaurantRead,
    responses=_errors(404),
    summary="Get a restaurant",
)
async def get_restaurant(
    name: str,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantRead:
    """Retrieve a restaurant by name.  Raises 404 if it does not exist."""
    try:
        return await service.get_restaurant(name)
    except RestaurantError as e:
        _raise_http(e)


@router.delete(
    "/{name}",
    response_model=SuccessResponse,
    responses=_errors(404),
    summary="Delete a restaurant",
)
async def delete_restaurant(
    name: str,
    service: RestaurantService = Depends(get_restaurant_service),
) -> Dict[str, bool]:
    """Delete a restaurant by name.  Raises 404 if it does not exist."""
    try:
        return await service.delete_restaurant(name)
    except RestaurantError as e:
        _raise_http(e)
