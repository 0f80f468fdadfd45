"""
Pydantic schemas for restaurants.

A restaurant is identified by its name and carries a cuisine, a region
and a running average rating.  The rating count is stored alongside
the average but is not part of the external shape returned by the API.
Request bodies are parsed by the service layer (not by FastAPI) so
that malformed input is reported as a 400 rather than a 422.
"""

from pydantic import BaseModel, Field, validator


class RestaurantCreate(BaseModel):
    """Schema for creating a new restaurant."""

    name: str = Field(..., min_length=1, description="Unique restaurant name")
    cuisine: str = Field(..., min_length=1, description="Cuisine category")
    region: str = Field(..., min_length=1, description="Region the restaurant is located in")


class RatingSubmit(BaseModel):
    """Schema for submitting a single rating.

    The rating is not bounds checked, but it must be finite.  A rating
    of ``0`` counts as missing.
    """

    name: str = Field(..., min_length=1)
    rating: float = Field(..., allow_inf_nan=False)

    @validator("rating")
    def reject_zero(cls, v: float) -> float:
        if not v:
            raise ValueError("rating is required")
        return v


class RestaurantRead(BaseModel):
    """External shape of a restaurant."""

    name: str
    cuisine: str
    rating: float
    region: str


class RestaurantRecord(RestaurantRead):
    """Stored restaurant, including the number of ratings."""

    rating_count: int = 0

    def to_read(self) -> RestaurantRead:
        return RestaurantRead(
            name=self.name,
            cuisine=self.cuisine,
            rating=self.rating,
            region=self.region,
        )


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    success: bool = False
    message: str
