"""
Business logic for restaurants.

This service manages the restaurant table (``TABLE_NAME``): creation, retrieval,
deletion, rating submission and the top-rated queries by cuisine, by
region and by region and cuisine.  Request bodies are validated
before the table is touched.  Every mutation is a single conditional
statement so that concurrent requests cannot interleave between a
check and a write:

* creation relies on the primary key (``INSERT`` fails if the name exists);
* deletion inspects the affected row count;
* a rating is folded into the running average by one ``UPDATE`` whose
  arithmetic the store evaluates against the current row.

Failures of the store are logged with the operation and restaurant
name and surface as ``StoreError``.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..core.cache import RestaurantCache
from ..core.db import DEFAULT_TABLE_NAME, check_table_name, get_cursor
from ..core.errors import Conflict, NotFound, StoreError, ValidationError
from ..schemas.restaurant import (
    RatingSubmit,
    RestaurantCreate,
    RestaurantRead,
    RestaurantRecord,
)


logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MIN_RATING = 0.0
MAX_RATING = 5.0

_COLUMNS = "name, cuisine, region, rating, rating_count"


def _describe_errors(exc: PydanticValidationError) -> str:
    """Collapse pydantic errors into a one-line message."""
    missing = [str(err["loc"][-1]) for err in exc.errors() if err["type"] == "missing"]
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "body"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def _parse_body(model, body: Any):
    """Validate a JSON request body against ``model``."""
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model(**body)
    except PydanticValidationError as e:
        raise ValidationError(_describe_errors(e)) from e


def parse_limit(raw: Optional[Any]) -> int:
    """Parse the ``limit`` query value, clamped to ``[1, MAX_LIMIT]``."""
    if raw is None or raw == "":
        return DEFAULT_LIMIT
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("limit must be an integer")
    return max(1, min(limit, MAX_LIMIT))


def parse_min_rating(raw: Optional[Any]) -> float:
    """Parse the ``minRating`` query value; it must lie in ``[0, 5]``."""
    if raw is None or raw == "":
        return MIN_RATING
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError("minRating must be a number between 0 and 5")
    # also rejects NaN
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError("minRating must be a number between 0 and 5")
    return value


def _row_to_record(row: sqlite3.Row) -> RestaurantRecord:
    return RestaurantRecord(
        name=row["name"],
        cuisine=row["cuisine"],
        region=row["region"],
        rating=row["rating"],
        rating_count=row["rating_count"],
    )


class RestaurantService:
    """Service for the restaurant directory.

    Parameters
    ----------
    database_path : str
        Resolved path of the SQLite file holding the restaurant table.
    table_name : str
        Name of the restaurant table; must be a plain identifier.
    cache : Optional[RestaurantCache]
        Read-through cache for point lookups.  ``None`` disables caching.
    """

    def __init__(
        self,
        database_path: str,
        table_name: str = DEFAULT_TABLE_NAME,
        cache: Optional[RestaurantCache] = None,
    ) -> None:
        self.database_path = database_path
        self.table = check_table_name(table_name)
        self.cache = cache

    async def create_restaurant(self, body: Dict[str, Any]) -> Dict[str, bool]:
        """Insert a new restaurant with ``rating = 0`` and ``rating_count = 0``.

        Raises ``ValidationError`` if ``name``, ``cuisine`` or ``region``
        is missing or empty and ``Conflict`` if the name is taken.
        """
        data = _parse_body(RestaurantCreate, body)

        try:
            with get_cursor(self.database_path) as cursor:
                cursor.execute(
                    f"""
                    INSERT INTO {self.table} (name, cuisine, region, rating, rating_count)
                    VALUES (?, ?, ?, 0, 0)
                    """,
                    (data.name, data.cuisine, data.region),
                )
        except sqlite3.IntegrityError as e:
            logger.warning("Restaurant %s already exists", data.name)
            raise Conflict("Restaurant already exists") from e
        except sqlite3.Error as e:
            logger.error("Unable to add restaurant %s: %s", data.name, e)
            raise StoreError("Unable to add item") from e

        if self.cache is not None:
            self.cache.invalidate(data.name)
        logger.info("Restaurant %s added (%s, %s)", data.name, data.cuisine, data.region)
        return {"success": True}

    async def get_record(self, name: str) -> RestaurantRecord:
        """Point lookup returning the stored record including its rating count."""
        try:
            with get_cursor(self.database_path) as cursor:
                row = cursor.execute(
                    f"SELECT {_COLUMNS} FROM {self.table} WHERE name = ?",
                    (name,),
                ).fetchone()
        except sqlite3.Error as e:
            logger.error("Fatal error reading restaurant %s: %s", name, e)
            raise StoreError("Fatal error reading data from the store") from e
        if not row:
            logger.warning("Restaurant %s not found", name)
            raise NotFound("Restaurant not found")
        return _row_to_record(row)

    async def get_restaurant(self, name: str) -> RestaurantRead:
        """Return the external shape of a restaurant, consulting the cache first."""
        if self.cache is not None:
            cached = self.cache.get(name)
            if cached is not None:
                logger.debug("Cache hit for %s", name)
                return RestaurantRead(**cached)
            logger.debug("Cache miss for %s", name)
        restaurant = (await self.get_record(name)).to_read()
        if self.cache is not None:
            self.cache.set(name, restaurant.dict())
        return restaurant

    async def delete_restaurant(self, name: str) -> Dict[str, bool]:
        """Delete a restaurant by name.

        Raises ``NotFound`` when no row was deleted.
        """
        try:
            with get_cursor(self.database_path) as cursor:
                cursor.execute(f"DELETE FROM {self.table} WHERE name = ?", (name,))
                deleted = cursor.rowcount
        except sqlite3.Error as e:
            logger.error("Unable to delete restaurant %s: %s", name, e)
            raise StoreError("Unable to delete item") from e

        if self.cache is not None:
            self.cache.invalidate(name)
        if not deleted:
            logger.warning("Restaurant %s not found", name)
            raise NotFound("Restaurant not found")
        logger.info("Restaurant %s deleted successfully", name)
        return {"success": True}

    async def add_rating(self, body: Dict[str, Any]) -> Dict[str, bool]:
        """Fold one rating into the restaurant's running average.

        The new average is ``(rating * rating_count + new) / (rating_count + 1)``.
        The submitted value is not checked against ``[0, 5]``.
        """
        data = _parse_body(RatingSubmit, body)

        try:
            with get_cursor(self.database_path) as cursor:
                cursor.execute(
                    f"""
                    UPDATE {self.table}
                    SET rating = (rating * rating_count + ?) / (rating_count + 1),
                        rating_count = rating_count + 1,
                        updated_at = CURRENT_TIMESTAMP
                    WHERE name = ?
                    """,
                    (data.rating, data.name),
                )
                updated = cursor.rowcount
        except sqlite3.Error as e:
            logger.error("Unable to rate restaurant %s: %s", data.name, e)
            raise StoreError("Unable to update item") from e

        if self.cache is not None:
            self.cache.invalidate(data.name)
        if not updated:
            logger.warning("Restaurant %s not found", data.name)
            raise NotFound("Restaurant not found")
        logger.info("Rating %s recorded for %s", data.rating, data.name)
        return {"success": True}

    async def top_by_cuisine(
        self,
        cuisine: str,
        limit: int = DEFAULT_LIMIT,
        min_rating: float = MIN_RATING,
    ) -> List[RestaurantRead]:
        """Top-rated restaurants of a cuisine with ``rating >= min_rating``."""
        return await self._ranked(
            "cuisine = ? AND rating >= ?",
            (cuisine, min_rating),
            limit,
            context=f"cuisine={cuisine}",
        )

    async def top_by_region(self, region: str, limit: int = DEFAULT_LIMIT) -> List[RestaurantRead]:
        """Top-rated restaurants in a region."""
        return await self._ranked("region = ?", (region,), limit, context=f"region={region}")

    async def top_by_region_and_cuisine(
        self,
        region: str,
        cuisine: str,
        limit: int = DEFAULT_LIMIT,
    ) -> List[RestaurantRead]:
        """Top-rated restaurants matching both region and cuisine."""
        return await self._ranked(
            "region = ? AND cuisine = ?",
            (region, cuisine),
            limit,
            context=f"region={region}, cuisine={cuisine}",
        )

    async def _ranked(self, where: str, params: tuple, limit: int, context: str) -> List[RestaurantRead]:
        # Ties on rating are broken by name so the order is stable.
        limit = max(1, min(limit, MAX_LIMIT))
        query = (
            f"SELECT {_COLUMNS} FROM {self.table} WHERE {where} "
            "ORDER BY rating DESC, name ASC LIMIT ?"
        )
        try:
            with get_cursor(self.database_path) as cursor:
                rows = cursor.execute(query, params + (limit,)).fetchall()
        except sqlite3.Error as e:
            logger.error("Fatal error querying restaurants (%s): %s", context, e)
            raise StoreError("Fatal error reading data from the store") from e
        return [_row_to_record(row).to_read() for row in rows]
