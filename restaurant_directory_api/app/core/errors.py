"""
Error taxonomy for the restaurant directory.

Services raise these exceptions; the HTTP layer maps each class to a
status code through ``status_code``.  ``StoreError`` wraps any failure
of the backing table and is always reported to clients as an opaque
server error.
"""


class RestaurantError(Exception):
    """Base class for errors raised by the restaurant service."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RestaurantError):
    """Missing or malformed input."""

    status_code = 400


class NotFound(RestaurantError):
    """No restaurant with the requested name."""

    status_code = 404


class Conflict(RestaurantError):
    """A restaurant with the same name already exists."""

    status_code = 409


class StoreError(RestaurantError):
    """The backing store failed to complete an operation."""

    status_code = 500
