"""Error kinds raised by the Coursehub stores and services.

Every store and service raises one of these. The API layer maps them to
HTTP status codes (see `api.exceptions`); nothing below the API knows
about HTTP.
"""
from __future__ import annotations


class CoursehubError(Exception):
    """Base class for domain errors."""

    code = "error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class InvalidInput(CoursehubError):
    """Malformed id, out-of-range value, disallowed key or empty field."""

    code = "invalid_input"


class NotFound(CoursehubError):
    code = "not_found"


class Conflict(CoursehubError):
    """Duplicate unique key on creation (email, course code)."""

    code = "conflict"


class Forbidden(CoursehubError):
    """The acting student may not perform this action on this resource."""

    code = "forbidden"


class Unavailable(CoursehubError):
    """Storage unreachable. Not retried here."""

    code = "unavailable"
