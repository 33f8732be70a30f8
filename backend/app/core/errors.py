"""
Error taxonomy for the directions service.

Only missing inputs and upstream failures are raised. Routes or legs
with missing fields never raise: the enricher folds them into null or
default values.
"""

from typing import Any, Optional, Tuple


class DirectionsError(Exception):
    """Base class for errors surfaced as a single top-level response."""


class ValidationError(DirectionsError):
    """A required query value is missing. Never reaches the provider."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamError(DirectionsError):
    """
    The routing provider failed or could not be reached.

    `status_code` and `body` are set when the provider answered with a
    structured error; both stay None for transport failures.
    """

    def __init__(
        self,
        message: str = "Routing provider request failed",
        *,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    @property
    def is_structured(self) -> bool:
        return self.status_code is not None and self.body is not None


def require_locations(origin: Optional[str], destination: Optional[str]) -> Tuple[str, str]:
    """Strip both identifiers, raising ValidationError if either is blank."""
    origin = (origin or "").strip()
    destination = (destination or "").strip()
    if not origin or not destination:
        raise ValidationError("Missing origin or destination")
    return origin, destination
