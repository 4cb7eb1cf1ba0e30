"""Routing error types."""

from __future__ import annotations

from typing import Sequence


class RoutingError(ValueError):
    """Base class for route planning failures caused by the caller's input."""


class InvalidInputError(RoutingError):
    """Raised when there is nothing to route."""


class MissingPointsError(InvalidInputError):
    """Raised when requested identifiers are absent from the map registry."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Some units not found: {', '.join(self.missing)}")


class ConfigurationError(RoutingError):
    """Raised for solver parameters outside their valid range."""


class MapNotFoundError(LookupError):
    """Raised when a map identifier has no stored record."""

    def __init__(self, map_id: str) -> None:
        self.map_id = map_id
        super().__init__(f"Map '{map_id}' not found.")
