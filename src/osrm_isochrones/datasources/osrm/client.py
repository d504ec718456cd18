"""OSRM API client constants and configuration.

API docs: http://project-osrm.org/docs/v5.24.0/api/#table-service
"""

from __future__ import annotations

from dataclasses import dataclass

from osrm_isochrones.core.models import Point2D

DEFAULT_SERVER = "https://router.project-osrm.org/"
DEFAULT_PROFILE = "driving"

# The demo server caps table requests at 100 coordinates; one is the origin.
DEFAULT_BATCH_SIZE = 99

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class OSRMConfig:
    """Where and how to query OSRM. Passed explicitly to the sampler."""

    server_url: str = DEFAULT_SERVER
    profile: str = DEFAULT_PROFILE
    batch_size: int = DEFAULT_BATCH_SIZE
    timeout: float = DEFAULT_TIMEOUT

    def table_url(self, coordinates: list[Point2D]) -> str:
        """Table service URL for ``coordinates`` (lon/lat)."""
        return f"{self.server_url.rstrip('/')}/table/v1/{self.profile}/{format_coordinates(coordinates)}"


def format_coordinates(points: list[Point2D]) -> str:
    """OSRM path segment: ``lon,lat;lon,lat;...`` with 6 decimals (~0.1 m)."""
    return ";".join(f"{p.x:.6f},{p.y:.6f}" for p in points)
