"""
Pydantic models for data crossing the package boundary.

OSRM responses are validated into these models before the core sees them,
and user requests are validated before any sampling starts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from osrm_isochrones.core.breaks import normalize_breaks
from osrm_isochrones.core.models import DEFAULT_BREAKS

# =============================================================================
# OSRM table service
# =============================================================================


class Waypoint(BaseModel):
    """A coordinate as OSRM snapped it to the road network."""

    location: tuple[float, float] = Field(..., description="[lon, lat] after snapping")
    name: str = ""
    distance: float | None = Field(default=None, description="Snap distance in meters")
    hint: str | None = None


class TableResponse(BaseModel):
    """Response of ``GET /table/v1/{profile}/{coordinates}``."""

    code: str
    message: str | None = None
    durations: list[list[float | None]] | None = Field(
        default=None, description="Seconds, sources x destinations; null = no route"
    )
    sources: list[Waypoint] = Field(default_factory=list)
    destinations: list[Waypoint] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.code == "Ok"


# =============================================================================
# Requests
# =============================================================================


class IsochroneRequest(BaseModel):
    """An isochrone request as given on the CLI or to the flow."""

    model_config = {"str_strip_whitespace": True}

    lon: float = Field(..., description="Origin x (longitude when crs is geographic)")
    lat: float = Field(..., description="Origin y (latitude when crs is geographic)")
    breaks: list[float] = Field(default_factory=lambda: list(DEFAULT_BREAKS))
    crs: str | None = Field(default=None, description="CRS of lon/lat; default EPSG:4326")
    profile: str | None = None

    @classmethod
    def for_origin(
        cls,
        lon: float,
        lat: float,
        breaks: list[float] | None = None,
        crs: str | None = None,
        profile: str | None = None,
    ) -> IsochroneRequest:
        """Build a request, raising :class:`InvalidBreaksError` for unusable breaks.

        Plain construction reports bad breaks as a pydantic ``ValidationError``.
        """
        levels = normalize_breaks(breaks) if breaks is not None else list(DEFAULT_BREAKS)
        return cls(lon=lon, lat=lat, breaks=levels, crs=crs, profile=profile)

    @field_validator("breaks")
    @classmethod
    def _normalize(cls, value: list[float]) -> list[float]:
        return normalize_breaks(value)

    def cache_key(self) -> str:
        """Stable file-name-safe key for storing this request's result."""
        breaks = "-".join(f"{b:g}" for b in self.breaks)
        crs = (self.crs or "EPSG:4326").replace(":", "")
        return f"{self.lon:.6f}_{self.lat:.6f}_{crs}_{self.profile or 'default'}_{breaks}"

