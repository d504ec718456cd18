"""Core data models and constants for isochrone computation."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import numpy as np
    from shapely.geometry.base import BaseGeometry

#: Geographic CRS used when an origin carries none, and by the OSRM API.
GEOGRAPHIC_CRS = "EPSG:4326"
#: Projected metric CRS the grid and raster live in.
PROJECTED_CRS = "EPSG:3857"

DEFAULT_BREAKS: tuple[float, ...] = (0, 10, 20, 30, 40, 50, 60)
DEFAULT_SPEED_KMH = 140.0
DEFAULT_RESOLUTION = 30


def speed_m_per_min(speed_kmh: float) -> float:
    """Convert km/h to meters per minute."""
    return speed_kmh * 1000 / 60


@dataclass(frozen=True)
class Point2D:
    """A bare 2D coordinate. For geographic CRSs ``x`` is longitude."""

    x: float
    y: float


@dataclass(frozen=True)
class Origin:
    """Isochrone origin: one point plus the CRS it is expressed in."""

    point: Point2D
    crs: str | None = None

    @property
    def source_crs(self) -> str:
        """CRS of ``point``, defaulting to WGS84 longitude/latitude."""
        return self.crs or GEOGRAPHIC_CRS


@dataclass
class SampleGrid:
    """Regular square grid of sample points in projected coordinates.

    ``points`` is an ``(resolution**2, 2)`` array ordered row by row from
    the south-west corner, x varying fastest.
    """

    x0: float
    y0: float
    step: float
    resolution: int
    points: np.ndarray

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy) of the outermost sample points."""
        span = self.step * (self.resolution - 1)
        return (self.x0, self.y0, self.x0 + span, self.y0 + span)

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class CostSample:
    """Sampled locations (projected) with one travel cost in minutes each.

    A cost of ``None`` or NaN marks an unreachable location.
    """

    locations: np.ndarray
    costs: Sequence[float | None]


@dataclass
class CostRaster:
    """Cost values aligned to the cell centers of a :class:`SampleGrid`.

    ``values[j, i]`` is the cell centered at ``(x0 + i*step, y0 + j*step)``.
    Cells with ``sampled == False`` hold ``sentinel``.
    """

    values: np.ndarray
    sampled: np.ndarray
    x0: float
    y0: float
    step: float
    sentinel: float

    @property
    def shape(self) -> tuple[int, int]:
        rows, cols = self.values.shape
        return rows, cols

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy) of the outermost cell centers."""
        rows, cols = self.values.shape
        return (
            self.x0,
            self.y0,
            self.x0 + self.step * (cols - 1),
            self.y0 + self.step * (rows - 1),
        )


@dataclass(frozen=True)
class IsochroneBand:
    """One travel-time band: the area with ``min < cost <= max``.

    ``reachable`` is the whole ``cost <= max`` area the band was cut from.
    """

    id: int
    min: float
    max: float
    geometry: BaseGeometry
    reachable: BaseGeometry | None = field(default=None, repr=False, compare=False)

    @property
    def center(self) -> float:
        return (self.max - self.min) / 2


@dataclass
class IsochroneSet:
    """Ordered isochrone bands, innermost first, in a single CRS."""

    bands: list[IsochroneBand]
    crs: str = GEOGRAPHIC_CRS

    def __iter__(self) -> Iterator[IsochroneBand]:
        return iter(self.bands)

    def __len__(self) -> int:
        return len(self.bands)

    def __getitem__(self, index: int) -> IsochroneBand:
        return self.bands[index]

    @property
    def breaks(self) -> list[float]:
        """Distinct band edges, e.g. for a choropleth legend."""
        return sorted({b.min for b in self.bands} | {b.max for b in self.bands})


@dataclass
class CostQueryResult:
    """What a :class:`CostSampler` returns: echoed locations and costs.

    ``locations`` are the coordinates the backend actually routed to
    (OSRM snaps them to the road network); ``costs`` are minutes or ``None``.
    """

    locations: list[Point2D]
    costs: list[float | None]


class CostSampler(Protocol):
    """Anything that can answer "how long from origin to each destination"."""

    def query_costs(
        self, origin: Point2D, destinations: Sequence[Point2D]
    ) -> CostQueryResult:
        """Return one cost per destination, in input order.

        Coordinates are geographic (``EPSG:4326``, lon/lat).
        """
        ...
