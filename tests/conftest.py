"""Shared fixtures: a deterministic cost sampler and raster builder."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
import pytest

from osrm_isochrones.core.models import (
    GEOGRAPHIC_CRS,
    PROJECTED_CRS,
    CostQueryResult,
    CostRaster,
    Point2D,
    speed_m_per_min,
)
from osrm_isochrones.geo.projection import reproject_point, reproject_points


class DistanceSampler:
    """Cost = straight-line Web Mercator distance at a constant speed.

    ``unreachable`` decides, from the projected offset (dx, dy) to the origin,
    which destinations get no route.
    """

    def __init__(
        self,
        speed_kmh: float = 140.0,
        unreachable: Callable[[float, float], bool] | None = None,
    ) -> None:
        self.speed = speed_m_per_min(speed_kmh)
        self.unreachable = unreachable
        self.calls = 0

    def query_costs(self, origin: Point2D, destinations: Sequence[Point2D]) -> CostQueryResult:
        self.calls += 1
        o = reproject_point(origin, GEOGRAPHIC_CRS, PROJECTED_CRS)
        xy = reproject_points(destinations, GEOGRAPHIC_CRS, PROJECTED_CRS)
        costs: list[float | None] = []
        for x, y in xy:
            dx, dy = x - o.x, y - o.y
            if self.unreachable is not None and self.unreachable(dx, dy):
                costs.append(None)
            else:
                costs.append(float(np.hypot(dx, dy)) / self.speed)
        return CostQueryResult(locations=list(destinations), costs=costs)


@pytest.fixture
def distance_sampler() -> DistanceSampler:
    return DistanceSampler()


@pytest.fixture
def sampler_factory() -> type[DistanceSampler]:
    return DistanceSampler


def build_raster(values: np.ndarray | list[list[float]], step: float = 1.0) -> CostRaster:
    arr = np.asarray(values, dtype=float)
    return CostRaster(
        values=arr,
        sampled=np.ones(arr.shape, dtype=bool),
        x0=0.0,
        y0=0.0,
        step=step,
        sentinel=float(arr.max()) + 1,
    )


@pytest.fixture
def make_raster() -> Callable[..., CostRaster]:
    return build_raster


@pytest.fixture
def cone_raster() -> CostRaster:
    """9x9 raster whose value is the distance (in cells) to the center cell."""
    j, i = np.mgrid[0:9, 0:9]
    return build_raster(np.hypot(i - 4, j - 4))
