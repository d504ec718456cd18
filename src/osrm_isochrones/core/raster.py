"""Rasterization of sampled travel costs onto the sampling grid.

Rules:

- a sample goes to the cell whose center is nearest to its location;
- an unreachable sample counts as the worst finite cost observed, so bands
  stay bounded instead of running to infinity;
- a cell keeps the minimum cost of its samples;
- a cell with no sample gets the background ``max(costs) + 1``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from osrm_isochrones.core.models import CostRaster, CostSample, SampleGrid
from osrm_isochrones.errors import NoReachableAreaError, SamplerFailureError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def _cost_array(costs: Sequence[float | None]) -> np.ndarray:
    return np.array([np.nan if c is None else c for c in costs], dtype=float)


def rasterize(grid: SampleGrid, samples: CostSample) -> CostRaster:
    """
    Assign each grid cell the minimum cost of the samples falling in it.

    Args:
        grid: Grid whose points define the cell centers.
        samples: Projected sample locations with costs in minutes.

    Returns:
        CostRaster of shape ``(resolution, resolution)``.

    Raises:
        SamplerFailureError: If locations and costs differ in length.
        NoReachableAreaError: If no sample has a finite cost.
    """
    locations = np.asarray(samples.locations, dtype=float).reshape(-1, 2)
    costs = _cost_array(samples.costs)
    if len(locations) != len(costs):
        msg = f"Got {len(locations)} sample locations but {len(costs)} costs"
        raise SamplerFailureError(msg)

    finite = np.isfinite(costs)
    if not finite.any():
        msg = f"None of the {len(costs)} sampled destinations is reachable"
        raise NoReachableAreaError(msg)

    worst = float(costs[finite].max())
    costs = np.where(finite, costs, worst)
    # Relative to the samples, not the breaks: with worst below the last
    # break, unsampled cells join an inner band.
    sentinel = worst + 1

    n = grid.resolution
    cols = np.rint((locations[:, 0] - grid.x0) / grid.step).astype(int)
    rows = np.rint((locations[:, 1] - grid.y0) / grid.step).astype(int)
    inside = (cols >= 0) & (cols < n) & (rows >= 0) & (rows < n)
    if not inside.all():
        logger.debug("Ignoring %d samples outside the grid", int((~inside).sum()))

    values = np.full((n, n), np.inf)
    np.minimum.at(values, (rows[inside], cols[inside]), costs[inside])
    sampled = np.isfinite(values)
    values[~sampled] = sentinel

    logger.debug(
        "Rasterized %d samples into %d/%d cells (sentinel %.1f, %d unreachable)",
        int(inside.sum()),
        int(sampled.sum()),
        n * n,
        sentinel,
        int((~finite).sum()),
    )
    return CostRaster(
        values=values,
        sampled=sampled,
        x0=grid.x0,
        y0=grid.y0,
        step=grid.step,
        sentinel=sentinel,
    )
