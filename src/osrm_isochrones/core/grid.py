"""Sampling grid around an origin."""

from __future__ import annotations

import logging

import numpy as np

from osrm_isochrones.core.models import DEFAULT_RESOLUTION, Point2D, SampleGrid
from osrm_isochrones.errors import InvalidGridError

logger = logging.getLogger(__name__)

MIN_RESOLUTION = 2


def generate_grid(
    center: Point2D,
    dmax: float,
    resolution: int = DEFAULT_RESOLUTION,
) -> SampleGrid:
    """
    Build a ``resolution x resolution`` grid spanning ``center +/- dmax``.

    The grid is square, so it covers the disk of radius ``dmax`` around
    ``center``. Points beyond ``dmax`` are never sampled.

    Args:
        center: Projected (metric) coordinates of the origin.
        dmax: Half the side of the grid, in meters.
        resolution: Number of points per side.

    Returns:
        SampleGrid with points ordered row by row from the south-west corner.

    Raises:
        InvalidGridError: If ``dmax <= 0`` or ``resolution < 2``.
    """
    if not dmax > 0:
        msg = f"Grid half-width must be positive, got {dmax}"
        raise InvalidGridError(msg)
    if resolution < MIN_RESOLUTION:
        msg = f"Grid resolution must be at least {MIN_RESOLUTION}, got {resolution}"
        raise InvalidGridError(msg)

    xs = np.linspace(center.x - dmax, center.x + dmax, resolution)
    ys = np.linspace(center.y - dmax, center.y + dmax, resolution)
    gx, gy = np.meshgrid(xs, ys)
    points = np.column_stack([gx.ravel(), gy.ravel()])
    step = 2 * dmax / (resolution - 1)

    logger.debug(
        "Generated %dx%d grid, step %.1f m, around (%.1f, %.1f)",
        resolution,
        resolution,
        step,
        center.x,
        center.y,
    )
    return SampleGrid(
        x0=float(xs[0]),
        y0=float(ys[0]),
        step=step,
        resolution=resolution,
        points=points,
    )
