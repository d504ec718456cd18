"""Pure reprojection helpers built on pyproj.

All functions return new objects; nothing is transformed in place.
Axis order is always (x, y) = (lon, lat) for geographic CRSs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError
from shapely.ops import transform

from osrm_isochrones.core.models import Point2D
from osrm_isochrones.errors import ReprojectionError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger(__name__)


def resolve_crs(crs: str | int | CRS) -> CRS:
    """Resolve a CRS identifier ("EPSG:4326", 3857, WKT, proj string)."""
    try:
        return CRS.from_user_input(crs)
    except CRSError as e:
        msg = f"Cannot resolve CRS {crs!r}: {e}"
        raise ReprojectionError(msg) from e


def get_transformer(source_crs: str | int | CRS, target_crs: str | int | CRS) -> Transformer:
    """Build an always-xy transformer between two CRSs."""
    src = resolve_crs(source_crs)
    dst = resolve_crs(target_crs)
    try:
        return Transformer.from_crs(src, dst, always_xy=True)
    except ProjError as e:
        msg = f"No transformation from {src.to_string()} to {dst.to_string()}: {e}"
        raise ReprojectionError(msg) from e


def reproject(
    geometry: BaseGeometry,
    source_crs: str | int | CRS,
    target_crs: str | int | CRS,
) -> BaseGeometry:
    """Return ``geometry`` transformed from ``source_crs`` to ``target_crs``."""
    transformer = get_transformer(source_crs, target_crs)
    try:
        result = transform(transformer.transform, geometry)
    except ProjError as e:
        msg = f"Failed to reproject {geometry.geom_type}: {e}"
        raise ReprojectionError(msg) from e
    if not result.is_empty and not np.isfinite(result.bounds).all():
        msg = f"Reprojecting {geometry.geom_type} produced non-finite coordinates"
        raise ReprojectionError(msg)
    return result


def reproject_points(
    points: Sequence[Point2D] | np.ndarray,
    source_crs: str | int | CRS,
    target_crs: str | int | CRS,
) -> np.ndarray:
    """Transform many points at once; returns an ``(n, 2)`` array."""
    if isinstance(points, np.ndarray):
        xy = np.asarray(points, dtype=float).reshape(-1, 2)
    else:
        xy = np.array([(p.x, p.y) for p in points], dtype=float).reshape(-1, 2)
    transformer = get_transformer(source_crs, target_crs)
    try:
        xs, ys = transformer.transform(xy[:, 0], xy[:, 1], errcheck=True)
    except ProjError as e:
        msg = f"Failed to reproject {len(xy)} points: {e}"
        raise ReprojectionError(msg) from e
    return np.column_stack([np.asarray(xs, dtype=float), np.asarray(ys, dtype=float)])


def reproject_point(
    point: Point2D,
    source_crs: str | int | CRS,
    target_crs: str | int | CRS,
) -> Point2D:
    """Transform a single point."""
    x, y = reproject_points([point], source_crs, target_crs)[0]
    return Point2D(float(x), float(y))
