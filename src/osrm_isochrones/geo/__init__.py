"""Coordinate handling around the core.

- projection: pure pyproj/shapely reprojection (``reproject`` and friends)
- adapters: turn coordinates, shapely points and GeoJSON into an ``Origin``
"""

from osrm_isochrones.geo.adapters import as_origin
from osrm_isochrones.geo.projection import (
    get_transformer,
    reproject,
    reproject_point,
    reproject_points,
    resolve_crs,
)

__all__ = [
    "as_origin",
    "get_transformer",
    "reproject",
    "reproject_point",
    "reproject_points",
    "resolve_crs",
]
