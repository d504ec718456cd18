"""
Normalise richer spatial inputs into the core :class:`Origin` type.

Accepted inputs:

- an :class:`Origin` (returned as is, or re-tagged with ``crs``)
- a :class:`Point2D`
- a ``(lon, lat)`` / ``(x, y)`` pair
- a shapely ``Point``
- anything with ``__geo_interface__`` or a GeoJSON dict: a Point geometry,
  a Feature wrapping one, or a FeatureCollection (its first feature is used).
  A legacy ``crs`` member (``{"type": "name", "properties": {"name": ...}}``)
  is honoured when no explicit ``crs`` is given.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from shapely.geometry import Point

from osrm_isochrones.core.models import Origin, Point2D
from osrm_isochrones.errors import InvalidOriginError


def _point(x: Any, y: Any) -> Point2D:
    try:
        return Point2D(float(x), float(y))
    except (TypeError, ValueError):
        msg = f"Origin coordinates are not numbers: ({x!r}, {y!r})"
        raise InvalidOriginError(msg) from None


def _crs_member(obj: Mapping[str, Any]) -> str | None:
    crs = obj.get("crs")
    if isinstance(crs, Mapping):
        name = crs.get("properties", {}).get("name")
        return str(name) if name else None
    return str(crs) if crs else None


def _from_geojson(obj: Mapping[str, Any], crs: str | None) -> Origin:
    kind = obj.get("type")
    crs = crs or _crs_member(obj)
    if kind == "FeatureCollection":
        features = obj.get("features") or []
        if not features:
            msg = "FeatureCollection has no features to use as origin"
            raise InvalidOriginError(msg)
        return _from_geojson(features[0], crs)
    if kind == "Feature":
        geometry = obj.get("geometry")
        if not geometry:
            msg = "Feature has no geometry to use as origin"
            raise InvalidOriginError(msg)
        return _from_geojson(geometry, crs)
    if kind == "Point":
        coords = obj.get("coordinates") or []
        if len(coords) < 2:
            msg = f"GeoJSON Point has no usable coordinates: {coords!r}"
            raise InvalidOriginError(msg)
        return Origin(_point(coords[0], coords[1]), crs)
    msg = f"Cannot use GeoJSON {kind!r} as an origin, expected a Point"
    raise InvalidOriginError(msg)


def as_origin(loc: Any, crs: str | None = None) -> Origin:
    """
    Convert ``loc`` into an :class:`Origin`.

    Args:
        loc: Origin-like input (see module docstring).
        crs: CRS of ``loc``; overrides any CRS carried by ``loc``.
            ``None`` means "as given, else WGS84".

    Raises:
        InvalidOriginError: If ``loc`` cannot be read as a single point.
    """
    if isinstance(loc, Origin):
        return Origin(loc.point, crs or loc.crs)
    if isinstance(loc, Point2D):
        return Origin(loc, crs)
    if isinstance(loc, Point):
        return Origin(Point2D(loc.x, loc.y), crs)
    if hasattr(loc, "__geo_interface__"):
        return _from_geojson(loc.__geo_interface__, crs)
    if isinstance(loc, Mapping):
        return _from_geojson(loc, crs)
    if isinstance(loc, Sequence) and not isinstance(loc, str) and len(loc) == 2:
        x, y = loc
        return Origin(_point(x, y), crs)

    msg = f"Cannot use {type(loc).__name__} as an origin"
    raise InvalidOriginError(msg)
