"""GeoJSON serialization of isochrone band sets.

Features carry ``id``, ``min``, ``max`` and ``center`` properties, ordered
innermost first. The CRS is recorded in the legacy ``crs`` member so that
non-WGS84 output can be read back unambiguously.
"""

from __future__ import annotations

from typing import Any

from shapely.geometry import mapping, shape

from osrm_isochrones.core.models import GEOGRAPHIC_CRS, IsochroneBand, IsochroneSet


def band_to_feature(band: IsochroneBand) -> dict[str, Any]:
    """Convert one band to a GeoJSON Feature dict."""
    return {
        "type": "Feature",
        "id": band.id,
        "properties": {
            "id": band.id,
            "min": band.min,
            "max": band.max,
            "center": band.center,
        },
        "geometry": mapping(band.geometry),
    }


def bands_to_geojson(isochrones: IsochroneSet) -> dict[str, Any]:
    """Convert an IsochroneSet to a GeoJSON FeatureCollection dict."""
    return {
        "type": "FeatureCollection",
        "crs": {"type": "name", "properties": {"name": isochrones.crs}},
        "features": [band_to_feature(band) for band in isochrones],
    }


def bands_from_geojson(data: dict[str, Any]) -> IsochroneSet:
    """Rebuild an IsochroneSet from :func:`bands_to_geojson` output.

    ``center`` is derived from ``min``/``max`` and not read back.
    """
    crs = data.get("crs", {}).get("properties", {}).get("name") or GEOGRAPHIC_CRS
    bands = [
        IsochroneBand(
            id=int(feature["properties"]["id"]),
            min=float(feature["properties"]["min"]),
            max=float(feature["properties"]["max"]),
            geometry=shape(feature["geometry"]),
        )
        for feature in data.get("features", [])
    ]
    return IsochroneSet(bands=bands, crs=crs)
