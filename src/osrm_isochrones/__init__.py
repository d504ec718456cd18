"""OSRM Isochrones - travel-time bands around a point from an OSRM table.

Architecture::

    core/          Grid, rasterization, contouring, band logic (no I/O)
    geo/           Reprojection (pyproj) and origin adapters
    datasources/   Routing backends acting as cost samplers (OSRM table)
    services/      Shared utilities (HTTP client with retry)
    flows/         Prefect orchestration (compute, cache, export GeoJSON)
    store.py       JSON store with TTL used by the flow
    cli.py         Command-line entry point

Data flow: origin -> grid (core) -> OSRM table (datasources) -> raster
-> contour bands (core) -> reprojected IsochroneSet -> GeoJSON

Example::

    from osrm_isochrones import OSRMTableSampler, compute_isochrones

    iso = compute_isochrones((5.936036, 49.24882), sampler=OSRMTableSampler())
    for band in iso:
        print(band.id, band.min, band.max, band.geometry.area)
"""

__version__ = "0.1.0"

from osrm_isochrones.config import Settings, get_settings
from osrm_isochrones.core.models import (
    DEFAULT_BREAKS,
    IsochroneBand,
    IsochroneSet,
    Origin,
    Point2D,
)
from osrm_isochrones.core.pipeline import compute_isochrones
from osrm_isochrones.datasources.osrm import OSRMConfig, OSRMTableSampler
from osrm_isochrones.errors import (
    InvalidBreaksError,
    InvalidGridError,
    InvalidOriginError,
    IsochroneError,
    NoReachableAreaError,
    ReprojectionError,
    SamplerFailureError,
)
from osrm_isochrones.geo.adapters import as_origin
from osrm_isochrones.serialization import bands_from_geojson, bands_to_geojson

__all__ = [
    "DEFAULT_BREAKS",
    "InvalidBreaksError",
    "InvalidGridError",
    "InvalidOriginError",
    "IsochroneBand",
    "IsochroneError",
    "IsochroneSet",
    "NoReachableAreaError",
    "OSRMConfig",
    "OSRMTableSampler",
    "Origin",
    "Point2D",
    "ReprojectionError",
    "SamplerFailureError",
    "Settings",
    "__version__",
    "as_origin",
    "bands_from_geojson",
    "bands_to_geojson",
    "compute_isochrones",
    "get_settings",
]
