"""Isochrone core: grid, rasterization, contouring and band logic.

Dependency rule: core/ depends on numpy and shapely only. It never does
HTTP; travel costs come from a ``CostSampler`` handed in by the caller.
The one exception is ``pipeline``, which also uses ``geo/`` for
reprojection and is therefore not re-exported here (import it from
``osrm_isochrones.core.pipeline`` or the package root).

Modules:
  - models: Point2D, Origin, SampleGrid, CostSample, CostRaster,
            IsochroneBand, IsochroneSet, CostSampler protocol
  - breaks: normalize_breaks, parse_breaks
  - grid: generate_grid
  - raster: rasterize
  - contours: trace_rings, level_region
  - bands: extract_bands, correct_boundaries
  - pipeline: compute_isochrones
"""

from osrm_isochrones.core.bands import correct_boundaries, extract_bands
from osrm_isochrones.core.breaks import normalize_breaks, parse_breaks
from osrm_isochrones.core.contours import level_region, trace_rings
from osrm_isochrones.core.grid import generate_grid
from osrm_isochrones.core.models import (
    DEFAULT_BREAKS,
    DEFAULT_RESOLUTION,
    DEFAULT_SPEED_KMH,
    GEOGRAPHIC_CRS,
    PROJECTED_CRS,
    CostQueryResult,
    CostRaster,
    CostSample,
    CostSampler,
    IsochroneBand,
    IsochroneSet,
    Origin,
    Point2D,
    SampleGrid,
)
from osrm_isochrones.core.raster import rasterize

__all__ = [
    "DEFAULT_BREAKS",
    "DEFAULT_RESOLUTION",
    "DEFAULT_SPEED_KMH",
    "GEOGRAPHIC_CRS",
    "PROJECTED_CRS",
    "CostQueryResult",
    "CostRaster",
    "CostSample",
    "CostSampler",
    "IsochroneBand",
    "IsochroneSet",
    "Origin",
    "Point2D",
    "SampleGrid",
    "correct_boundaries",
    "extract_bands",
    "generate_grid",
    "level_region",
    "normalize_breaks",
    "parse_breaks",
    "rasterize",
    "trace_rings",
]
