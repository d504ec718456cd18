"""
End-to-end isochrone computation.

    GenerateGrid -> SampleCosts -> Rasterize -> ExtractBands
                 -> CorrectBoundaries -> Reproject

Strictly linear: every stage consumes its whole input before the next one
runs, and the first failing stage aborts the call with a typed error.
Nothing is shared between calls apart from the sampler passed in.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from typing import Any

from osrm_isochrones.core.bands import correct_boundaries, extract_bands
from osrm_isochrones.core.breaks import normalize_breaks
from osrm_isochrones.core.grid import generate_grid
from osrm_isochrones.core.models import (
    DEFAULT_BREAKS,
    DEFAULT_RESOLUTION,
    DEFAULT_SPEED_KMH,
    GEOGRAPHIC_CRS,
    PROJECTED_CRS,
    CostSample,
    CostSampler,
    IsochroneBand,
    IsochroneSet,
    Origin,
    Point2D,
    speed_m_per_min,
)
from osrm_isochrones.core.raster import rasterize
from osrm_isochrones.errors import SamplerFailureError
from osrm_isochrones.geo.adapters import as_origin
from osrm_isochrones.geo.projection import (
    reproject,
    reproject_point,
    reproject_points,
    resolve_crs,
)

logger = logging.getLogger(__name__)


def sampling_radius(breaks: Iterable[float], speed_kmh: float = DEFAULT_SPEED_KMH) -> float:
    """Half-width of the sampling grid in meters: max break times speed."""
    return max(breaks) * speed_m_per_min(speed_kmh)


def _reproject_bands(
    bands: list[IsochroneBand], source_crs: str, target_crs: str
) -> list[IsochroneBand]:
    return [
        dataclasses.replace(
            band,
            geometry=reproject(band.geometry, source_crs, target_crs),
            reachable=None,
        )
        for band in bands
    ]


def compute_isochrones(
    origin: Origin | Any,
    breaks: Iterable[float] = DEFAULT_BREAKS,
    *,
    sampler: CostSampler,
    speed_kmh: float = DEFAULT_SPEED_KMH,
    resolution: int = DEFAULT_RESOLUTION,
    target_crs: str | None = None,
) -> IsochroneSet:
    """
    Compute travel-time bands around ``origin``.

    Args:
        origin: Origin, or anything :func:`~osrm_isochrones.geo.as_origin`
            accepts (a ``(lon, lat)`` pair, shapely Point, GeoJSON Point...).
        breaks: Travel-time thresholds in minutes.
        sampler: Cost sampler answering origin -> destinations travel times.
        speed_kmh: Assumed top average speed; bounds the sampled area.
        resolution: Grid points per side.
        target_crs: CRS of the returned geometries. Defaults to the
            origin's CRS, else EPSG:4326.

    Returns:
        IsochroneSet ordered innermost first.

    Raises:
        InvalidBreaksError: Before any sampling, if breaks are unusable.
        InvalidOriginError: If ``origin`` cannot be read as a single point.
        InvalidGridError: If the grid parameters are out of range.
        SamplerFailureError: If the sampler fails or answers inconsistently.
        NoReachableAreaError: If nothing sampled is reachable.
        ReprojectionError: If a CRS cannot be resolved.
    """
    levels = normalize_breaks(breaks)
    origin = as_origin(origin)
    output_crs = target_crs or origin.source_crs
    # Fail on an unusable output CRS before spending any routing requests.
    resolve_crs(output_crs)

    # GenerateGrid
    center = reproject_point(origin.point, origin.source_crs, PROJECTED_CRS)
    dmax = sampling_radius(levels, speed_kmh)
    grid = generate_grid(center, dmax, resolution)
    logger.info(
        "Isochrones around (%.6f, %.6f) for breaks %s: %d sample points, radius %.0f m",
        origin.point.x,
        origin.point.y,
        levels,
        len(grid),
        dmax,
    )

    # SampleCosts
    origin_geo = reproject_point(origin.point, origin.source_crs, GEOGRAPHIC_CRS)
    destinations_geo = reproject_points(grid.points, PROJECTED_CRS, GEOGRAPHIC_CRS)
    result = sampler.query_costs(origin_geo, [Point2D(float(x), float(y)) for x, y in destinations_geo])
    if not result.costs:
        msg = "Cost sampler returned an empty result"
        raise SamplerFailureError(msg)
    if len(result.locations) != len(result.costs):
        msg = f"Cost sampler echoed {len(result.locations)} locations for {len(result.costs)} costs"
        raise SamplerFailureError(msg)

    # Rasterize
    locations = reproject_points(result.locations, GEOGRAPHIC_CRS, PROJECTED_CRS)
    raster = rasterize(grid, CostSample(locations=locations, costs=result.costs))

    # ExtractBands + CorrectBoundaries
    bands = correct_boundaries(extract_bands(raster, levels))
    logger.info("Extracted %d isochrone bands", len(bands))

    # Reproject
    return IsochroneSet(bands=_reproject_bands(bands, PROJECTED_CRS, output_crs), crs=output_crs)
