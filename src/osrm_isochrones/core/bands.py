"""
Band classification, contour extraction and boundary correction.

``extract_bands`` stacks the contour regions of consecutive breaks into raw
pieces, outermost first::

    [ remainder above last break, (b[n-1], b[n]], ..., (b[0], b[1]] ]

``correct_boundaries`` then drops the remainder (it only describes the
sampling frame, not a travel time) and turns the innermost hollow piece into
the full "reachable within b[1]" area with ``min = 0``. The result is
returned innermost first with ``id`` equal to the list position.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from shapely.geometry import box
from shapely.geometry.polygon import orient

from osrm_isochrones.core.breaks import normalize_breaks
from osrm_isochrones.core.contours import level_region, polygonal
from osrm_isochrones.core.models import IsochroneBand
from osrm_isochrones.errors import NoReachableAreaError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shapely.geometry.base import BaseGeometry

    from osrm_isochrones.core.models import CostRaster

logger = logging.getLogger(__name__)


def _oriented(geom: BaseGeometry) -> BaseGeometry:
    """Counter-clockwise shells, clockwise holes (RFC 7946 winding)."""
    geom = polygonal(geom)
    if geom.is_empty:
        return geom
    if geom.geom_type == "Polygon":
        return orient(geom, sign=1.0)
    return type(geom)([orient(p, sign=1.0) for p in geom.geoms])


def extract_bands(raster: CostRaster, breaks: Iterable[float]) -> list[IsochroneBand]:
    """
    Contour ``raster`` at every break and cut the regions into raw bands.

    The first entry is always the part of the raster extent with cost above
    the last break (possibly empty). Every other entry is one non-empty
    interval ``(lo, hi]``, outermost first; empty intervals are skipped,
    except the innermost one while anything at all lies within ``b[1]``.

    Args:
        raster: Cost raster in projected coordinates.
        breaks: Travel-time thresholds in minutes.

    Returns:
        Raw bands, ids in emission order. Feed to :func:`correct_boundaries`.

    Raises:
        InvalidBreaksError: If fewer than 2 distinct non-negative breaks.
        NoReachableAreaError: If no raster cell received a sample.
    """
    levels = normalize_breaks(breaks)
    if not raster.sampled.any():
        msg = "Cost raster holds no sampled cell; nothing is reachable"
        raise NoReachableAreaError(msg)

    regions = {level: level_region(raster, level) for level in levels}
    extent = box(*raster.bounds)
    top = max(levels[-1], float(raster.values.max()))

    raw: list[IsochroneBand] = [
        IsochroneBand(
            id=0,
            min=levels[-1],
            max=top,
            geometry=_oriented(extent.difference(regions[levels[-1]])),
            reachable=extent,
        )
    ]
    for lo, hi in reversed(list(zip(levels, levels[1:], strict=False))):
        piece = _oriented(regions[hi].difference(regions[lo]))
        # The innermost piece is filled in later, so only its outer region matters.
        innermost = lo == levels[0]
        if piece.is_empty and (not innermost or regions[hi].is_empty):
            logger.debug("Band (%g, %g] is empty, skipping", lo, hi)
            continue
        raw.append(
            IsochroneBand(id=len(raw), min=lo, max=hi, geometry=piece, reachable=regions[hi])
        )

    logger.debug("Extracted %d raw bands for breaks %s", len(raw), levels)
    return raw


def correct_boundaries(raw: list[IsochroneBand]) -> list[IsochroneBand]:
    """
    Fix the two boundary pieces of :func:`extract_bands` output.

    Drops the first piece (the remainder beyond the last break), forces the
    last (innermost) piece's ``min`` to 0 and gives it its whole reachable
    area, then reorders innermost first and renumbers ``id``. Intermediate
    bands pass through unchanged. Inputs are not mutated.

    Raises:
        NoReachableAreaError: If no band remains once the remainder is dropped.
    """
    bands = list(raw[1:])
    if not bands:
        msg = "No area is reachable within the largest break"
        raise NoReachableAreaError(msg)

    innermost = bands[-1]
    filled = innermost.reachable if innermost.reachable is not None else innermost.geometry
    bands[-1] = dataclasses.replace(innermost, min=0.0, geometry=_oriented(filled))

    return [dataclasses.replace(band, id=k) for k, band in enumerate(reversed(bands))]
