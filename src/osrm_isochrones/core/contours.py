"""
Marching-squares contouring of a cost raster into closed rings and regions.

A cell value ``<= level`` counts as inside. The raster is padded with
``+inf`` before tracing, so every contour closes on or inside the outermost
row of cell centers and no ring is ever left open at the raster edge.

Segments are chained by the identity of the grid edge they cross rather
than by their coordinates: each crossed edge is shared by exactly two
cells, so every crossing has exactly two neighbours and chains are rings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from shapely import make_valid
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon
from shapely.ops import unary_union

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

    from osrm_isochrones.core.models import CostRaster

logger = logging.getLogger(__name__)

# ("h", j, i) joins node (j, i) to (j, i + 1); ("v", j, i) joins (j, i) to (j + 1, i).
Edge = tuple[str, int, int]
Ring = list[tuple[float, float]]

MIN_RING_POINTS = 3


def _cell_segments(
    j: int, i: int, corners: tuple[float, float, float, float], level: float
) -> list[tuple[Edge, Edge]]:
    """Segments crossing cell (j, i), as pairs of crossed edges.

    Corners run counter-clockwise from the lower left:
    (j, i), (j, i + 1), (j + 1, i + 1), (j + 1, i).
    """
    inside = [v <= level for v in corners]
    if all(inside) or not any(inside):
        return []

    bottom: Edge = ("h", j, i)
    right: Edge = ("v", j, i + 1)
    top: Edge = ("h", j + 1, i)
    left: Edge = ("v", j, i)
    # Edges meeting at each corner, same order as ``corners``.
    corner_edges = ((bottom, left), (bottom, right), (right, top), (top, left))
    sides = (
        (bottom, inside[0], inside[1]),
        (right, inside[1], inside[2]),
        (top, inside[3], inside[2]),
        (left, inside[0], inside[3]),
    )
    crossed = [edge for edge, a, b in sides if a != b]

    if len(crossed) == 2:
        return [(crossed[0], crossed[1])]

    # Saddle: the mean of the corners decides which diagonal is connected.
    center_inside = sum(corners) / 4 <= level
    return [corner_edges[k] for k in range(4) if inside[k] != center_inside]


def _crossing(values: list[list[float]], edge: Edge, level: float) -> tuple[float, float]:
    """Interpolated point where ``level`` crosses ``edge``, in (x, y) index space."""
    kind, j, i = edge
    if kind == "h":
        a, b = (i, j), (i + 1, j)
        va, vb = values[j][i], values[j][i + 1]
    else:
        a, b = (i, j), (i, j + 1)
        va, vb = values[j][i], values[j + 1][i]

    # Interpolate from the inside end; an infinite outside end yields t == 0.
    if va <= level:
        p_in, p_out, v_in, v_out = a, b, va, vb
    else:
        p_in, p_out, v_in, v_out = b, a, vb, va
    t = (level - v_in) / (v_out - v_in)
    return (p_in[0] + (p_out[0] - p_in[0]) * t, p_in[1] + (p_out[1] - p_in[1]) * t)


def trace_rings(values: np.ndarray, level: float) -> list[Ring]:
    """
    Trace the closed contour rings of ``values`` at ``level``.

    Args:
        values: 2D array, ``values[row, col]``; row 0 is the bottom row.
        level: Contour level. Cells ``<= level`` are inside.

    Returns:
        Rings as lists of ``(x, y)`` in column/row index space of ``values``.
        Rings are not explicitly closed (first point is not repeated).
    """
    padded: list[list[float]] = np.pad(
        np.asarray(values, dtype=float), 1, constant_values=np.inf
    ).tolist()
    rows = len(padded)
    cols = len(padded[0])

    adjacency: dict[Edge, list[Edge]] = {}
    for j in range(rows - 1):
        row0 = padded[j]
        row1 = padded[j + 1]
        for i in range(cols - 1):
            corners = (row0[i], row0[i + 1], row1[i + 1], row1[i])
            for a, b in _cell_segments(j, i, corners, level):
                adjacency.setdefault(a, []).append(b)
                adjacency.setdefault(b, []).append(a)

    rings: list[Ring] = []
    visited: set[Edge] = set()
    for start in adjacency:
        if start in visited:
            continue
        chain = [start]
        visited.add(start)
        prev, cur = start, adjacency[start][0]
        while cur != start:
            chain.append(cur)
            visited.add(cur)
            first, second = adjacency[cur]
            prev, cur = cur, (second if first == prev else first)
        # Shift back from padded to original index space.
        rings.append(
            [(x - 1, y - 1) for x, y in (_crossing(padded, e, level) for e in chain)]
        )
    return rings


def polygonal(geom: BaseGeometry) -> BaseGeometry:
    """Keep only the areal parts of ``geom`` (drops slivers collapsed to lines/points)."""
    if geom.is_empty:
        return Polygon()
    if isinstance(geom, (Polygon, MultiPolygon)):
        return geom
    if isinstance(geom, GeometryCollection):
        parts = [g for g in geom.geoms if isinstance(g, (Polygon, MultiPolygon)) and not g.is_empty]
        if parts:
            return unary_union(parts)
    return Polygon()


def level_region(raster: CostRaster, level: float) -> BaseGeometry:
    """
    Area of the raster where cost is at most ``level``, in raster coordinates.

    Rings are combined by the even-odd rule, so a ring nested inside another
    becomes a hole and a ring inside that hole an island again.
    """
    region: BaseGeometry = Polygon()
    rings = trace_rings(raster.values, level)
    for ring in rings:
        if len(ring) < MIN_RING_POINTS:
            continue
        coords = [(raster.x0 + x * raster.step, raster.y0 + y * raster.step) for x, y in ring]
        piece = polygonal(make_valid(Polygon(coords)))
        if piece.is_empty:
            continue
        region = polygonal(region.symmetric_difference(piece))

    logger.debug("Level %g: %d rings, area %.0f", level, len(rings), region.area)
    return region
