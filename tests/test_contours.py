"""Tests for marching-squares ring tracing and level regions."""

from __future__ import annotations

import numpy as np
import pytest
from shapely.geometry import GeometryCollection, LineString, Point, Polygon

from osrm_isochrones.core.contours import level_region, polygonal, trace_rings


def plateau(size: int = 5, low: float = 5, high: float = 20) -> np.ndarray:
    """``high`` everywhere except a centered 3x3 block of ``low``."""
    values = np.full((size, size), high, dtype=float)
    c = size // 2
    values[c - 1 : c + 2, c - 1 : c + 2] = low
    return values


class TestTraceRings:
    """Ring tracing on small hand-checked rasters."""

    def test_uniform_outside_has_no_rings(self) -> None:
        assert trace_rings(np.full((4, 4), 10.0), 5) == []

    def test_uniform_inside_closes_on_border(self) -> None:
        """Padding closes a fully inside raster along its outer cell centers."""
        rings = trace_rings(np.zeros((3, 3)), 5)
        assert len(rings) == 1
        xs = [x for x, _ in rings[0]]
        ys = [y for _, y in rings[0]]
        assert min(xs) == pytest.approx(0) and max(xs) == pytest.approx(2)
        assert min(ys) == pytest.approx(0) and max(ys) == pytest.approx(2)

    def test_interpolation(self) -> None:
        values = np.array([[0.0, 10.0]])
        ring = trace_rings(values, 2.5)[0]
        # Crossing between the two cells sits a quarter of the way along.
        assert max(x for x, _ in ring) == pytest.approx(0.25)

    def test_saddle_connected(self) -> None:
        """Cell mean at the level joins the diagonal inside corners."""
        values = np.array([[0.0, 20.0], [20.0, 0.0]])
        assert len(trace_rings(values, 10)) == 1

    def test_saddle_separated(self) -> None:
        values = np.array([[0.0, 20.0], [20.0, 0.0]])
        assert len(trace_rings(values, 9.99)) == 2

    def test_checkerboard_does_not_fail(self) -> None:
        values = np.indices((6, 6)).sum(axis=0) % 2 * 10.0
        rings = trace_rings(values, 5)
        assert rings
        assert all(len(r) >= 4 for r in rings)


class TestLevelRegion:
    """Regions assembled from rings in world coordinates."""

    def test_plateau_area(self, make_raster) -> None:
        region = level_region(make_raster(plateau()), 5)
        assert region.area == pytest.approx(4.0)
        assert region.bounds == pytest.approx((1, 1, 3, 3))

    def test_equal_value_is_inside(self, make_raster) -> None:
        raster = make_raster(plateau())
        assert not level_region(raster, 5).is_empty
        assert level_region(raster, 4.9).is_empty

    def test_world_coordinates(self, make_raster) -> None:
        raster = make_raster(plateau(), step=10.0)
        raster.x0, raster.y0 = 1000.0, 2000.0
        region = level_region(raster, 5)
        assert region.bounds == pytest.approx((1010, 2010, 1030, 2030))
        assert region.area == pytest.approx(400.0)

    def test_nested_ring_becomes_hole(self, make_raster) -> None:
        """A ring of cheap cells around an expensive core yields an annulus."""
        values = np.full((7, 7), 20.0)
        j, i = np.indices(values.shape)
        values[np.maximum(abs(i - 3), abs(j - 3)) == 2] = 0.0

        region = level_region(make_raster(values), 10)
        assert region.geom_type == "Polygon"
        assert len(region.interiors) == 1
        # 5x5 outer square and 3x3 hole, both with chamfered corners.
        assert region.area == pytest.approx(16.0)
        assert not region.contains(Point(3, 3))
        assert region.contains(Point(1, 3))

    def test_two_islands(self, make_raster) -> None:
        values = np.full((5, 9), 20.0)
        values[2, 2] = values[2, 6] = 0.0
        region = level_region(make_raster(values), 10)
        assert region.geom_type == "MultiPolygon"
        assert len(region.geoms) == 2

    def test_result_is_valid(self, make_raster) -> None:
        rng = np.random.default_rng(7)
        region = level_region(make_raster(rng.uniform(0, 30, size=(12, 12))), 15)
        assert region.is_valid
        assert region.geom_type in ("Polygon", "MultiPolygon")


class TestPolygonal:
    """Only areal parts survive."""

    def test_polygon_passes_through(self) -> None:
        poly = Polygon([(0, 0), (1, 0), (1, 1)])
        assert polygonal(poly) is poly

    def test_line_becomes_empty(self) -> None:
        assert polygonal(LineString([(0, 0), (1, 1)])).is_empty

    def test_collection_keeps_polygons(self) -> None:
        poly = Polygon([(0, 0), (1, 0), (1, 1)])
        result = polygonal(GeometryCollection([poly, LineString([(2, 2), (3, 3)])]))
        assert result.equals(poly)
