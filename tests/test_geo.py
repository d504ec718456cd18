"""Tests for reprojection helpers and origin adapters."""

from __future__ import annotations

import numpy as np
import pytest
from shapely.geometry import Point, Polygon

from osrm_isochrones.core.models import GEOGRAPHIC_CRS, PROJECTED_CRS, Origin, Point2D
from osrm_isochrones.errors import InvalidOriginError, IsochroneError, ReprojectionError
from osrm_isochrones.geo import as_origin, reproject, reproject_point, reproject_points, resolve_crs

# =============================================================================
# Projection
# =============================================================================


class TestReproject:
    """pyproj-backed transforms, always in (x, y) axis order."""

    def test_point_to_web_mercator(self) -> None:
        p = reproject_point(Point2D(0, 0), GEOGRAPHIC_CRS, PROJECTED_CRS)
        assert p.x == pytest.approx(0, abs=1e-6)
        assert p.y == pytest.approx(0, abs=1e-6)

    def test_longitude_first(self) -> None:
        p = reproject_point(Point2D(10, 0), GEOGRAPHIC_CRS, PROJECTED_CRS)
        assert p.x == pytest.approx(1_113_194.9, abs=0.1)
        assert p.y == pytest.approx(0, abs=1e-6)

    def test_points_array(self) -> None:
        xy = reproject_points(np.array([[0, 0], [10, 0]]), GEOGRAPHIC_CRS, PROJECTED_CRS)
        assert xy.shape == (2, 2)
        assert xy[1, 0] == pytest.approx(1_113_194.9, abs=0.1)

    def test_polygon_round_trip(self) -> None:
        poly = Polygon([(5.9, 49.2), (6.0, 49.2), (6.0, 49.3), (5.9, 49.3)])
        there = reproject(poly, GEOGRAPHIC_CRS, PROJECTED_CRS)
        back = reproject(there, PROJECTED_CRS, GEOGRAPHIC_CRS)

        assert len(back.exterior.coords) == len(poly.exterior.coords)
        for a, b in zip(back.exterior.coords, poly.exterior.coords, strict=True):
            assert a == pytest.approx(b, abs=1e-9)

    def test_input_not_modified(self) -> None:
        poly = Polygon([(5.9, 49.2), (6.0, 49.2), (6.0, 49.3)])
        reproject(poly, GEOGRAPHIC_CRS, PROJECTED_CRS)
        assert poly.bounds == (5.9, 49.2, 6.0, 49.3)

    def test_empty_geometry(self) -> None:
        assert reproject(Polygon(), GEOGRAPHIC_CRS, PROJECTED_CRS).is_empty

    def test_unknown_crs(self) -> None:
        with pytest.raises(ReprojectionError, match="EPSG:999999"):
            reproject(Point(0, 0), GEOGRAPHIC_CRS, "EPSG:999999")

    def test_garbage_crs(self) -> None:
        with pytest.raises(ReprojectionError):
            resolve_crs("not a crs")

    def test_integer_crs(self) -> None:
        assert resolve_crs(3857).to_epsg() == 3857


# =============================================================================
# Origin adapters
# =============================================================================


class TestAsOrigin:
    """Accepted origin shapes."""

    def test_pair(self) -> None:
        origin = as_origin((5.936036, 49.24882))
        assert origin == Origin(Point2D(5.936036, 49.24882))
        assert origin.source_crs == GEOGRAPHIC_CRS

    def test_list_with_crs(self) -> None:
        origin = as_origin([660_000, 6_320_000], crs=PROJECTED_CRS)
        assert origin.point == Point2D(660_000, 6_320_000)
        assert origin.source_crs == PROJECTED_CRS

    def test_point2d(self) -> None:
        assert as_origin(Point2D(1, 2)).point == Point2D(1, 2)

    def test_origin_retagged(self) -> None:
        origin = as_origin(Origin(Point2D(1, 2), "EPSG:2154"), crs=PROJECTED_CRS)
        assert origin.crs == PROJECTED_CRS

    def test_origin_keeps_crs(self) -> None:
        assert as_origin(Origin(Point2D(1, 2), "EPSG:2154")).crs == "EPSG:2154"

    def test_shapely_point(self) -> None:
        assert as_origin(Point(5.9, 49.2)).point == Point2D(5.9, 49.2)

    def test_geojson_feature(self) -> None:
        feature = {
            "type": "Feature",
            "properties": {"name": "Metz"},
            "geometry": {"type": "Point", "coordinates": [6.17, 49.12]},
        }
        assert as_origin(feature).point == Point2D(6.17, 49.12)

    def test_feature_collection_uses_first_feature(self) -> None:
        collection = {
            "type": "FeatureCollection",
            "crs": {"type": "name", "properties": {"name": "EPSG:3857"}},
            "features": [
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}},
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [3, 4]}},
            ],
        }
        origin = as_origin(collection)
        assert origin.point == Point2D(1, 2)
        assert origin.crs == "EPSG:3857"

    def test_explicit_crs_beats_crs_member(self) -> None:
        geom = {"type": "Point", "coordinates": [1, 2], "crs": "EPSG:3857"}
        assert as_origin(geom, crs="EPSG:2154").crs == "EPSG:2154"

    def test_geo_interface(self) -> None:
        class Site:
            __geo_interface__ = {"type": "Point", "coordinates": [7.0, 48.0, 120.0]}

        assert as_origin(Site()).point == Point2D(7.0, 48.0)

    def test_empty_collection(self) -> None:
        with pytest.raises(InvalidOriginError, match="no features"):
            as_origin({"type": "FeatureCollection", "features": []})

    def test_non_point_geometry(self) -> None:
        with pytest.raises(InvalidOriginError, match="LineString"):
            as_origin({"type": "LineString", "coordinates": [[0, 0], [1, 1]]})

    @pytest.mark.parametrize(
        "bad",
        [
            "6.17,49.12",
            (1, 2, 3),
            ("east", "north"),
            {"type": "Point", "coordinates": [6.17]},
            {"type": "Point", "coordinates": ["x", 49]},
            42,
            None,
        ],
    )
    def test_rejected(self, bad: object) -> None:
        with pytest.raises(InvalidOriginError) as exc_info:
            as_origin(bad)
        assert isinstance(exc_info.value, IsochroneError)
        assert isinstance(exc_info.value, ValueError)
