"""Tests for GeoJSON serialization and boundary schemas."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError
from shapely.geometry import Polygon, box

from osrm_isochrones.core.models import IsochroneBand, IsochroneSet
from osrm_isochrones.errors import InvalidBreaksError, IsochroneError
from osrm_isochrones.schemas import IsochroneRequest, TableResponse
from osrm_isochrones.serialization import band_to_feature, bands_from_geojson, bands_to_geojson


@pytest.fixture
def isochrones() -> IsochroneSet:
    inner = box(-1, -1, 1, 1)
    outer = Polygon(box(-2, -2, 2, 2).exterior.coords, [inner.exterior.coords[::-1]])
    return IsochroneSet(
        bands=[
            IsochroneBand(id=0, min=0, max=10, geometry=inner),
            IsochroneBand(id=1, min=10, max=20, geometry=outer),
        ],
        crs="EPSG:3857",
    )


class TestGeoJSON:
    """FeatureCollection output."""

    def test_feature_properties(self, isochrones) -> None:
        feature = band_to_feature(isochrones[1])
        assert feature["type"] == "Feature"
        assert feature["properties"] == {"id": 1, "min": 10, "max": 20, "center": 5}
        assert feature["geometry"]["type"] == "Polygon"
        assert len(feature["geometry"]["coordinates"]) == 2

    def test_collection(self, isochrones) -> None:
        data = bands_to_geojson(isochrones)
        assert data["type"] == "FeatureCollection"
        assert data["crs"]["properties"]["name"] == "EPSG:3857"
        assert [f["properties"]["id"] for f in data["features"]] == [0, 1]

    def test_json_serializable(self, isochrones) -> None:
        text = json.dumps(bands_to_geojson(isochrones))
        assert '"center": 5.0' in text

    def test_read_back(self, isochrones) -> None:
        data = json.loads(json.dumps(bands_to_geojson(isochrones)))
        restored = bands_from_geojson(data)
        assert restored.crs == "EPSG:3857"
        assert [(b.id, b.min, b.max) for b in restored] == [(0, 0, 10), (1, 10, 20)]
        assert restored[1].geometry.equals(isochrones[1].geometry)

    def test_read_without_crs_member(self) -> None:
        data = {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {"id": 0, "min": 0, "max": 5},
                    "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]},
                }
            ],
        }
        restored = bands_from_geojson(data)
        assert restored.crs == "EPSG:4326"
        assert restored[0].center == 2.5


class TestTableResponse:
    """OSRM table payload validation."""

    def test_parses_null_durations(self) -> None:
        table = TableResponse.model_validate(
            {
                "code": "Ok",
                "durations": [[0, None, 61.2]],
                "sources": [{"location": [5.9, 49.2], "name": "", "distance": 3.1}],
                "destinations": [{"location": [5.9, 49.2]}, {"location": [6, 49]}, {"location": [6.1, 49]}],
            }
        )
        assert table.ok
        assert table.durations == [[0.0, None, 61.2]]
        assert table.destinations[2].location == (6.1, 49.0)

    def test_error_response(self) -> None:
        table = TableResponse.model_validate({"code": "InvalidQuery", "message": "Query string malformed"})
        assert not table.ok
        assert table.durations is None

    def test_missing_code(self) -> None:
        with pytest.raises(ValidationError):
            TableResponse.model_validate({"durations": [[0]]})


class TestIsochroneRequest:
    """Request validation and cache keys."""

    def test_default_breaks(self) -> None:
        request = IsochroneRequest(lon=5.9, lat=49.2)
        assert request.breaks == [0, 10, 20, 30, 40, 50, 60]

    def test_breaks_normalized(self) -> None:
        assert IsochroneRequest(lon=0, lat=0, breaks=[20, 0, 0, 10]).breaks == [0, 10, 20]

    def test_invalid_breaks(self) -> None:
        with pytest.raises(ValidationError, match="distinct"):
            IsochroneRequest(lon=0, lat=0, breaks=[5])

    def test_for_origin_defaults(self) -> None:
        request = IsochroneRequest.for_origin(5.9, 49.2, crs="EPSG:4326", profile="foot")
        assert request.breaks == [0, 10, 20, 30, 40, 50, 60]
        assert request.profile == "foot"

    def test_for_origin_normalizes(self) -> None:
        assert IsochroneRequest.for_origin(0, 0, [20, 0, 0, 10]).breaks == [0, 10, 20]

    @pytest.mark.parametrize("breaks", [[5], [], [-10, 10], [0, float("nan")]])
    def test_for_origin_raises_typed_error(self, breaks: list[float]) -> None:
        with pytest.raises(InvalidBreaksError) as exc_info:
            IsochroneRequest.for_origin(5.9, 49.2, breaks)
        assert isinstance(exc_info.value, IsochroneError)

    def test_cache_key(self) -> None:
        request = IsochroneRequest(lon=5.936036, lat=49.24882, breaks=[0, 7.5, 15], profile="bike")
        assert request.cache_key() == "5.936036_49.248820_EPSG4326_bike_0-7.5-15"

    def test_cache_key_ignores_break_order(self) -> None:
        a = IsochroneRequest(lon=1, lat=2, breaks=[0, 10, 20])
        b = IsochroneRequest(lon=1, lat=2, breaks=[20, 10, 0, 0])
        assert a.cache_key() == b.cache_key()
