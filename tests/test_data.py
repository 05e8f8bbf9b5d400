"""Tests for data module."""

import json

import pytest

from spatial.data import VectorDataService, from_geodataframe, read_geojson, to_geodataframe, write_geojson
from spatial.exceptions import InvalidGeoJSONError
from spatial.helpers import feature_collection, point


@pytest.fixture
def cities():
    return feature_collection([
        point([2.35, 48.86], {"name": "Paris", "population": 2.1}),
        point([-0.13, 51.51], {"name": "London", "population": 8.9}),
    ])


def test_to_geodataframe(cities):
    """Test converting a FeatureCollection to a GeoDataFrame."""
    gdf = to_geodataframe(cities)

    assert len(gdf) == 2
    assert gdf.crs.to_epsg() == 4326
    assert list(gdf["name"]) == ["Paris", "London"]
    assert gdf.geometry.iloc[0].x == pytest.approx(2.35)


def test_to_geodataframe_empty():
    """Test an empty collection."""
    assert len(to_geodataframe(feature_collection([]))) == 0
    with pytest.raises(InvalidGeoJSONError):
        to_geodataframe(point([0, 0]))


def test_from_geodataframe(cities):
    """Test converting a GeoDataFrame back."""
    fc = from_geodataframe(to_geodataframe(cities))

    assert fc["type"] == "FeatureCollection"
    assert fc["features"][1]["properties"] == {"name": "London", "population": 8.9}
    assert fc["features"][1]["geometry"]["coordinates"] == pytest.approx([-0.13, 51.51])


def test_read_write(tmp_path, cities):
    """Test writing then reading a GeoJSON file."""
    path = write_geojson(cities, tmp_path / "cities.geojson")
    fc = read_geojson(path)

    assert fc == cities
    assert fc is not read_geojson(path)


def test_read_returns_copies(tmp_path, cities):
    """Test cached reads cannot be changed by callers."""
    service = VectorDataService()
    path = service.write(cities, tmp_path / "cities.json")
    service.read(path)["features"].clear()

    assert len(service.read(path)["features"]) == 2
    assert repr(service) == "VectorDataService(cached=1)"


def test_read_wraps_geometry(tmp_path):
    """Test a bare geometry file becomes a FeatureCollection."""
    path = tmp_path / "point.geojson"
    path.write_text(json.dumps({"type": "Point", "coordinates": [1, 2]}))
    fc = VectorDataService().read(path)

    assert len(fc["features"]) == 1
    assert fc["features"][0]["geometry"] == {"type": "Point", "coordinates": [1, 2]}


def test_read_missing_file(tmp_path):
    """Test a missing file."""
    with pytest.raises(FileNotFoundError):
        VectorDataService().read(tmp_path / "missing.geojson")


def test_write_rejects_features(tmp_path):
    """Test only FeatureCollections are written."""
    with pytest.raises(InvalidGeoJSONError):
        VectorDataService().write(point([0, 0]), tmp_path / "point.geojson")
