"""Tests for helpers, invariant and meta modules."""

import pytest

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import (
    feature,
    feature_collection,
    geometry,
    line_string,
    multi_polygon,
    point,
    polygon,
    round_,
    is_number,
    validate_bbox,
)
from spatial.invariant import collection_of, get_coord, get_coords, get_geom, get_type
from spatial.meta import coord_all, coord_each, flatten_each, geom_each, segment_each, segment_reduce


def test_point_builds_feature():
    """Test point constructor."""
    pt = point([5, 10], {"name": "a"}, id=1)

    assert pt["type"] == "Feature"
    assert pt["id"] == 1
    assert pt["geometry"] == {"type": "Point", "coordinates": [5, 10]}
    assert pt["properties"] == {"name": "a"}


def test_feature_defaults_properties():
    """Test that missing properties become an empty dict."""
    assert feature({"type": "Point", "coordinates": [0, 0]})["properties"] == {}


def test_point_rejects_bad_coordinates():
    """Test point validation."""
    with pytest.raises(InvalidGeoJSONError):
        point([1])
    with pytest.raises(InvalidGeoJSONError):
        point(["a", "b"])


def test_line_string_needs_two_positions():
    """Test line_string validation."""
    with pytest.raises(InvalidGeoJSONError):
        line_string([[0, 0]])
    with pytest.raises(InvalidGeoJSONError):
        line_string([[0], [1, 1]])


def test_polygon_ring_validation():
    """Test polygon ring checks."""
    with pytest.raises(InvalidGeoJSONError, match="4 or more"):
        polygon([[[0, 0], [1, 1], [0, 0]]])
    with pytest.raises(InvalidGeoJSONError, match="not equivalent"):
        polygon([[[0, 0], [1, 0], [1, 1], [0, 1]]])


def test_geometry_rejects_unknown_type():
    """Test geometry type check."""
    assert geometry("Point", [1, 2]) == {"type": "Point", "coordinates": [1, 2]}
    with pytest.raises(InvalidGeoJSONError):
        geometry("Circle", [1, 2])


def test_feature_collection_with_bbox():
    """Test feature collection bbox validation."""
    fc = feature_collection([point([0, 0])], bbox=[0, 0, 1, 1])
    assert fc["bbox"] == [0, 0, 1, 1]
    with pytest.raises(InvalidArgumentError):
        feature_collection([], bbox=[0, 0, 1])


def test_round_half_away_from_zero():
    """Test rounding."""
    assert round_(2.5) == 3
    assert round_(-2.5) == -3
    assert round_(120.4321, 2) == pytest.approx(120.43)
    with pytest.raises(InvalidArgumentError):
        round_(1.0, -1)


def test_is_number():
    """Test number detection."""
    assert is_number(1)
    assert is_number(1.5)
    assert not is_number(True)
    assert not is_number("1")
    assert not is_number(float("nan"))


def test_validate_bbox():
    """Test bbox validation."""
    validate_bbox([0, 0, 1, 1])
    validate_bbox([0, 0, 0, 1, 1, 1])
    with pytest.raises(InvalidArgumentError):
        validate_bbox([0, 0, "a", 1])


def test_get_coord_accepts_all_forms():
    """Test coordinate unwrapping."""
    assert get_coord([1, 2]) == [1, 2]
    assert get_coord({"type": "Point", "coordinates": [1, 2]}) == [1, 2]
    assert get_coord(point([1, 2])) == [1, 2]
    with pytest.raises(InvalidGeoJSONError):
        get_coord(line_string([[0, 0], [1, 1]]))


def test_get_coords_and_geom(unit_square):
    """Test geometry unwrapping."""
    assert get_coords(unit_square)[0][0] == [0, 0]
    assert get_geom(unit_square)["type"] == "Polygon"
    assert get_type(unit_square) == "Polygon"
    assert get_type(feature_collection([])) == "FeatureCollection"


def test_collection_of_rejects_other_types(unit_square):
    """Test collection type enforcement."""
    collection_of(feature_collection([point([0, 0])]), "Point", "test")
    with pytest.raises(InvalidGeoJSONError, match="must be a Point"):
        collection_of(feature_collection([unit_square]), "Point", "test")


def test_coord_each_excludes_wrap(unit_square):
    """Test coordinate iteration."""
    assert len(coord_all(unit_square)) == 5
    assert len(list(coord_each(unit_square, exclude_wrap_coord=True))) == 4


def test_geom_each_expands_collections():
    """Test geometry iteration over a GeometryCollection."""
    collection = {
        "type": "GeometryCollection",
        "geometries": [
            {"type": "Point", "coordinates": [0, 0]},
            {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
        ],
    }
    types = [geom["type"] for geom, _, _ in geom_each(collection)]
    assert types == ["Point", "LineString"]


def test_flatten_each_splits_multi_geometries():
    """Test flattening keeps the owner properties."""
    square = [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]
    multi = multi_polygon([square, square], {"id": 7})
    parts = list(flatten_each(multi))

    assert len(parts) == 2
    assert all(p["geometry"]["type"] == "Polygon" for p in parts)
    assert all(p["properties"] == {"id": 7} for p in parts)


def test_segment_each_and_reduce(simple_line, unit_square):
    """Test segment iteration."""
    assert len(list(segment_each(simple_line))) == 2
    assert len(list(segment_each(unit_square))) == 4
    assert segment_reduce(unit_square, lambda total, _: total + 1, 0) == 4
