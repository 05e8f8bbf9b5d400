"""Tests for measurement module."""

import pytest

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import feature_collection, line_string, point, polygon
from spatial.measurement import (
    along,
    area,
    bbox,
    bbox_polygon,
    bearing,
    center,
    center_mean,
    center_median,
    center_of_mass,
    centroid,
    destination,
    distance,
    envelope,
    great_circle,
    length,
    line_slice,
    line_slice_along,
    midpoint,
    nearest_point,
    nearest_point_on_line,
    nearest_point_to_line,
    planepoint,
    point_on_feature,
    point_to_line_distance,
    polygon_tangents,
    rhumb_bearing,
    rhumb_destination,
    rhumb_distance,
    square,
    standard_deviational_ellipse,
    to_mercator,
    to_wgs84,
)

# One degree of arc on the mean Earth radius
DEGREE_KM = 111.19508


def coords_of(feat):
    return feat["geometry"]["coordinates"]


def test_distance():
    """Test haversine distance."""
    assert distance([0, 0], [0, 1]) == pytest.approx(DEGREE_KM, rel=1e-5)
    assert distance(point([0, 0]), point([0, 1]), "meters") == pytest.approx(DEGREE_KM * 1000, rel=1e-5)
    assert distance([0, 0], [0, 0]) == 0


def test_bearing():
    """Test initial and final bearings."""
    assert bearing([0, 0], [0, 1]) == pytest.approx(0)
    assert bearing([0, 0], [1, 0]) == pytest.approx(90)
    assert bearing([0, 0], [-1, 0]) == pytest.approx(-90)
    assert bearing([0, 0], [1, 0], final=True) == pytest.approx(90)


def test_destination():
    """Test point reached along a bearing."""
    dest = destination([0, 0], DEGREE_KM, 90, properties={"a": 1})

    assert coords_of(dest) == pytest.approx([1, 0], abs=1e-6)
    assert dest["properties"] == {"a": 1}


def test_midpoint():
    """Test midpoint on the equator."""
    assert coords_of(midpoint([0, 0], [2, 0])) == pytest.approx([1, 0], abs=1e-6)


def test_rhumb_distance_and_bearing():
    """Test rhumb line measurements."""
    assert rhumb_distance([0, 0], [1, 0]) == pytest.approx(DEGREE_KM, rel=1e-5)
    assert rhumb_bearing([0, 0], [-1, 0]) == pytest.approx(-90)
    assert rhumb_bearing([0, 0], [0, 1]) == pytest.approx(0)


def test_rhumb_across_antimeridian():
    """Test the shorter rhumb line across the antimeridian."""
    assert rhumb_distance([179.5, 0], [-179.5, 0]) == pytest.approx(DEGREE_KM, rel=1e-5)
    assert rhumb_bearing([179.5, 0], [-179.5, 0]) == pytest.approx(90)
    assert rhumb_bearing([-179.5, 0], [179.5, 0]) == pytest.approx(-90)


def test_rhumb_destination():
    """Test rhumb destination, including across the antimeridian."""
    assert coords_of(rhumb_destination([0, 0], DEGREE_KM, 90)) == pytest.approx([1, 0], abs=1e-6)
    crossed = coords_of(rhumb_destination([179.5, 0], DEGREE_KM, 90))
    assert crossed[0] == pytest.approx(180.5, abs=1e-6)


def test_mercator_projection():
    """Test Web Mercator round trip."""
    assert to_mercator([0, 0]) == pytest.approx([0, 0], abs=1e-6)
    assert to_mercator([180, 0])[0] == pytest.approx(20037508.34, rel=1e-6)
    assert to_wgs84(to_mercator([10, 20])) == pytest.approx([10, 20], abs=1e-6)


def test_mercator_keeps_input(unit_square):
    """Test projecting a feature works on a copy."""
    projected = to_mercator(unit_square)

    assert coords_of(unit_square)[0][1] == [1, 0]
    assert coords_of(projected)[0][1][0] == pytest.approx(111319.49, rel=1e-5)


def test_length(simple_line, unit_square):
    """Test line length."""
    assert length(simple_line) == pytest.approx(2 * DEGREE_KM, rel=1e-4)
    assert length(unit_square) == pytest.approx(4 * DEGREE_KM, rel=1e-3)


def test_along(simple_line):
    """Test point at a distance along a line."""
    assert coords_of(along(simple_line, DEGREE_KM / 2)) == pytest.approx([0.5, 0], abs=1e-6)
    assert coords_of(along(simple_line, 0)) == [0, 0]
    assert coords_of(along(simple_line, 10000)) == [1, 1]


def test_line_slice_along(simple_line):
    """Test slicing a line by distances."""
    sliced = coords_of(line_slice_along(simple_line, 0, DEGREE_KM / 2))

    assert sliced[0] == [0, 0]
    assert sliced[-1] == pytest.approx([0.5, 0], abs=1e-6)
    with pytest.raises(InvalidArgumentError):
        line_slice_along(simple_line, 1000, 2000)


def test_line_slice(simple_line):
    """Test slicing a line between two points."""
    sliced = line_slice([0.2, 0.1], [1.1, 0.5], simple_line)
    coords = coords_of(sliced)

    assert coords[0] == pytest.approx([0.2, 0], abs=1e-9)
    assert coords[1] == [1, 0]
    assert coords[-1] == pytest.approx([1, 0.5], abs=1e-9)
    assert sliced["properties"] == {"name": "route"}


def test_area(unit_square):
    """Test geodesic area."""
    assert area(unit_square) == pytest.approx(1.2309e10, rel=1e-2)
    assert area(line_string([[0, 0], [1, 1]])) == 0


def test_area_subtracts_holes():
    """Test polygon holes reduce the area."""
    outer = [[0, 0], [2, 0], [2, 2], [0, 2], [0, 0]]
    hole = [[0.5, 0.5], [0.5, 1.5], [1.5, 1.5], [1.5, 0.5], [0.5, 0.5]]
    full = area(polygon([outer]))
    holed = area(polygon([outer, hole]))

    assert holed == pytest.approx(full * 0.75, rel=1e-2)


def test_bbox_and_polygon(simple_line):
    """Test bounding boxes."""
    assert bbox(simple_line) == [0, 0, 1, 1]
    ring = coords_of(bbox_polygon([0, 0, 1, 1]))[0]
    assert ring == [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]
    with pytest.raises(InvalidArgumentError):
        bbox_polygon([0, 0, 0, 1, 1, 1])


def test_envelope(simple_line):
    """Test envelope polygon."""
    env = envelope(simple_line)
    assert env["geometry"]["type"] == "Polygon"
    assert bbox(env) == [0, 0, 1, 1]


def test_square():
    """Test squaring a bbox."""
    assert square([0, 0, 2, 1]) == pytest.approx([0, -0.5, 2, 1.5])
    assert square([0, 0, 1, 2]) == pytest.approx([-0.5, 0, 1.5, 2])


def test_centers(unit_square):
    """Test center, centroid and center of mass of a square."""
    assert coords_of(center(unit_square)) == [0.5, 0.5]
    assert coords_of(centroid(unit_square)) == [0.5, 0.5]
    assert coords_of(center_of_mass(unit_square)) == pytest.approx([0.5, 0.5])


def test_center_of_mass_point():
    """Test center of mass of a point is the point."""
    assert coords_of(center_of_mass(point([3, 4]))) == [3, 4]


def test_center_mean_weighted():
    """Test weighted mean center."""
    fc = feature_collection([point([0, 0], {"w": 3}), point([4, 0], {"w": 1})])

    assert coords_of(center_mean(fc)) == pytest.approx([2, 0])
    assert coords_of(center_mean(fc, weight="w")) == pytest.approx([1, 0])


def test_center_mean_rejects_bad_weight():
    """Test non numeric weights."""
    fc = feature_collection([point([0, 0], {"w": "heavy"})])
    with pytest.raises(InvalidArgumentError):
        center_mean(fc, weight="w")


def test_center_median():
    """Test median center of symmetric points."""
    fc = feature_collection([point([0, 0]), point([1, 0]), point([1, 1]), point([0, 1])])
    median = center_median(fc)

    assert coords_of(median) == pytest.approx([0.5, 0.5], abs=1e-3)
    assert isinstance(median["properties"]["medianCandidates"], list)


def test_point_on_feature(unit_square):
    """Test point on surface."""
    assert coords_of(point_on_feature(unit_square)) == [0.5, 0.5]


def test_point_on_feature_concave():
    """Test point on a shape whose bbox center falls outside it."""
    ring = [[0, 0], [3, 0], [3, 1], [1, 1], [1, 3], [0, 3], [0, 0]]
    shape = polygon([ring])
    on = coords_of(point_on_feature(shape))

    assert on in ring


def test_standard_deviational_ellipse():
    """Test standard deviational ellipse statistics."""
    fc = feature_collection([
        point(c) for c in [[0, 0], [1, 1.2], [2, 1.8], [3, 3.1], [4, 3.9], [1, 0.5], [3, 3.5]]
    ])
    result = standard_deviational_ellipse(fc, steps=32)
    stats = result["properties"]["standardDeviationalEllipse"]

    assert result["geometry"]["type"] == "Polygon"
    assert len(coords_of(result)[0]) == 33
    assert stats["number_of_features"] == 7
    assert stats["mean_center_coordinates"] == pytest.approx([2, 2])
    assert 0 <= stats["percentage_within_ellipse"] <= 100


def test_great_circle():
    """Test geodesic path."""
    path = great_circle([0, 0], [10, 0], npoints=11)
    coords = coords_of(path)

    assert path["geometry"]["type"] == "LineString"
    assert len(coords) == 11
    assert coords[5] == pytest.approx([5, 0], abs=1e-6)
    assert coords[-1] == pytest.approx([10, 0], abs=1e-6)


def test_great_circle_antimeridian():
    """Test paths crossing 180 are split."""
    path = great_circle([170, 0], [-170, 0], npoints=100)
    assert path["geometry"]["type"] == "MultiLineString"
    assert len(coords_of(path)) == 2


def test_nearest_point():
    """Test nearest point search."""
    fc = feature_collection([point([5, 5]), point([1, 1], {"name": "near"}), point([-5, 3])])
    nearest = nearest_point([0, 0], fc)

    assert nearest["properties"]["featureIndex"] == 1
    assert nearest["properties"]["name"] == "near"
    assert nearest["properties"]["distanceToPoint"] == pytest.approx(distance([0, 0], [1, 1]))
    assert "featureIndex" not in fc["features"][1]["properties"]


def test_nearest_point_on_line(simple_line):
    """Test snapping a point onto a line."""
    snapped = nearest_point_on_line(simple_line, [0.5, 0.1])

    assert coords_of(snapped) == pytest.approx([0.5, 0], abs=1e-9)
    assert snapped["properties"]["index"] == 0
    assert snapped["properties"]["dist"] == pytest.approx(DEGREE_KM / 10, rel=1e-3)
    assert snapped["properties"]["location"] == pytest.approx(DEGREE_KM / 2, rel=1e-4)


def test_nearest_point_on_line_rejects_polygon(unit_square):
    """Test type check."""
    with pytest.raises(InvalidGeoJSONError):
        nearest_point_on_line(unit_square, [0, 0])


def test_point_to_line_distance():
    """Test point to line distance."""
    line = line_string([[-1, 0], [1, 0]])

    assert point_to_line_distance([0, 1], line) == pytest.approx(DEGREE_KM, rel=1e-2)
    assert point_to_line_distance([3, 0], line) == pytest.approx(2 * DEGREE_KM, rel=1e-3)
    assert point_to_line_distance([0, 1], line, mercator=True) == pytest.approx(DEGREE_KM, rel=1e-2)


def test_nearest_point_to_line():
    """Test nearest point to a line."""
    fc = feature_collection([point([0, 1]), point([0, 0.5], {"id": "b"}), point([5, 5])])
    nearest = nearest_point_to_line(fc, line_string([[-1, 0], [1, 0]]))

    assert coords_of(nearest) == [0, 0.5]
    assert nearest["properties"]["id"] == "b"
    assert nearest["properties"]["dist"] == pytest.approx(DEGREE_KM / 2, rel=1e-2)


def test_polygon_tangents(unit_square):
    """Test tangents seen from a point right of the square."""
    tangents = polygon_tangents([2, 0.5], unit_square)
    found = sorted(coords_of(f) for f in tangents["features"])

    assert found == [[1, 0], [1, 1]]


def test_planepoint():
    """Test interpolation on a triangle plane."""
    triangle = polygon([[[0, 0], [2, 0], [0, 2], [0, 0]]], {"a": 0, "b": 2, "c": 2})

    assert planepoint([0.5, 0.5], triangle) == pytest.approx(1)
    with pytest.raises(InvalidArgumentError):
        planepoint([0.5, 0.5], polygon([[[0, 0], [2, 0], [0, 2], [0, 0]]]))
