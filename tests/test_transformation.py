"""Tests for transformation module."""

import pytest

from spatial.booleans import boolean_clockwise
from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import (
    feature_collection,
    line_string,
    multi_line_string,
    multi_point,
    multi_polygon,
    point,
    polygon,
)
from spatial.measurement import bbox, distance
from spatial.overlay import to_shape
from spatial.transformation import (
    bbox_clip,
    bezier_spline,
    circle,
    clean_coords,
    clone,
    collect,
    combine,
    convex,
    ellipse,
    explode,
    flatten,
    flip,
    line_arc,
    line_chunk,
    line_offset,
    line_to_polygon,
    points_within_polygon,
    polygon_to_line,
    rewind,
    sample,
    sector,
    simplify,
    tag,
    transform_rotate,
    transform_scale,
    transform_translate,
    truncate,
)

DEGREE_KM = 111.19508


def coords_of(feat):
    return feat["geometry"]["coordinates"]


# Coordinate clean-up

def test_clone_is_deep(unit_square):
    """Test cloning."""
    copy = clone(unit_square)
    copy["geometry"]["coordinates"][0][0][0] = 99

    assert coords_of(unit_square)[0][0] == [0, 0]


def test_clean_coords_removes_redundant_vertices():
    """Test duplicate and collinear vertex removal."""
    line = line_string([[0, 0], [1, 0], [2, 0], [2, 2]])

    assert coords_of(clean_coords(line)) == [[0, 0], [2, 0], [2, 2]]
    assert coords_of(clean_coords(line_string([[0, 0], [0, 0], [1, 1]]))) == [[0, 0], [1, 1]]
    assert coords_of(line) == [[0, 0], [1, 0], [2, 0], [2, 2]]


def test_clean_coords_multipoint():
    """Test duplicate points are dropped."""
    cleaned = clean_coords(multi_point([[0, 0], [1, 1], [0, 0]]))
    assert coords_of(cleaned) == [[0, 0], [1, 1]]


def test_flip():
    """Test axis swapping."""
    pt = point([1, 2])

    assert coords_of(flip(pt)) == [2, 1]
    assert coords_of(pt) == [1, 2]


def test_rewind():
    """Test rings are rewound counter-clockwise."""
    clockwise = polygon([[[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]])
    rewound = rewind(clockwise)

    assert not boolean_clockwise(coords_of(rewound)[0])
    assert boolean_clockwise(coords_of(rewind(clockwise, reverse=True))[0])


def test_truncate():
    """Test precision and dimension truncation."""
    pt = point([1.1234567, 2.9876543, 10])

    assert coords_of(truncate(pt, precision=3, coordinates=2)) == [1.123, 2.988]
    assert coords_of(truncate(pt)) == [1.123457, 2.987654, 10]
    with pytest.raises(InvalidArgumentError):
        truncate(pt, precision=-1)


# Affine transforms

def test_translate():
    """Test rhumb translation."""
    moved = transform_translate(point([0, 0]), DEGREE_KM, 90)
    back = transform_translate(point([0, 0]), -DEGREE_KM, 90)

    assert coords_of(moved) == pytest.approx([1, 0], abs=1e-6)
    assert coords_of(back) == pytest.approx([-1, 0], abs=1e-6)


def test_translate_elevation():
    """Test z translation."""
    moved = transform_translate(point([0, 0, 5]), 0, 0, z_translation=10)
    assert coords_of(moved)[2] == 15


def test_translate_validation():
    """Test argument checks."""
    with pytest.raises(InvalidArgumentError):
        transform_translate(point([0, 0]), None, 90)


def test_rotate(unit_square):
    """Test rotation around the centroid."""
    rotated = transform_rotate(unit_square, 90)

    assert coords_of(rotated)[0][0] == pytest.approx([0, 1], abs=1e-3)
    assert coords_of(unit_square)[0][0] == [0, 0]
    assert transform_rotate(unit_square, 0) is unit_square


def test_scale(unit_square):
    """Test scaling around the centroid and a corner."""
    doubled = transform_scale(unit_square, 2)
    from_corner = transform_scale(unit_square, 2, origin="sw")

    assert bbox(doubled) == pytest.approx([-0.5, -0.5, 1.5, 1.5], abs=1e-3)
    assert bbox(from_corner) == pytest.approx([0, 0, 2, 2], abs=1e-3)


def test_scale_validation(unit_square):
    """Test factor and origin checks."""
    with pytest.raises(InvalidArgumentError, match="factor"):
        transform_scale(unit_square, 0)
    with pytest.raises(InvalidArgumentError, match="origin"):
        transform_scale(unit_square, 2, origin="middle")


def test_scale_point_unchanged():
    """Test points are not scaled."""
    assert coords_of(transform_scale(point([1, 1]), 3)) == [1, 1]


# Shapes

def test_circle():
    """Test circle polygon."""
    result = circle(point([0, 0], {"name": "c"}), 10, steps=16)
    ring = coords_of(result)[0]

    assert len(ring) == 17
    assert ring[0] == ring[-1]
    assert all(distance([0, 0], c) == pytest.approx(10, rel=1e-6) for c in ring)
    assert result["properties"] == {"name": "c"}


def test_circle_validation():
    """Test radius check."""
    with pytest.raises(InvalidArgumentError):
        circle([0, 0], None)


def test_ellipse():
    """Test ellipse axes."""
    ring = coords_of(ellipse([0, 0], 10, 5, steps=32))[0]

    assert len(ring) == 33
    assert distance([0, 0], ring[0]) == pytest.approx(10, rel=1e-3)
    assert distance([0, 0], ring[8]) == pytest.approx(5, rel=1e-3)


def test_ellipse_rotation():
    """Test clockwise rotation turns east into south."""
    ring = coords_of(ellipse([0, 0], 10, 5, angle=90, steps=32))[0]

    assert ring[0][0] == pytest.approx(0, abs=1e-9)
    assert ring[0][1] < 0


def test_ellipse_degrees():
    """Test semi-axes given in degrees."""
    ring = coords_of(ellipse([0, 0], 2, 1, units="degrees", steps=4))[0]

    assert ring[0] == pytest.approx([2, 0])
    assert ring[1] == pytest.approx([0, 1], abs=1e-9)


def test_line_arc():
    """Test arc between two bearings."""
    arc = coords_of(line_arc([0, 0], 10, 0, 90, steps=8))

    assert len(arc) == 3
    assert arc[0][0] == pytest.approx(0, abs=1e-9)
    assert arc[-1][1] == pytest.approx(0, abs=1e-9)
    assert all(distance([0, 0], c) == pytest.approx(10, rel=1e-6) for c in arc)


def test_line_arc_full_circle():
    """Test equal bearings give a closed ring."""
    arc = coords_of(line_arc([0, 0], 10, 45, 45, steps=8))
    assert len(arc) == 9
    assert arc[0] == arc[-1]


def test_sector():
    """Test sector polygon."""
    ring = coords_of(sector([0, 0], 10, 0, 90, steps=8))[0]

    assert ring[0] == [0, 0]
    assert ring[-1] == [0, 0]
    assert len(ring) == 5


def test_bezier_spline():
    """Test the spline passes through every vertex."""
    curve = coords_of(bezier_spline(line_string([[0, 0], [1, 1], [2, 0]])))

    assert len(curve) == 501
    assert curve[0] == [0, 0]
    assert curve[250] == pytest.approx([1, 1])
    assert curve[-1] == pytest.approx([2, 0])


def test_line_offset():
    """Test offsetting to the right."""
    offset = line_offset(line_string([[0, 0], [0, 1]], {"a": 1}), DEGREE_KM)

    for got, want in zip(coords_of(offset), [[1, 0], [1, 1]]):
        assert got == pytest.approx(want, abs=1e-6)
    assert offset["properties"] == {"a": 1}


def test_line_offset_joint():
    """Test consecutive offset segments meet."""
    offset = coords_of(line_offset(line_string([[0, 0], [0, 2], [2, 2]]), -DEGREE_KM / 10))

    assert len(offset) == 3
    assert offset[1] == pytest.approx([-0.1, 2.1], abs=1e-6)


def test_line_offset_repeated_vertex():
    """Test repeated vertices are skipped."""
    offset = coords_of(line_offset(line_string([[0, 0], [0, 1], [0, 1], [1, 1]]), -DEGREE_KM / 10))

    assert len(offset) == 3
    assert offset[1] == pytest.approx([-0.1, 1.1], abs=1e-6)
    with pytest.raises(InvalidGeoJSONError):
        line_offset(line_string([[0, 0], [0, 0]]), 1)


def test_line_offset_rejects_polygon(unit_square):
    """Test type check."""
    with pytest.raises(InvalidGeoJSONError):
        line_offset(unit_square, 1)


def test_line_chunk():
    """Test cutting a line into pieces."""
    line = line_string([[0, 0], [0, 1]])
    chunks = line_chunk(line, 50)["features"]
    reversed_chunks = line_chunk(line, 50, reverse=True)["features"]

    assert len(chunks) == 3
    assert coords_of(chunks[0])[0] == [0, 0]
    assert coords_of(reversed_chunks[0])[0] == [0, 1]


def test_line_chunk_short_line():
    """Test lines shorter than a piece are kept whole."""
    line = line_string([[0, 0], [0, 0.1]])
    assert len(line_chunk(line, 50)["features"]) == 1


def test_simplify_line():
    """Test Douglas-Peucker simplification."""
    line = line_string([[0, 0], [1, 0.001], [2, 0], [3, 0.001], [4, 0]])
    simple = simplify(line, tolerance=0.01)

    assert coords_of(simple) == [[0, 0], [4, 0]]
    assert len(coords_of(line)) == 5


def test_simplify_keeps_rings_valid(unit_square):
    """Test rings never drop below four positions."""
    ring = coords_of(simplify(unit_square, tolerance=10))[0]

    assert len(ring) >= 4
    assert ring[0] == ring[-1]


def test_bbox_clip(shifted_square):
    """Test clipping to a bbox."""
    line = bbox_clip(line_string([[-1, 0.5], [2, 0.5]]), [0, 0, 1, 1])
    clipped = bbox_clip(shifted_square, [0, 0, 1, 1])

    assert sorted(coords_of(line)) == [[0, 0.5], [1, 0.5]]
    assert to_shape(clipped).area == pytest.approx(0.25)
    assert clipped["properties"] == {"name": "shifted"}


def test_bbox_clip_outside(far_square):
    """Test clipping a polygon outside the bbox."""
    clipped = bbox_clip(far_square, [0, 0, 1, 1])
    assert clipped["geometry"] == {"type": "Polygon", "coordinates": []}


def test_convex():
    """Test convex hull."""
    pts = feature_collection([point([0, 0]), point([2, 0]), point([1, 1]), point([1, 2]), point([0, 2])])
    hull = convex(pts)

    assert hull["geometry"]["type"] == "Polygon"
    assert to_shape(hull).area == pytest.approx(3)
    assert convex(line_string([[0, 0], [1, 1], [2, 2]])) is None


# Conversion

def test_polygon_to_line(unit_square):
    """Test polygon rings to lines."""
    line = polygon_to_line(unit_square)

    assert line["geometry"]["type"] == "LineString"
    assert line["properties"] == {"name": "square"}


def test_polygon_to_line_with_hole():
    """Test holes give a MultiLineString."""
    outer = [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]]
    hole = [[1, 1], [1, 3], [3, 3], [3, 1], [1, 1]]

    assert polygon_to_line(polygon([outer, hole]))["geometry"]["type"] == "MultiLineString"


def test_polygon_to_line_multipolygon(unit_square):
    """Test a MultiPolygon gives a FeatureCollection."""
    multi = multi_polygon([coords_of(unit_square), coords_of(unit_square)])
    result = polygon_to_line(multi)

    assert result["type"] == "FeatureCollection"
    assert len(result["features"]) == 2


def test_line_to_polygon():
    """Test closing a line into a polygon."""
    result = line_to_polygon(line_string([[0, 0], [1, 0], [1, 1], [0, 1]], {"a": 1}))
    ring = coords_of(result)[0]

    assert result["geometry"]["type"] == "Polygon"
    assert ring[0] == ring[-1]
    assert len(ring) == 5
    assert result["properties"] == {"a": 1}


def test_line_to_polygon_orders_rings():
    """Test the largest line becomes the exterior ring."""
    lines = multi_line_string([
        [[1, 1], [2, 1], [2, 2], [1, 2], [1, 1]],
        [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]],
    ])
    rings = coords_of(line_to_polygon(lines))

    assert rings[0][1] == [4, 0]


def test_combine():
    """Test combining features into multi-geometries."""
    fc = feature_collection([
        point([0, 0], {"a": 1}),
        point([1, 1], {"a": 2}),
        line_string([[0, 0], [1, 1]], {"b": 1}),
    ])
    result = combine(fc)["features"]

    assert [f["geometry"]["type"] for f in result] == ["MultiLineString", "MultiPoint"]
    assert result[1]["geometry"]["coordinates"] == [[0, 0], [1, 1]]
    assert result[1]["properties"]["collectedProperties"] == [{"a": 1}, {"a": 2}]


def test_explode(unit_square):
    """Test every vertex becomes a point."""
    points = explode(unit_square)["features"]

    assert len(points) == 5
    assert points[0]["properties"] == {"name": "square"}


def test_flatten(unit_square):
    """Test multi-geometries are split."""
    multi = multi_polygon([coords_of(unit_square), coords_of(unit_square)], {"id": 1})
    result = flatten(multi)["features"]

    assert len(result) == 2
    assert result[0]["properties"] == {"id": 1}


def test_collect(unit_square):
    """Test gathering point values into polygons."""
    points = feature_collection([
        point([0.2, 0.2], {"pop": 5}),
        point([0.8, 0.8], {"pop": 7}),
        point([5, 5], {"pop": 100}),
    ])
    result = collect(feature_collection([unit_square]), points, "pop", "values")

    assert result["features"][0]["properties"]["values"] == [5, 7]
    assert "values" not in unit_square["properties"]


def test_tag(unit_square):
    """Test copying polygon properties to points."""
    points = feature_collection([point([0.5, 0.5]), point([5, 5])])
    result = tag(points, feature_collection([unit_square]), "name", "area_name")

    assert result["features"][0]["properties"] == {"area_name": "square"}
    assert result["features"][1]["properties"] == {}


def test_sample():
    """Test random sampling."""
    fc = feature_collection([point([i, i]) for i in range(5)])

    assert len(sample(fc, 2)["features"]) == 2
    with pytest.raises(InvalidArgumentError):
        sample(fc, 6)


def test_points_within_polygon(unit_square, far_square):
    """Test point filtering."""
    points = feature_collection([point([0.5, 0.5]), point([10.5, 10.5]), point([5, 5])])
    inside = points_within_polygon(points, feature_collection([unit_square, far_square]))

    assert [coords_of(p) for p in inside["features"]] == [[0.5, 0.5], [10.5, 10.5]]
