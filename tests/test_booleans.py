"""Tests for booleans module."""

import pytest

from spatial.booleans import (
    boolean_clockwise,
    boolean_contains,
    boolean_crosses,
    boolean_disjoint,
    boolean_equal,
    boolean_overlap,
    boolean_parallel,
    boolean_point_in_polygon,
    boolean_point_on_line,
    boolean_within,
)
from spatial.exceptions import InvalidGeoJSONError
from spatial.helpers import line_string, multi_point, multi_polygon, point, polygon


def test_point_in_polygon(unit_square):
    """Test point in polygon."""
    assert boolean_point_in_polygon([0.5, 0.5], unit_square)
    assert not boolean_point_in_polygon([1.5, 0.5], unit_square)


def test_point_on_boundary(unit_square):
    """Test boundary handling."""
    assert boolean_point_in_polygon([1, 0.5], unit_square)
    assert not boolean_point_in_polygon([1, 0.5], unit_square, ignore_boundary=True)


def test_point_in_hole():
    """Test points inside holes are outside."""
    outer = [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]]
    hole = [[1, 1], [1, 3], [3, 3], [3, 1], [1, 1]]
    holed = polygon([outer, hole])

    assert not boolean_point_in_polygon([2, 2], holed)
    assert boolean_point_in_polygon([0.5, 2], holed)


def test_point_in_multipolygon():
    """Test multi polygons."""
    square = [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]
    other = [[[5, 5], [6, 5], [6, 6], [5, 6], [5, 5]]]
    multi = multi_polygon([square, other])

    assert boolean_point_in_polygon([5.5, 5.5], multi)
    assert not boolean_point_in_polygon([3, 3], multi)


def test_point_in_polygon_rejects_lines(simple_line):
    """Test type check."""
    with pytest.raises(InvalidGeoJSONError):
        boolean_point_in_polygon([0, 0], simple_line)


def test_point_on_line(simple_line):
    """Test point on line."""
    assert boolean_point_on_line([0.5, 0], simple_line)
    assert boolean_point_on_line([1, 0.5], simple_line)
    assert not boolean_point_on_line([0.5, 0.5], simple_line)


def test_point_on_line_end_vertices(simple_line):
    """Test ignoring the end vertices."""
    assert boolean_point_on_line([0, 0], simple_line)
    assert not boolean_point_on_line([0, 0], simple_line, ignore_end_vertices=True)
    assert not boolean_point_on_line([1, 1], simple_line, ignore_end_vertices=True)
    assert boolean_point_on_line([1, 0], simple_line, ignore_end_vertices=True)


def test_point_on_line_epsilon():
    """Test tolerance on the cross product."""
    line = line_string([[0, 0], [10, 0]])

    assert not boolean_point_on_line([5, 1e-12], line)
    assert boolean_point_on_line([5, 1e-12], line, epsilon=1e-9)


def test_clockwise():
    """Test ring winding."""
    assert boolean_clockwise([[0, 0], [1, 1], [1, 0], [0, 0]])
    assert not boolean_clockwise([[0, 0], [1, 0], [1, 1], [0, 0]])


def test_contains_and_within(unit_square):
    """Test containment."""
    inner = point([0.5, 0.5])

    assert boolean_contains(unit_square, inner)
    assert boolean_within(inner, unit_square)
    assert not boolean_contains(unit_square, point([2, 2]))


def test_crosses(unit_square):
    """Test crossing lines."""
    crossing = line_string([[-1, 0.5], [2, 0.5]])
    inside = line_string([[0.2, 0.2], [0.8, 0.8]])

    assert boolean_crosses(crossing, unit_square)
    assert not boolean_crosses(inside, unit_square)
    assert boolean_crosses(crossing, line_string([[0.5, -1], [0.5, 2]]))


def test_disjoint(unit_square, far_square, shifted_square):
    """Test disjoint shapes."""
    assert boolean_disjoint(unit_square, far_square)
    assert not boolean_disjoint(unit_square, shifted_square)


def test_equal_ignores_ring_start(unit_square):
    """Test equality with a different start vertex and winding."""
    rotated = polygon([[[1, 1], [1, 0], [0, 0], [0, 1], [1, 1]]])

    assert boolean_equal(unit_square, rotated)
    assert not boolean_equal(unit_square, line_string([[0, 0], [1, 1]]))


def test_equal_precision():
    """Test coordinate precision."""
    assert boolean_equal(point([0, 0]), point([0, 1e-9]))
    assert not boolean_equal(point([0, 0]), point([0, 1e-3]))


def test_overlap_polygons(unit_square, shifted_square, far_square):
    """Test overlapping polygons."""
    assert boolean_overlap(unit_square, shifted_square)
    assert not boolean_overlap(unit_square, far_square)
    assert not boolean_overlap(unit_square, unit_square)


def test_overlap_lines():
    """Test lines sharing a segment."""
    line1 = line_string([[0, 0], [2, 0]])
    line2 = line_string([[1, 0], [3, 0]])
    crossing = line_string([[1, -1], [1, 1]])

    assert boolean_overlap(line1, line2)
    assert not boolean_overlap(line1, crossing)


def test_overlap_multipoints():
    """Test multi points sharing a position."""
    assert boolean_overlap(multi_point([[0, 0], [1, 1]]), multi_point([[1, 1], [2, 2]]))
    assert not boolean_overlap(multi_point([[0, 0]]), multi_point([[2, 2], [3, 3]]))


def test_overlap_rejects_mixed_types(unit_square, simple_line):
    """Test type checks."""
    with pytest.raises(InvalidGeoJSONError):
        boolean_overlap(unit_square, simple_line)
    with pytest.raises(InvalidGeoJSONError):
        boolean_overlap(point([0, 0]), point([1, 1]))


def test_parallel():
    """Test parallel lines."""
    line1 = line_string([[0, 0], [0, 1]])
    line2 = line_string([[1, 0], [1, 1]])
    line3 = line_string([[1, 0], [2, 1]])

    assert boolean_parallel(line1, line2)
    assert not boolean_parallel(line1, line3)
