"""Shared fixtures for spatial tests."""

import pytest

from spatial.helpers import feature_collection, line_string, point, polygon


@pytest.fixture
def unit_square():
    """Polygon covering [0, 0] to [1, 1]."""
    return polygon([[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]], {"name": "square"})


@pytest.fixture
def shifted_square():
    """Polygon covering [0.5, 0.5] to [1.5, 1.5]."""
    return polygon([[[0.5, 0.5], [1.5, 0.5], [1.5, 1.5], [0.5, 1.5], [0.5, 0.5]]], {"name": "shifted"})


@pytest.fixture
def far_square():
    """Polygon covering [10, 10] to [11, 11]."""
    return polygon([[[10, 10], [11, 10], [11, 11], [10, 11], [10, 10]]])


@pytest.fixture
def simple_line():
    """Three-vertex line heading east then north."""
    return line_string([[0, 0], [1, 0], [1, 1]], {"name": "route"})


@pytest.fixture
def grid_points():
    """3 x 3 grid of points whose elevation grows with x."""
    features = []
    for x in range(3):
        for y in range(3):
            features.append(point([x, y], {"elevation": float(x * 10)}))
    return feature_collection(features)
