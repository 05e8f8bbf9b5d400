"""Tests for clusters module."""

import pytest

from spatial.clusters import cluster_each, cluster_reduce, clusters_dbscan, clusters_kmeans, get_cluster
from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import feature_collection, point


@pytest.fixture
def labelled():
    return feature_collection([
        point([0, 0], {"cluster": 0, "marker": "circle"}),
        point([1, 1], {"cluster": 1}),
        point([2, 2], {"cluster": 0}),
        point([3, 3]),
    ])


@pytest.fixture
def two_groups():
    """Two tight groups of three points, interleaved."""
    return feature_collection([
        point([0, 0]),
        point([10, 10]),
        point([0.1, 0]),
        point([10.1, 10]),
        point([0, 0.1]),
        point([10, 10.1]),
    ])


def test_get_cluster(labelled):
    """Test filtering by property."""
    assert len(get_cluster(labelled, "cluster")["features"]) == 3
    assert len(get_cluster(labelled, {"cluster": 0})["features"]) == 2
    assert len(get_cluster(labelled, ["cluster", "marker"])["features"]) == 1
    assert get_cluster(labelled, {"cluster": 5})["features"] == []


def test_get_cluster_validation(labelled):
    """Test argument checks."""
    with pytest.raises(InvalidGeoJSONError):
        get_cluster(point([0, 0]), "cluster")
    with pytest.raises(InvalidArgumentError):
        get_cluster(labelled, None)


def test_cluster_each(labelled):
    """Test clusters come in order of first appearance."""
    found = [(value, index, len(fc["features"])) for fc, value, index in cluster_each(labelled, "cluster")]
    assert found == [(0, 0, 2), (1, 1, 1)]


def test_cluster_reduce(labelled):
    """Test reducing clusters."""
    def count(previous, cluster, value, index):
        return previous + len(cluster["features"])

    assert cluster_reduce(labelled, "cluster", count, 0) == 3


def test_cluster_reduce_without_initial_value(labelled):
    """Test the first cluster seeds the reduction."""
    def values(previous, cluster, value, index):
        return [previous["features"][0]["properties"]["cluster"], value]

    assert cluster_reduce(labelled, "cluster", values) == [0, 1]
    assert cluster_reduce(feature_collection([]), "cluster", values) is None


def test_dbscan(two_groups):
    """Test two dense groups and an outlier."""
    two_groups["features"].append(point([5, 5]))
    result = clusters_dbscan(two_groups, 50)
    features = result["features"]

    assert {f["properties"]["cluster"] for f in features[:6:2]} == {0}
    assert {f["properties"]["cluster"] for f in features[1:6:2]} == {1}
    assert all(f["properties"]["dbscan"] == "core" for f in features[:6])
    assert features[6]["properties"] == {"dbscan": "noise"}
    assert two_groups["features"][0]["properties"] == {}


def test_dbscan_edge_points():
    """Test points reachable only through a core point."""
    line = feature_collection([point([0, 0]), point([0.3, 0]), point([0.6, 0])])
    result = clusters_dbscan(line, 40, min_points=3)
    kinds = [f["properties"]["dbscan"] for f in result["features"]]

    assert kinds == ["edge", "core", "edge"]
    assert {f["properties"]["cluster"] for f in result["features"]} == {0}


def test_dbscan_validation(two_groups):
    """Test argument checks."""
    with pytest.raises(InvalidArgumentError):
        clusters_dbscan(two_groups, -1)
    with pytest.raises(InvalidArgumentError):
        clusters_dbscan(two_groups, 10, min_points=0)


def test_kmeans(two_groups):
    """Test splitting two groups."""
    result = clusters_kmeans(two_groups, 2)
    features = result["features"]
    first = {f["properties"]["cluster"] for f in features[::2]}
    second = {f["properties"]["cluster"] for f in features[1::2]}

    assert len(first) == 1
    assert len(second) == 1
    assert first != second
    assert features[0]["properties"]["centroid"] == pytest.approx([1 / 30, 1 / 30])
    assert two_groups["features"][0]["properties"] == {}


def test_kmeans_default_count(two_groups):
    """Test the default number of clusters."""
    result = clusters_kmeans(two_groups)
    assert len({f["properties"]["cluster"] for f in result["features"]}) == 2


def test_kmeans_mutate(two_groups):
    """Test updating the input in place."""
    result = clusters_kmeans(two_groups, 1, mutate=True)

    assert result is two_groups
    assert two_groups["features"][0]["properties"]["cluster"] == 0
