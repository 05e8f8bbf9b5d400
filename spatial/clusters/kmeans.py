"""
K-means clustering for spatial.
"""

import copy
import math
from typing import Optional

import numpy as np
from sklearn.cluster import KMeans

from spatial.exceptions import InvalidArgumentError
from spatial.invariant import collection_of


def clusters_kmeans(points: dict, number_of_clusters: Optional[int] = None, mutate: bool = False) -> dict:
    """
    Cluster points with k-means on their coordinates.

    The first number_of_clusters points seed the centroids, so results are
    deterministic.

    Args:
        points: FeatureCollection of Points
        number_of_clusters: Clusters to build, round(sqrt(n / 2)) by default and
            never more than the number of points
        mutate: Update the input in place instead of working on a copy

    Returns:
        Points carrying a cluster id and the centroid of their cluster
    """
    collection_of(points, "Point", "clusters_kmeans")
    count = len(points["features"])
    if not number_of_clusters:
        number_of_clusters = round(math.sqrt(count / 2))
    if number_of_clusters < 0:
        raise InvalidArgumentError("number_of_clusters must be a positive number")
    number_of_clusters = min(int(number_of_clusters), count)

    if not mutate:
        points = copy.deepcopy(points)
    if count == 0:
        return points
    number_of_clusters = max(number_of_clusters, 1)

    coords = np.asarray([pt["geometry"]["coordinates"][:2] for pt in points["features"]], dtype=float)
    model = KMeans(n_clusters=number_of_clusters, init=coords[:number_of_clusters], n_init=1).fit(coords)
    centroids = model.cluster_centers_.tolist()

    for feature, label in zip(points["features"], model.labels_.tolist()):
        if feature.get("properties") is None:
            feature["properties"] = {}
        feature["properties"]["cluster"] = label
        feature["properties"]["centroid"] = centroids[label]
    return points
