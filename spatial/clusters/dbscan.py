"""
Density-based clustering for spatial.
DBSCAN over great-circle distances, backed by scikit-learn.
"""

import copy
import logging
from typing import Optional

import numpy as np
from sklearn.cluster import DBSCAN

from spatial.exceptions import InvalidArgumentError
from spatial.helpers import is_number
from spatial.invariant import collection_of
from spatial.models.units import length_to_radians


logger = logging.getLogger(__name__)


def clusters_dbscan(
    points: dict,
    max_distance: float,
    units: Optional[str] = None,
    min_points: int = 3,
) -> dict:
    """
    Cluster points by density.

    Every point gets a dbscan property: core for points with at least
    min_points neighbours (themselves included) within max_distance, edge for
    points reachable from a core point, noise otherwise. Core and edge points
    also get the cluster id in a cluster property.

    Args:
        points: FeatureCollection of Points
        max_distance: Neighbourhood radius
        units: Length unit of max_distance
        min_points: Neighbours needed to form a cluster

    Returns:
        Copy of points carrying the cluster properties
    """
    collection_of(points, "Point", "clusters_dbscan")
    if max_distance is None:
        raise InvalidArgumentError("max_distance is required")
    if not is_number(max_distance) or max_distance <= 0:
        raise InvalidArgumentError("Invalid max_distance")
    if min_points is None:
        min_points = 3
    if not is_number(min_points) or min_points <= 0:
        raise InvalidArgumentError("Invalid min_points")

    points = copy.deepcopy(points)
    if not points["features"]:
        return points

    # the haversine metric takes [lat, lon] in radians
    coords = np.radians([pt["geometry"]["coordinates"][1::-1] for pt in points["features"]])
    model = DBSCAN(
        eps=length_to_radians(max_distance, units),
        min_samples=int(min_points),
        metric="haversine",
        algorithm="ball_tree",
    ).fit(coords)
    core = set(model.core_sample_indices_.tolist())

    for index, (feature, label) in enumerate(zip(points["features"], model.labels_.tolist())):
        if feature.get("properties") is None:
            feature["properties"] = {}
        if label == -1:
            feature["properties"]["dbscan"] = "noise"
            continue
        feature["properties"]["cluster"] = label
        feature["properties"]["dbscan"] = "core" if index in core else "edge"

    logger.debug("DBSCAN found %d clusters in %d points", len(set(model.labels_.tolist()) - {-1}), len(points["features"]))
    return points
