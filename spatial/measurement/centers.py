"""
Center calculations for spatial.
Bounding-box centers, vertex means, centers of mass, weighted medians and
standard deviational ellipses.
"""

import logging
import math
from typing import Optional

from shapely.geometry import MultiPoint, Polygon, shape
from shapely.geometry import Point as ShapelyPoint

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import BBox, Id, Properties, is_number, point
from spatial.invariant import get_coords, get_type
from spatial.measurement.bounds import bbox as compute_bbox
from spatial.measurement.distance import distance
from spatial.meta import coord_all, coord_each, feature_each, flatten_each, geom_each
from spatial.models.outputs import StandardDeviationalEllipseProperties


logger = logging.getLogger(__name__)


def center(geojson: dict, properties: Properties = None, bbox: Optional[BBox] = None, id: Id = None) -> dict:
    """
    Get the center of the bounding box of a GeoJSON object.

    Args:
        geojson: Any GeoJSON object
        properties: Properties of the returned point
        bbox: Bbox of the returned point
        id: Id of the returned point

    Returns:
        Point Feature
    """
    west, south, east, north = compute_bbox(geojson)
    return point([(west + east) / 2, (south + north) / 2], properties, bbox, id)


def centroid(geojson: dict, properties: Properties = None) -> dict:
    """Get the mean of all vertices; the closing vertex of polygon rings is counted once."""
    x_sum = y_sum = 0.0
    count = 0
    for coord in coord_each(geojson, exclude_wrap_coord=True):
        x_sum += coord[0]
        y_sum += coord[1]
        count += 1
    if not count:
        raise InvalidGeoJSONError("geojson has no coordinates")
    return point([x_sum / count, y_sum / count], properties)


def center_of_mass(geojson: dict, properties: Properties = None) -> dict:
    """
    Get the center of mass of a GeoJSON object.

    Polygons use their area-weighted centroid; every other type uses the
    center of mass of its convex hull, falling back to the vertex centroid
    when the hull has no area.

    Args:
        geojson: Any GeoJSON object
        properties: Properties of the returned point

    Returns:
        Point Feature
    """
    gtype = get_type(geojson)
    if gtype == "Point":
        return point(get_coords(geojson), properties)
    if gtype == "Polygon":
        rings = get_coords(geojson)
        shape = Polygon(rings[0], rings[1:])
        if shape.area == 0:
            return centroid(geojson, properties)
        mass = shape.centroid
        return point([mass.x, mass.y], properties)

    hull = MultiPoint([tuple(c[:2]) for c in coord_all(geojson)]).convex_hull
    if hull.geom_type != "Polygon" or hull.area == 0:
        return centroid(geojson, properties)
    mass = hull.centroid
    return point([mass.x, mass.y], properties)


def _feature_weight(properties: dict, weight_key: Optional[str], index: int) -> float:
    value = properties.get(weight_key) if weight_key else None
    if value is None:
        return 1.0
    if not is_number(value):
        raise InvalidArgumentError(f"weight value must be a number for feature index {index}")
    return float(value)


def center_mean(
    geojson: dict,
    properties: Properties = None,
    weight: Optional[str] = None,
    bbox: Optional[BBox] = None,
    id: Id = None,
) -> dict:
    """
    Get the (optionally weighted) mean of all vertices.

    Args:
        geojson: Any GeoJSON object
        properties: Properties of the returned point
        weight: Property holding the weight of each feature; features weighted
            zero or less are skipped
        bbox: Bbox of the returned point
        id: Id of the returned point

    Returns:
        Point Feature
    """
    sum_x = sum_y = sum_n = 0.0
    for geom, feature_properties, index in geom_each(geojson):
        if geom is None:
            continue
        w = _feature_weight(feature_properties, weight, index)
        if w <= 0:
            continue
        for coord in coord_each(geom):
            sum_x += coord[0] * w
            sum_y += coord[1] * w
            sum_n += w
    if not sum_n:
        raise InvalidGeoJSONError("no features to measure")
    return point([sum_x / sum_n, sum_y / sum_n], properties, bbox, id)


def center_median(
    features: dict,
    weight: Optional[str] = None,
    tolerance: float = 0.001,
    counter: int = 10,
) -> dict:
    """
    Get the weighted median center of a FeatureCollection (Weiszfeld's algorithm).

    Starts at the mean center and iterates over the centroids of the features
    until the candidate moves less than the tolerance or the counter runs out.

    Args:
        features: FeatureCollection
        weight: Property holding the weight of each feature
        tolerance: Movement below which the iteration stops
        counter: Maximum number of iterations

    Returns:
        Point Feature whose medianCandidates property lists the intermediate candidates
    """
    mean = center_mean(features, weight=weight)
    centroids = []
    for index, feat in enumerate(feature_each(features)):
        w = _feature_weight(feat.get("properties") or {}, weight, index)
        centroids.append((centroid(feat)["geometry"]["coordinates"], w))

    candidates: list[list[float]] = []
    candidate = mean["geometry"]["coordinates"]
    previous = [0.0, 0.0]
    while True:
        x_sum = y_sum = k_sum = 0.0
        count = 0
        for coords, w in centroids:
            if w <= 0:
                continue
            count += 1
            distance_from_candidate = w * distance(coords, candidate)
            if distance_from_candidate == 0:
                distance_from_candidate = 1
            k = w / distance_from_candidate
            x_sum += coords[0] * k
            y_sum += coords[1] * k
            k_sum += k
        if count < 1:
            raise InvalidGeoJSONError("no features to measure")

        next_candidate = [x_sum / k_sum, y_sum / k_sum]
        converged = (
            abs(next_candidate[0] - previous[0]) < tolerance
            and abs(next_candidate[1] - previous[1]) < tolerance
        )
        if count == 1 or counter == 0 or converged:
            return point(next_candidate, {"medianCandidates": candidates})
        candidates.append(next_candidate)
        previous, candidate = candidate, next_candidate
        counter -= 1


def point_on_feature(geojson: dict) -> dict:
    """
    Get a point guaranteed to lie on the surface of a GeoJSON object.

    The bbox center is returned when it falls on one of the features,
    otherwise the vertex closest to it.

    Args:
        geojson: Any GeoJSON object

    Returns:
        Point Feature
    """
    cent = center(geojson)
    cent_coords = cent["geometry"]["coordinates"]
    probe = ShapelyPoint(cent_coords)
    for feat in flatten_each(geojson):
        if shape(feat["geometry"]).intersects(probe):
            return cent

    vertices = coord_all(geojson)
    closest = min(vertices, key=lambda coord: distance(cent_coords, coord))
    return point(closest)


def standard_deviational_ellipse(
    points: dict,
    weight: Optional[str] = None,
    steps: int = 64,
    properties: Properties = None,
) -> dict:
    """
    Build the standard deviational ellipse of a set of points.

    Args:
        points: FeatureCollection of Points
        weight: Property holding the weight of each point
        steps: Number of vertices of the ellipse
        properties: Properties of the returned feature

    Returns:
        Polygon Feature whose standardDeviationalEllipse property holds the statistics
    """
    from spatial.transformation.conversion import points_within_polygon
    from spatial.transformation.shapes import ellipse

    if not is_number(steps) or steps < 1:
        raise InvalidArgumentError("steps must be a number")
    if properties is not None and not isinstance(properties, dict):
        raise InvalidArgumentError("properties must be an object")

    number_of_features = len(coord_all(points))
    mean_center = center_mean(points, weight=weight)
    mx, my = mean_center["geometry"]["coordinates"]

    deviations = []
    for index, feat in enumerate(feature_each(points)):
        x, y = get_coords(feat)[:2]
        w = _feature_weight(feat.get("properties") or {}, weight, index) or 1.0
        deviations.append((x - mx, y - my, w))

    x_dev2 = sum(dx * dx * w for dx, _, w in deviations)
    y_dev2 = sum(dy * dy * w for _, dy, w in deviations)
    xy_dev = sum(dx * dy * w for dx, dy, w in deviations)

    big_a = x_dev2 - y_dev2
    big_b = math.sqrt(big_a ** 2 + 4 * xy_dev ** 2)
    big_c = 2 * xy_dev
    theta = math.atan((big_a + big_b) / big_c) if big_c else math.pi / 2
    theta_deg = theta * 180 / math.pi

    sigma_x_sum = sum(((dx * math.cos(theta)) - (dy * math.sin(theta))) ** 2 * w for dx, dy, w in deviations)
    sigma_y_sum = sum(((dx * math.sin(theta)) + (dy * math.cos(theta))) ** 2 * w for dx, dy, w in deviations)
    weight_sum = sum(w for _, _, w in deviations)
    sigma_x = math.sqrt(2 * sigma_x_sum / weight_sum)
    sigma_y = math.sqrt(2 * sigma_y_sum / weight_sum)

    the_ellipse = ellipse(
        mean_center, sigma_x, sigma_y, units="degrees", angle=theta_deg, steps=steps, properties=properties
    )
    within = points_within_polygon(points, {"type": "FeatureCollection", "features": [the_ellipse]})
    stats = StandardDeviationalEllipseProperties(
        mean_center_coordinates=[mx, my],
        semi_major_axis=sigma_x,
        semi_minor_axis=sigma_y,
        number_of_features=number_of_features,
        angle=theta_deg,
        percentage_within_ellipse=100 * len(coord_all(within)) / number_of_features,
    )
    logger.debug("Standard deviational ellipse over %d points: %s", number_of_features, stats)
    the_ellipse["properties"]["standardDeviationalEllipse"] = stats.model_dump()
    return the_ellipse
