"""
Cluster iteration for spatial.
Grouping features by a cluster property and walking the groups.
"""

from typing import Any, Callable, Iterator, Union

from spatial.exceptions import InvalidArgumentError, InvalidGeoJSONError
from spatial.helpers import feature_collection


Filter = Union[str, int, list, dict]


def _apply_filter(properties, filter: Filter) -> bool:
    if properties is None:
        return False
    if isinstance(filter, (str, int)):
        return filter in properties
    if isinstance(filter, (list, tuple)):
        return all(_apply_filter(properties, f) for f in filter)
    return all(key in properties and properties[key] == value for key, value in filter.items())


def get_cluster(geojson: dict, filter: Filter) -> dict:
    """
    Get the features matching a filter.

    Args:
        geojson: FeatureCollection
        filter: Property name that must exist, list of names, or dict of
            property values that must all match

    Returns:
        FeatureCollection of the matching features
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if geojson.get("type") != "FeatureCollection":
        raise InvalidGeoJSONError("geojson must be a FeatureCollection")
    if filter is None:
        raise InvalidArgumentError("filter is required")
    return feature_collection([f for f in geojson["features"] if _apply_filter(f.get("properties"), filter)])


def _bins(geojson: dict, property: Union[str, int]) -> dict:
    bins: dict = {}
    for index, feat in enumerate(geojson["features"]):
        properties = feat.get("properties") or {}
        if property in properties:
            bins.setdefault(properties[property], []).append(index)
    return bins


def cluster_each(geojson: dict, property: Union[str, int]) -> Iterator[tuple[dict, Any, int]]:
    """
    Iterate over the clusters formed by the values of a property.

    Features without the property belong to no cluster. Clusters come in the
    order their first feature appears.

    Yields:
        Tuples of (FeatureCollection of the cluster, property value, cluster index)
    """
    if not geojson:
        raise InvalidGeoJSONError("geojson is required")
    if geojson.get("type") != "FeatureCollection":
        raise InvalidGeoJSONError("geojson must be a FeatureCollection")
    if property is None:
        raise InvalidArgumentError("property is required")
    for index, (value, members) in enumerate(_bins(geojson, property).items()):
        yield feature_collection([geojson["features"][i] for i in members]), value, index


_MISSING = object()


def cluster_reduce(
    geojson: dict,
    property: Union[str, int],
    callback: Callable[[Any, dict, Any, int], Any],
    initial_value: Any = _MISSING,
) -> Any:
    """
    Reduce the clusters formed by the values of a property.

    Args:
        geojson: FeatureCollection
        property: Property holding the cluster value
        callback: Called as callback(previous, cluster, value, index)
        initial_value: Starting value, the first cluster when omitted

    Returns:
        Reduced value
    """
    previous = initial_value
    for cluster, value, index in cluster_each(geojson, property):
        if index == 0 and previous is _MISSING:
            previous = cluster
        else:
            previous = callback(previous, cluster, value, index)
    return None if previous is _MISSING else previous
