"""
Triangulation for spatial.
Delaunay triangulated irregular networks and Voronoi cells from point sets.
"""

from typing import Optional

from shapely.geometry import MultiPoint, box
from shapely.geometry import Point as ShapelyPoint
from shapely.ops import triangulate, voronoi_diagram
from shapely.strtree import STRtree

from spatial.exceptions import InvalidArgumentError
from spatial.helpers import BBox, feature, feature_collection, polygon
from spatial.invariant import collection_of
from spatial.overlay.adapter import from_shape


def tin(points: dict, z: Optional[str] = None) -> dict:
    """
    Build the Delaunay triangulation of a set of points.

    Args:
        points: FeatureCollection of Points
        z: Property whose values at the three vertices are stored as a, b and c

    Returns:
        FeatureCollection of triangle Polygons
    """
    collection_of(points, "Point", "tin")
    values = {}
    for pt in points["features"]:
        x, y = pt["geometry"]["coordinates"][:2]
        values[(x, y)] = (pt.get("properties") or {}).get(z) if z else None

    triangles = triangulate(MultiPoint(list(values)))
    results = []
    for triangle in triangles:
        ring = [list(c) for c in triangle.exterior.coords]
        properties = {}
        if z:
            for key, coords in zip(("a", "b", "c"), ring[:3]):
                properties[key] = values.get((coords[0], coords[1]))
        results.append(polygon([ring], properties))
    return feature_collection(results)


def voronoi(points: dict, bbox: BBox) -> dict:
    """
    Build the Voronoi cell of every point, clipped to a bounding box.

    Args:
        points: FeatureCollection of Points
        bbox: [west, south, east, north] the cells are clipped to

    Returns:
        FeatureCollection of Polygons in the order of the input points, each
        carrying the properties of its point
    """
    collection_of(points, "Point", "voronoi")
    if not bbox or len(bbox) != 4:
        raise InvalidArgumentError("bbox must contain 4 numbers")
    if not points["features"]:
        return feature_collection([])

    extent = box(*bbox)
    sites = [ShapelyPoint(pt["geometry"]["coordinates"][:2]) for pt in points["features"]]
    diagram = voronoi_diagram(MultiPoint(sites), envelope=extent)
    cells = list(diagram.geoms)
    tree = STRtree(cells)

    results = []
    for site, pt in zip(sites, points["features"]):
        matches = [cells[int(i)] for i in tree.query(site, predicate="intersects")]
        if not matches:
            continue
        clipped = matches[0].intersection(extent)
        if clipped.is_empty:
            continue
        results.append(feature(from_shape(clipped), pt.get("properties")))
    return feature_collection(results)
