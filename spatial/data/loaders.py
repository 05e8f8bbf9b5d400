"""
Data loaders for spatial.
Reading and writing GeoJSON and other vector files, and converting
FeatureCollections to and from GeoDataFrames.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Optional, Union

import geopandas as gpd
import pandas as pd

from spatial.exceptions import InvalidGeoJSONError


logger = logging.getLogger(__name__)

# Suffixes parsed as GeoJSON text, everything else goes through geopandas
GEOJSON_SUFFIXES = {".geojson", ".json"}

# Coordinate reference system of every FeatureCollection
WGS84 = "EPSG:4326"

PathLike = Union[str, Path]


def to_geodataframe(fc: dict) -> gpd.GeoDataFrame:
    """
    Convert a FeatureCollection to a GeoDataFrame.

    Feature properties become columns; the frame is tagged as WGS84.
    """
    if not fc or fc.get("type") != "FeatureCollection":
        raise InvalidGeoJSONError("fc must be a FeatureCollection")
    if not fc["features"]:
        return gpd.GeoDataFrame(pd.DataFrame(), geometry=gpd.GeoSeries([]), crs=WGS84)
    return gpd.GeoDataFrame.from_features(fc["features"], crs=WGS84)


def from_geodataframe(gdf: gpd.GeoDataFrame) -> dict:
    """
    Convert a GeoDataFrame to a FeatureCollection.

    Frames in another CRS are reprojected to WGS84 first; missing values
    become null properties.
    """
    if gdf.crs is not None and gdf.crs.to_epsg() != 4326:
        gdf = gdf.to_crs(WGS84)
    return json.loads(gdf.to_json(na="null", drop_id=True))


class VectorDataService:
    """
    Service class for reading vector files as FeatureCollections.
    Parsed files are cached until they change on disk.
    """

    def __init__(self):
        """Initialize the data service."""
        self._cache: dict[Path, tuple[float, dict]] = {}

    def __repr__(self) -> str:
        return f"VectorDataService(cached={len(self._cache)})"

    def read(self, path: PathLike) -> dict:
        """
        Read a vector file into a FeatureCollection.

        Args:
            path: GeoJSON file, or any format geopandas can read (shapefile, GeoPackage, ...)

        Returns:
            FeatureCollection, a fresh copy on every call
        """
        path = Path(path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"No vector file at {path}")
        mtime = path.stat().st_mtime

        cached = self._cache.get(path)
        if cached is not None and cached[0] == mtime:
            logger.debug("Using cached %s", path)
            return copy.deepcopy(cached[1])

        if path.suffix.lower() in GEOJSON_SUFFIXES:
            with open(path, "r") as f:
                data = json.load(f)
            fc = _as_feature_collection(data, path)
        else:
            fc = from_geodataframe(gpd.read_file(path))
        logger.debug("Read %d features from %s", len(fc["features"]), path)

        self._cache[path] = (mtime, fc)
        return copy.deepcopy(fc)

    def write(self, fc: dict, path: PathLike, driver: Optional[str] = None) -> Path:
        """
        Write a FeatureCollection to disk.

        Args:
            fc: FeatureCollection
            path: Destination; .geojson/.json are written as GeoJSON text,
                other suffixes through geopandas
            driver: OGR driver for non-GeoJSON files, guessed from the suffix when None

        Returns:
            Path written
        """
        path = Path(path)
        if not fc or fc.get("type") != "FeatureCollection":
            raise InvalidGeoJSONError("fc must be a FeatureCollection")

        if path.suffix.lower() in GEOJSON_SUFFIXES:
            with open(path, "w") as f:
                json.dump(fc, f)
        else:
            to_geodataframe(fc).to_file(path, driver=driver)
        logger.debug("Wrote %d features to %s", len(fc["features"]), path)
        self._cache.pop(path.resolve(), None)
        return path


def _as_feature_collection(data: dict, path: Path) -> dict:
    """Wrap a Feature or bare geometry read from disk into a FeatureCollection."""
    gtype = data.get("type") if isinstance(data, dict) else None
    if gtype == "FeatureCollection":
        return data
    if gtype == "Feature":
        return {"type": "FeatureCollection", "features": [data]}
    if gtype:
        return {"type": "FeatureCollection", "features": [{"type": "Feature", "properties": {}, "geometry": data}]}
    raise InvalidGeoJSONError(f"{path} does not hold GeoJSON")


# Global data service instance
_data_service: Optional[VectorDataService] = None


def get_data_service() -> VectorDataService:
    """Get the global data service instance."""
    global _data_service
    if _data_service is None:
        _data_service = VectorDataService()
    return _data_service


# Convenience functions
def read_geojson(path: PathLike) -> dict:
    """Read a vector file into a FeatureCollection."""
    return get_data_service().read(path)


def write_geojson(fc: dict, path: PathLike, driver: Optional[str] = None) -> Path:
    """Write a FeatureCollection to disk."""
    return get_data_service().write(fc, path, driver)
