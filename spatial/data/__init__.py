"""
Data package for spatial.
Vector file IO and GeoDataFrame conversion.
"""

from spatial.data.loaders import (
    VectorDataService,
    get_data_service,
    read_geojson,
    write_geojson,
    to_geodataframe,
    from_geodataframe,
)

__all__ = [
    "VectorDataService",
    "get_data_service",
    "read_geojson",
    "write_geojson",
    "to_geodataframe",
    "from_geodataframe",
]
