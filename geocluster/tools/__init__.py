"""Configuration, column detection and CSV I/O around the clustering core."""

from .columns import (
    CoordinateColumns,
    CoordinateColumnsNotFound,
    detect_coordinate_columns,
)
from .config_loader import ConfigLoader, get_clustering_config
from .io import read_locations, write_clustered

__all__ = [
    "ConfigLoader",
    "CoordinateColumns",
    "CoordinateColumnsNotFound",
    "detect_coordinate_columns",
    "get_clustering_config",
    "read_locations",
    "write_clustered",
]
