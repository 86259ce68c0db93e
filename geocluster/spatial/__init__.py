"""
geocluster.spatial: Distance model, neighbor index and DBSCAN clustering.

This module provides density-based clustering of (lat, lng) points with
deterministic cluster ids.
"""

from .clustering import (
    ClusterAssignment,
    ClusterInfo,
    ClusteringConfig,
    ClusteringDiagnostics,
    cluster,
    cluster_dataframe,
    cluster_points,
    describe_clusters,
    diagnose,
)
from .dbscan import NOISE, InvalidParameter, expand_clusters, validate_parameters
from .geo import (
    EARTH_RADIUS_KM,
    InvalidCoordinate,
    Point,
    haversine_km,
    points_from_columns,
    points_from_coordinates,
)
from .index import BruteForceNeighborIndex, GridNeighborIndex, NeighborIndex

__all__ = [
    "BruteForceNeighborIndex",
    "ClusterAssignment",
    "ClusterInfo",
    "ClusteringConfig",
    "ClusteringDiagnostics",
    "EARTH_RADIUS_KM",
    "GridNeighborIndex",
    "InvalidCoordinate",
    "InvalidParameter",
    "NOISE",
    "NeighborIndex",
    "Point",
    "cluster",
    "cluster_dataframe",
    "cluster_points",
    "describe_clusters",
    "diagnose",
    "expand_clusters",
    "haversine_km",
    "points_from_columns",
    "points_from_coordinates",
    "validate_parameters",
]
