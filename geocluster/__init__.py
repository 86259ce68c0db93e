"""geocluster: density-based clustering of geographic points."""

from .spatial import (
    NOISE,
    ClusterAssignment,
    ClusteringConfig,
    InvalidCoordinate,
    InvalidParameter,
    Point,
    cluster,
)

__version__ = "0.1.0"

__all__ = [
    "NOISE",
    "ClusterAssignment",
    "ClusteringConfig",
    "InvalidCoordinate",
    "InvalidParameter",
    "Point",
    "cluster",
]
