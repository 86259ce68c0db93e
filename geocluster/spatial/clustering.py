"""
Density-based clustering of geographic points.

This module provides:
1. The clustering entry point (``cluster``) that builds the neighbor index
   once and runs DBSCAN expansion over it
2. An immutable, index-aligned result (``ClusterAssignment``)
3. Per-cluster summaries (size, centroid)
4. Diagnostics for reporting (counts, silhouette score, suggestions)
5. A pandas entry point that appends a ``cluster`` column to a frame

Labels are integers: cluster ids start at 0 in discovery order and noise is -1.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import silhouette_score

from .dbscan import NOISE, expand_clusters, validate_parameters
from .geo import Point, points_from_columns
from .index import GridNeighborIndex, NeighborIndex

IndexFactory = Callable[[Sequence[Point], float], NeighborIndex]


@dataclass
class ClusteringConfig:
    """Explicit DBSCAN parameters."""

    epsilon_km: float = 1.0
    """Neighborhood radius in kilometres."""

    min_samples: int = 5
    """Minimum neighborhood size, the point itself included, for a core point."""


@dataclass(frozen=True)
class ClusterAssignment:
    """One label per input point, in input order."""

    labels: Tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[int]:
        return iter(self.labels)

    def __getitem__(self, i: int) -> int:
        return self.labels[i]

    @property
    def num_clusters(self) -> int:
        return max(self.labels, default=NOISE) + 1

    @property
    def num_noise(self) -> int:
        return sum(1 for label in self.labels if label == NOISE)

    def cluster_sizes(self) -> List[int]:
        """Size of each cluster, indexed by cluster id."""
        sizes = [0] * self.num_clusters
        for label in self.labels:
            if label != NOISE:
                sizes[label] += 1
        return sizes

    def members(self, cluster_id: int) -> List[int]:
        """Point positions labelled ``cluster_id``."""
        return [i for i, label in enumerate(self.labels) if label == cluster_id]

    def to_list(self) -> List[int]:
        return list(self.labels)


@dataclass
class ClusterInfo:
    """Information about a single cluster."""

    cluster_id: int
    """Cluster ID (never -1; noise has no ClusterInfo)."""

    size: int
    """Number of points in cluster."""

    centroid_lat: float
    """Latitude of cluster centroid."""

    centroid_lng: float
    """Longitude of cluster centroid."""

    point_indices: List[int] = field(default_factory=list)
    """Input positions of the cluster's points."""


@dataclass
class ClusteringDiagnostics:
    """Summary of a clustering run for reporting."""

    num_points: int
    """Total number of points provided."""

    num_clusters: int
    """Number of clusters found (excluding noise)."""

    num_noise: int
    """Number of noise points (cluster == -1)."""

    cluster_sizes: List[int] = field(default_factory=list)
    """Size of each cluster, by cluster id."""

    silhouette_score: Optional[float] = None
    """Silhouette score over non-noise points (haversine metric), range [-1, 1]."""

    suggestions: List[str] = field(default_factory=list)
    """Actionable suggestions for tuning the parameters."""

    config_used: Optional[ClusteringConfig] = None
    """Parameters of the run."""


def cluster(
    points: Sequence[Point],
    epsilon_km: float,
    min_samples: int,
    *,
    index_factory: IndexFactory = GridNeighborIndex,
) -> ClusterAssignment:
    """
    Assign every point to a density-based cluster or to noise.

    Args:
        points: Points in caller order; label ``i`` belongs to ``points[i]``
        epsilon_km: Neighborhood radius in kilometres (> 0)
        min_samples: Minimum neighborhood size, self included (>= 1)
        index_factory: Builds the neighbor index from ``(points, epsilon_km)``

    Returns:
        ClusterAssignment with ``len(points)`` labels

    Raises:
        InvalidParameter: before any index is built, if a parameter is invalid
    """
    validate_parameters(epsilon_km, min_samples)
    index = index_factory(points, epsilon_km)
    return ClusterAssignment(tuple(expand_clusters(index, epsilon_km, min_samples)))


def cluster_points(
    points: Sequence[Point],
    config: Optional[ClusteringConfig] = None,
) -> ClusterAssignment:
    """Run :func:`cluster` with the parameters held by ``config``."""
    if config is None:
        config = ClusteringConfig()
    return cluster(points, config.epsilon_km, config.min_samples)


def describe_clusters(points: Sequence[Point], assignment: ClusterAssignment) -> List[ClusterInfo]:
    """Build one ClusterInfo per cluster, in cluster id order."""
    infos: List[ClusterInfo] = []
    for cid in range(assignment.num_clusters):
        members = assignment.members(cid)
        infos.append(ClusterInfo(
            cluster_id=cid,
            size=len(members),
            centroid_lat=float(np.mean([points[i].lat for i in members])),
            centroid_lng=float(np.mean([points[i].lng for i in members])),
            point_indices=members,
        ))
    return infos


def _compute_cluster_quality(
    X_rad: np.ndarray,
    labels: np.ndarray,
    num_clusters: int
) -> Optional[float]:
    """
    Compute silhouette score with great-circle distances.

    Returns None if quality cannot be computed (e.g., < 2 clusters).
    """
    if num_clusters < 2:
        return None

    mask = labels != NOISE
    if mask.sum() <= num_clusters:
        return None

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            score = silhouette_score(X_rad[mask], labels[mask], metric="haversine")
        return float(score)
    except ValueError:
        return None


def diagnose(
    points: Sequence[Point],
    assignment: ClusterAssignment,
    config: Optional[ClusteringConfig] = None,
) -> ClusteringDiagnostics:
    """Summarize ``assignment`` with counts, quality and tuning suggestions."""
    num_points = len(assignment)
    num_clusters = assignment.num_clusters
    num_noise = assignment.num_noise
    suggestions: List[str] = []

    silhouette = None
    if num_points:
        X_rad = np.radians(np.array([[p.lat, p.lng] for p in points], dtype=float))
        silhouette = _compute_cluster_quality(X_rad, np.array(assignment.labels), num_clusters)

    if num_points and num_clusters == 0:
        suggestions.append(
            "No dense neighborhoods found. Consider increasing epsilon or reducing min_samples."
        )
    elif num_noise > num_points * 0.5:
        suggestions.append(
            f"High noise ratio ({num_noise}/{num_points} = {num_noise/num_points:.1%}). "
            "Consider increasing epsilon or reducing min_samples."
        )

    if silhouette is not None and silhouette < 0.2:
        suggestions.append(
            f"Low silhouette score ({silhouette:.3f}). Clusters may be poorly separated. "
            "Consider reducing epsilon."
        )

    return ClusteringDiagnostics(
        num_points=num_points,
        num_clusters=num_clusters,
        num_noise=num_noise,
        cluster_sizes=assignment.cluster_sizes(),
        silhouette_score=silhouette,
        suggestions=suggestions,
        config_used=config,
    )


def cluster_dataframe(
    df: pd.DataFrame,
    config: Optional[ClusteringConfig] = None,
    *,
    lat_col: str = "lat",
    lng_col: str = "lng",
) -> Tuple[pd.DataFrame, List[ClusterInfo], ClusteringDiagnostics]:
    """
    Cluster the rows of ``df`` by their coordinates.

    Coordinate columns may hold numbers or numeric text. The input frame is
    left untouched.

    Returns:
        (df_with_clusters, cluster_infos, diagnostics)

    The returned frame has a 'cluster' column with cluster IDs (-1 for noise),
    replacing any existing column of that name.

    Raises:
        InvalidParameter: if the config holds invalid parameters
        InvalidCoordinate: if a coordinate is unparseable or out of range
        KeyError: if a coordinate column is missing
    """
    if config is None:
        config = ClusteringConfig()
    validate_parameters(config.epsilon_km, config.min_samples)

    for column in (lat_col, lng_col):
        if column not in df.columns:
            raise KeyError(f"Missing coordinate column '{column}'")

    points = points_from_columns(df[lat_col].tolist(), df[lng_col].tolist())
    assignment = cluster_points(points, config)

    out = df.copy()
    if "cluster" in out.columns:
        out = out.drop(columns=["cluster"])
    out["cluster"] = np.array(assignment.labels, dtype=np.int64)

    return out, describe_clusters(points, assignment), diagnose(points, assignment, config)


__all__ = [
    "ClusterAssignment",
    "ClusterInfo",
    "ClusteringConfig",
    "ClusteringDiagnostics",
    "cluster",
    "cluster_dataframe",
    "cluster_points",
    "describe_clusters",
    "diagnose",
]
