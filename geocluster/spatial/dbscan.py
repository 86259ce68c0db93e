"""
DBSCAN cluster expansion over a :class:`~.index.NeighborIndex`.

Points are processed in input order. The first unvisited core point opens
cluster 0, the next one cluster 1, and so on, so cluster ids depend only on
the input order and the two parameters. Expansion is breadth-first over an
explicit queue.

A point provisionally labelled noise is re-labelled when a later cluster
reaches it, but it never expands that cluster (it is not a core point). A
point that already belongs to a cluster is never re-labelled, so a border
point shared by two clusters stays with the one discovered first.
"""

from __future__ import annotations

import math
import numbers
from collections import deque
from typing import FrozenSet, List, Optional, cast

from .index import NeighborIndex

NOISE = -1
"""Label of points that belong to no cluster."""


class InvalidParameter(ValueError):
    """Clustering parameters outside their valid domain."""


def validate_parameters(epsilon_km: float, min_samples: int) -> None:
    """
    Check the two DBSCAN parameters.

    Args:
        epsilon_km: Neighborhood radius in kilometres, must be finite and > 0
        min_samples: Minimum neighborhood size (self included), must be >= 1

    Raises:
        InvalidParameter: if either parameter is out of range
    """
    if (
        isinstance(epsilon_km, bool)
        or not isinstance(epsilon_km, numbers.Real)
        or not math.isfinite(epsilon_km)
        or epsilon_km <= 0
    ):
        raise InvalidParameter(f"epsilon must be a positive number of kilometres, got {epsilon_km!r}")
    if isinstance(min_samples, bool) or not isinstance(min_samples, numbers.Integral) or min_samples < 1:
        raise InvalidParameter(f"min_samples must be an integer >= 1, got {min_samples!r}")


def _claim(
    neighborhood: FrozenSet[int],
    labels: List[Optional[int]],
    cluster_id: int,
    queue: deque,
) -> None:
    """Label unclaimed neighbors with ``cluster_id``; queue the unvisited ones.

    Noise points were visited already and join as border points. Each point
    enters a queue at most once, when it is first claimed.
    """
    for k in sorted(neighborhood):
        if labels[k] is None:
            labels[k] = cluster_id
            queue.append(k)
        elif labels[k] == NOISE:
            labels[k] = cluster_id


def expand_clusters(index: NeighborIndex, epsilon_km: float, min_samples: int) -> List[int]:
    """
    Label every point of ``index`` with a cluster id or :data:`NOISE`.

    Returns:
        Labels aligned with the index's point order
    """
    validate_parameters(epsilon_km, min_samples)

    n = len(index)
    visited = [False] * n
    labels: List[Optional[int]] = [None] * n
    next_cluster = 0

    for i in range(n):
        if visited[i]:
            continue
        visited[i] = True

        neighborhood = index.neighbors_within(i, epsilon_km)
        if len(neighborhood) < min_samples:
            labels[i] = NOISE
            continue

        cluster_id = next_cluster
        next_cluster += 1
        labels[i] = cluster_id

        queue: deque = deque()
        _claim(neighborhood, labels, cluster_id, queue)
        while queue:
            j = queue.popleft()
            visited[j] = True

            reachable = index.neighbors_within(j, epsilon_km)
            if len(reachable) >= min_samples:
                _claim(reachable, labels, cluster_id, queue)

    return cast(List[int], labels)


__all__ = [
    "InvalidParameter",
    "NOISE",
    "expand_clusters",
    "validate_parameters",
]
