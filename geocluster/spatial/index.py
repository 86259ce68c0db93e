"""
Neighbor queries over a fixed set of geographic points.

Two interchangeable implementations of :class:`NeighborIndex`:

- :class:`GridNeighborIndex` buckets points into cubic cells laid over their
  unit-sphere (x, y, z) coordinates. The cell side is the chord length of the
  query radius, so any point within the radius lies in the query point's cell
  or one of the 26 cells around it. Working in 3D avoids the longitude cell
  width shrinking towards the poles and the seam at the antimeridian.
- :class:`BruteForceNeighborIndex` compares against every point.

Both answer with the exact haversine distance test ``distance <= radius``.
"""

from __future__ import annotations

import itertools
import math
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, FrozenSet, List, Sequence, Tuple

import numpy as np

from .geo import Point, chord_length, haversine_km_many

CellKey = Tuple[int, int, int]

# Floor for the cell side so a zero radius still produces a usable grid.
_MIN_CELL_SIZE = 1e-12

# Relative slack on the cell side; rounding in the Cartesian projection must
# never drop a candidate that the haversine test would accept.
_SLACK = 1e-9


class NeighborIndex(ABC):
    """Answers "which points lie within ``epsilon_km`` of point ``i``"."""

    def __init__(self, points: Sequence[Point]) -> None:
        self._points = tuple(points)
        self._lat_rad = np.radians(np.array([p.lat for p in self._points], dtype=float))
        self._lng_rad = np.radians(np.array([p.lng for p in self._points], dtype=float))

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    def neighbors_within(self, point_index: int, epsilon_km: float) -> FrozenSet[int]:
        """Return indices of every point (self included) within ``epsilon_km``.

        Raises:
            ValueError: if ``epsilon_km`` is negative
            IndexError: if ``point_index`` is not a position in a non-empty index
        """
        if epsilon_km < 0:
            raise ValueError(f"Radius must be non-negative, got {epsilon_km}")
        if not self._points:
            return frozenset()
        if not 0 <= point_index < len(self._points):
            raise IndexError(f"Point index {point_index} out of range for {len(self._points)} points")

        candidates = self._candidates(point_index, epsilon_km)
        if candidates.size == 0:
            return frozenset()
        distances = haversine_km_many(
            self._lat_rad[point_index],
            self._lng_rad[point_index],
            self._lat_rad[candidates],
            self._lng_rad[candidates],
        )
        return frozenset(candidates[distances <= epsilon_km].tolist())

    @abstractmethod
    def _candidates(self, point_index: int, epsilon_km: float) -> np.ndarray:
        """Superset of the neighbors of ``point_index`` as an index array."""


class BruteForceNeighborIndex(NeighborIndex):
    """Reference index: every query scans all points.

    ``cell_km`` is accepted and ignored so the class can be passed wherever a
    ``(points, epsilon_km)`` index factory is expected.
    """

    def __init__(self, points: Sequence[Point], cell_km: float = 0.0) -> None:
        super().__init__(points)
        self._all = np.arange(len(self._points))

    def _candidates(self, point_index: int, epsilon_km: float) -> np.ndarray:
        return self._all


class GridNeighborIndex(NeighborIndex):
    """Cell-bucketed index sized for queries of radius ``cell_km``.

    Queries with a larger radius remain correct; they scan a wider block of
    cells. Once that block has more cells than the grid has occupied cells,
    the occupied cells are filtered by their distance in cells instead.
    """

    def __init__(self, points: Sequence[Point], cell_km: float) -> None:
        super().__init__(points)
        if cell_km < 0:
            raise ValueError(f"Cell size must be non-negative, got {cell_km}")

        self._cell_size = max(chord_length(cell_km) * (1.0 + _SLACK), _MIN_CELL_SIZE)
        cos_lat = np.cos(self._lat_rad)
        xyz = np.column_stack(
            [cos_lat * np.cos(self._lng_rad), cos_lat * np.sin(self._lng_rad), np.sin(self._lat_rad)]
        )
        keys = np.floor(xyz / self._cell_size).astype(np.int64)

        self._keys: List[CellKey] = [tuple(key) for key in keys.tolist()]
        cells: Dict[CellKey, List[int]] = defaultdict(list)
        for i, key in enumerate(self._keys):
            cells[key].append(i)
        self._cells = {key: np.array(members, dtype=np.int64) for key, members in cells.items()}

    @property
    def num_cells(self) -> int:
        """Number of occupied cells."""
        return len(self._cells)

    def _reach(self, epsilon_km: float) -> int:
        ratio = chord_length(epsilon_km) / self._cell_size
        return max(1, int(math.ceil(ratio * (1.0 + _SLACK / 2.0))))

    def _candidates(self, point_index: int, epsilon_km: float) -> np.ndarray:
        reach = self._reach(epsilon_km)
        kx, ky, kz = self._keys[point_index]
        if (2 * reach + 1) ** 3 > len(self._cells):
            blocks = [
                members
                for (cx, cy, cz), members in self._cells.items()
                if max(abs(cx - kx), abs(cy - ky), abs(cz - kz)) <= reach
            ]
            return np.concatenate(blocks)

        offsets = range(-reach, reach + 1)
        blocks = [
            self._cells[key]
            for key in (
                (kx + dx, ky + dy, kz + dz)
                for dx, dy, dz in itertools.product(offsets, offsets, offsets)
            )
            if key in self._cells
        ]
        return np.concatenate(blocks)


__all__ = [
    "BruteForceNeighborIndex",
    "GridNeighborIndex",
    "NeighborIndex",
]
