"""
Pytest configuration and shared fixtures for geocluster tests.

This file provides:
- Point sets with known clustering outcomes
- Randomized point sets for cross-checks
- CSV writing helpers
"""

import math
from pathlib import Path
from typing import List

import pytest
import numpy as np

from geocluster.spatial.geo import EARTH_RADIUS_KM, Point, points_from_coordinates


KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180.0


# ==============================================================================
# Known Layouts
# ==============================================================================

@pytest.fixture
def tokyo_station() -> Point:
    return Point(35.6812, 139.7671)


@pytest.fixture
def tight_group_with_outlier() -> List[Point]:
    """Five points a few metres apart plus one point ~50 km north."""
    lat, lng = 35.6812, 139.7671
    return points_from_coordinates([
        (lat, lng),
        (lat + 0.00002, lng),
        (lat, lng + 0.00002),
        (lat - 0.00002, lng),
        (lat, lng - 0.00002),
        (lat + 50.0 / KM_PER_DEGREE, lng),
    ])


@pytest.fixture
def coincident_points() -> List[Point]:
    """Five points at (0, 0)."""
    return points_from_coordinates([(0.0, 0.0)] * 5)


@pytest.fixture
def equator_chain() -> List[Point]:
    """Five points along the equator, 0.9 km apart.

    With epsilon = 1 km each point only reaches its direct neighbors, so the
    two ends have neighborhoods of size 2 and the inner points of size 3.
    """
    step = 0.9 / KM_PER_DEGREE
    return points_from_coordinates([(0.0, i * step) for i in range(5)])


@pytest.fixture
def two_blobs_and_noise() -> List[Point]:
    """Two dense groups far apart, with scattered points around them."""
    rng = np.random.default_rng(2024)
    centers = [(35.68, 139.76), (34.69, 135.50)]
    coords = []
    for lat, lng in centers:
        coords.extend(zip(rng.normal(lat, 0.002, 20), rng.normal(lng, 0.002, 20)))
    coords.extend(zip(rng.uniform(33.0, 37.0, 10), rng.uniform(133.0, 141.0, 10)))
    return points_from_coordinates(coords)


# ==============================================================================
# Randomized Point Sets
# ==============================================================================

@pytest.fixture
def global_points() -> List[Point]:
    """Points spread over the globe, including the poles and the antimeridian."""
    rng = np.random.default_rng(7)
    lats = np.degrees(np.arcsin(rng.uniform(-1.0, 1.0, 300)))
    lngs = rng.uniform(-180.0, 180.0, 300)
    coords = list(zip(lats, lngs))
    coords += [
        (90.0, 0.0), (90.0, 45.0), (89.999, -120.0),
        (-90.0, 10.0), (-89.995, 170.0),
        (10.0, 180.0), (10.0, -180.0), (10.001, 179.999), (9.999, -179.999),
    ]
    return points_from_coordinates(coords)


@pytest.fixture
def blobs() -> np.ndarray:
    """Random (lat, lng) degrees: three dense blobs plus uniform background."""
    rng = np.random.default_rng(42)
    parts = [
        np.column_stack([rng.normal(48.85, 0.01, 40), rng.normal(2.35, 0.01, 40)]),
        np.column_stack([rng.normal(48.95, 0.005, 25), rng.normal(2.20, 0.005, 25)]),
        np.column_stack([rng.normal(48.70, 0.02, 60), rng.normal(2.50, 0.02, 60)]),
        np.column_stack([rng.uniform(48.5, 49.2, 40), rng.uniform(1.9, 2.9, 40)]),
    ]
    X = np.vstack(parts)
    return X[rng.permutation(len(X))]


# ==============================================================================
# CSV Helpers
# ==============================================================================

@pytest.fixture
def write_csv(tmp_path: Path):
    """Write ``text`` to a CSV file under tmp_path and return its path."""

    def _write(text: str, name: str = "input.csv") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
