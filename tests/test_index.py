"""
Unit Tests for Neighbor Indexes (geocluster.spatial.index)

Tests the grid index against the brute-force scan and the query contract
shared by both.
"""

import pytest

from geocluster.spatial.geo import Point, haversine_km, points_from_coordinates
from geocluster.spatial.index import BruteForceNeighborIndex, GridNeighborIndex


INDEX_TYPES = [GridNeighborIndex, BruteForceNeighborIndex]


# ==============================================================================
# Query Contract Tests
# ==============================================================================

@pytest.mark.parametrize("index_cls", INDEX_TYPES)
class TestNeighborQueryContract:
    """Behaviour every NeighborIndex must provide."""

    def test_self_is_included(self, index_cls, tight_group_with_outlier):
        index = index_cls(tight_group_with_outlier, 1.0)
        for i in range(len(tight_group_with_outlier)):
            assert i in index.neighbors_within(i, 1.0)

    def test_tight_group_and_outlier(self, index_cls, tight_group_with_outlier):
        index = index_cls(tight_group_with_outlier, 1.0)
        assert index.neighbors_within(0, 1.0) == frozenset({0, 1, 2, 3, 4})
        assert index.neighbors_within(5, 1.0) == frozenset({5})

    def test_duplicates_are_distinct_entries(self, index_cls, coincident_points):
        index = index_cls(coincident_points, 0.001)
        assert index.neighbors_within(2, 0.001) == frozenset(range(5))

    def test_zero_radius_returns_coincident_points_only(self, index_cls):
        points = points_from_coordinates([(10.0, 10.0), (10.0, 10.0), (10.00001, 10.0)])
        index = index_cls(points, 0.0)
        assert index.neighbors_within(0, 0.0) == frozenset({0, 1})
        assert index.neighbors_within(2, 0.0) == frozenset({2})

    def test_empty_index_answers_empty(self, index_cls):
        index = index_cls([], 1.0)
        assert len(index) == 0
        assert index.neighbors_within(0, 1.0) == frozenset()
        assert index.neighbors_within(7, 5.0) == frozenset()

    def test_all_singletons(self, index_cls):
        points = points_from_coordinates([(0.0, float(i)) for i in range(10)])
        index = index_cls(points, 1.0)
        for i in range(10):
            assert index.neighbors_within(i, 1.0) == frozenset({i})

    def test_radius_boundary(self, index_cls):
        a, b = Point(0.0, 0.0, 0), Point(0.0, 0.01, 1)
        d = haversine_km(a, b)
        index = index_cls([a, b], d)
        assert index.neighbors_within(0, d * (1 + 1e-9)) == frozenset({0, 1})
        assert index.neighbors_within(0, d * (1 - 1e-9)) == frozenset({0})

    def test_repeated_queries_are_stable(self, index_cls, two_blobs_and_noise):
        index = index_cls(two_blobs_and_noise, 1.0)
        first = [index.neighbors_within(i, 1.0) for i in range(len(index))]
        second = [index.neighbors_within(i, 1.0) for i in range(len(index))]
        assert first == second

    def test_negative_radius_rejected(self, index_cls, tight_group_with_outlier):
        index = index_cls(tight_group_with_outlier, 1.0)
        with pytest.raises(ValueError):
            index.neighbors_within(0, -1.0)

    def test_out_of_range_index(self, index_cls, tight_group_with_outlier):
        index = index_cls(tight_group_with_outlier, 1.0)
        with pytest.raises(IndexError):
            index.neighbors_within(len(tight_group_with_outlier), 1.0)


# ==============================================================================
# Grid vs Brute Force
# ==============================================================================

class TestGridMatchesBruteForce:
    """The grid must return exactly what the full scan returns."""

    @pytest.mark.parametrize("epsilon_km", [0.5, 50.0, 800.0, 5000.0])
    def test_global_points(self, global_points, epsilon_km):
        grid = GridNeighborIndex(global_points, epsilon_km)
        brute = BruteForceNeighborIndex(global_points)
        for i in range(len(global_points)):
            assert grid.neighbors_within(i, epsilon_km) == brute.neighbors_within(i, epsilon_km)

    def test_pole_points_are_neighbors(self, global_points):
        grid = GridNeighborIndex(global_points, 1.0)
        # (90, 0) and (90, 45) are the same place
        north = len(global_points) - 9
        assert north + 1 in grid.neighbors_within(north, 1.0)

    def test_antimeridian_points_are_neighbors(self, global_points):
        grid = GridNeighborIndex(global_points, 1.0)
        east = len(global_points) - 4
        assert grid.neighbors_within(east, 1.0) >= {east, east + 1}

    @pytest.mark.parametrize("epsilon_km", [0.2, 1.0, 3.0])
    def test_dense_blobs(self, blobs, epsilon_km):
        points = points_from_coordinates(blobs)
        grid = GridNeighborIndex(points, epsilon_km)
        brute = BruteForceNeighborIndex(points)
        for i in range(len(points)):
            assert grid.neighbors_within(i, epsilon_km) == brute.neighbors_within(i, epsilon_km)

    def test_query_wider_than_cell(self, blobs):
        """A grid built for a small radius still answers larger queries."""
        points = points_from_coordinates(blobs)
        grid = GridNeighborIndex(points, 0.1)
        brute = BruteForceNeighborIndex(points)
        for i in range(0, len(points), 7):
            assert grid.neighbors_within(i, 2.5) == brute.neighbors_within(i, 2.5)

    def test_radius_beyond_half_circumference(self, global_points):
        grid = GridNeighborIndex(global_points, 25000.0)
        assert grid.neighbors_within(0, 25000.0) == frozenset(range(len(global_points)))


class TestGridStructure:
    """Test grid bucketing."""

    @pytest.fixture
    def separated_groups(self):
        """Ten groups 4 degrees of latitude apart, 100 points each within ~1 m."""
        coords = [
            (g * 4.0 + (i % 10) * 1e-6, 10.0 + (i // 10) * 1e-6)
            for g in range(10)
            for i in range(100)
        ]
        return points_from_coordinates(coords)

    def test_candidates_limited_to_nearby_cells(self, separated_groups):
        grid = GridNeighborIndex(separated_groups, 1.0)
        assert len(grid._candidates(0, 1.0)) == 100
        assert len(grid._candidates(950, 1.0)) == 100
        assert grid.neighbors_within(0, 1.0) == frozenset(range(100))

    def test_wide_query_candidates_limited_to_nearby_cells(self, separated_groups):
        """A block wider than the grid still skips far-away cells."""
        grid = GridNeighborIndex(separated_groups, 0.1)
        assert len(grid._candidates(0, 2.5)) == 100
        assert grid.neighbors_within(0, 2.5) == frozenset(range(100))

    def test_coincident_points_share_a_cell(self, coincident_points):
        grid = GridNeighborIndex(coincident_points, 0.001)
        assert grid.num_cells == 1

    def test_distant_points_use_separate_cells(self):
        points = points_from_coordinates([(0.0, 0.0), (0.0, 90.0), (45.0, 0.0)])
        grid = GridNeighborIndex(points, 1.0)
        assert grid.num_cells == 3

    def test_negative_cell_rejected(self):
        with pytest.raises(ValueError):
            GridNeighborIndex([Point(0.0, 0.0)], -1.0)

    def test_points_are_kept_in_order(self, tight_group_with_outlier):
        grid = GridNeighborIndex(tight_group_with_outlier, 1.0)
        assert grid.points == tuple(tight_group_with_outlier)
