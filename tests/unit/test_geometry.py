"""Unit tests for geometry helpers."""

import pytest

from rerail.core.geometry import (
    Rect,
    distance_sq_point_segment,
    distance_sq_points,
    segment_length,
    station_tick,
)


class TestDistances:
    def test_point_distance(self):
        assert distance_sq_points((0, 0), (3, 4)) == 25

    def test_segment_distance_projects_inside(self):
        assert distance_sq_point_segment((0, 0), (10, 0), (5, 3)) == pytest.approx(9)

    def test_segment_distance_clamps_to_endpoints(self):
        assert distance_sq_point_segment((0, 0), (10, 0), (13, 4)) == pytest.approx(25)
        assert distance_sq_point_segment((0, 0), (10, 0), (-3, 0)) == pytest.approx(9)

    def test_degenerate_segment(self):
        assert distance_sq_point_segment((2, 2), (2, 2), (5, 6)) == pytest.approx(25)

    def test_segment_length(self):
        assert segment_length((0, 0), (3000, 4000)) == pytest.approx(5000)


class TestRect:
    @pytest.fixture
    def rect(self):
        return Rect(top=0, bottom=100, left=0, right=200)

    def test_contains_is_exclusive(self, rect):
        assert rect.contains((50, 50))
        assert not rect.contains((0, 50))
        assert not rect.contains((50, 100))

    def test_segment_with_endpoint_inside(self, rect):
        assert rect.crosses_segment((50, 50), (500, 500))

    def test_segment_passing_through(self, rect):
        assert rect.crosses_segment((-50, 50), (250, 50))
        assert rect.crosses_segment((100, -10), (100, 300))

    def test_diagonal_segment_through(self, rect):
        assert rect.crosses_segment((-10, -10), (300, 150))

    def test_segment_outside(self, rect):
        assert not rect.crosses_segment((-50, -50), (-10, 300))
        assert not rect.crosses_segment((300, -10), (500, 50))

    def test_segment_missing_corner(self, rect):
        # Passes the top-right corner on the outside.
        assert not rect.crosses_segment((150, -60), (260, 50))


class TestStationTick:
    def test_horizontal_railway_gets_vertical_tick(self):
        a, b = station_tick((0, 0), (10, 0), (20, 0), 5)
        assert {a, b} == {(10, -5), (10, 5)}

    def test_end_point_uses_single_neighbour(self):
        a, b = station_tick(None, (0, 0), (0, 10), 5)
        assert {a, b} == {(-5, 0), (5, 0)}

    def test_isolated_point(self):
        a, b = station_tick(None, (7, 7), None, 5)
        assert {a, b} == {(2, 7), (12, 7)}
