"""Tests for curved route line generation."""

from __future__ import annotations

import pytest

from pilotlog.map.curves import bulge_for, generate_curved_path

LHR = (-0.4619, 51.4706)
JFK = (-73.7789, 40.6398)
CDG = (2.5479, 49.0097)


def _side(start, end, point) -> float:
    """Signed perpendicular displacement of point from the start->end line."""
    return (end[0] - start[0]) * (point[1] - start[1]) - (end[1] - start[1]) * (point[0] - start[0])


class TestGenerateCurvedPath:
    @pytest.mark.parametrize("offset", [0, 1, 2, 5])
    @pytest.mark.parametrize("segments", [1, 10, 50])
    def test_point_count_and_exact_endpoints(self, offset, segments):
        points = generate_curved_path(LHR, JFK, offset, segments)
        assert len(points) == segments + 1
        assert points[0] == LHR
        assert points[-1] == JFK

    def test_default_segments(self):
        assert len(generate_curved_path(LHR, CDG)) == 51

    def test_offsets_zero_and_one_on_opposite_sides(self):
        even = generate_curved_path(LHR, JFK, offset=0, segments=10)
        odd = generate_curved_path(LHR, JFK, offset=1, segments=10)
        assert _side(LHR, JFK, even[5]) * _side(LHR, JFK, odd[5]) < 0

    def test_even_offsets_share_a_side(self):
        a = generate_curved_path(LHR, CDG, offset=0, segments=10)
        b = generate_curved_path(LHR, CDG, offset=2, segments=10)
        assert _side(LHR, CDG, a[5]) * _side(LHR, CDG, b[5]) > 0

    def test_separation_grows_with_offset(self):
        def mid_displacement(offset):
            points = generate_curved_path(LHR, CDG, offset=offset, segments=10)
            return abs(_side(LHR, CDG, points[5]))

        assert mid_displacement(0) < mid_displacement(2) < mid_displacement(4)

    def test_odd_offsets_also_spread_out(self):
        def mid_displacement(offset):
            points = generate_curved_path(LHR, CDG, offset=offset, segments=10)
            return abs(_side(LHR, CDG, points[5]))

        assert mid_displacement(1) < mid_displacement(3) < mid_displacement(5)

    def test_short_route_odd_offsets_distinct(self):
        assert generate_curved_path(LHR, CDG, 1, 10) != generate_curved_path(LHR, CDG, 3, 10)

    def test_mirrored_offsets_same_size(self):
        mid0 = generate_curved_path(LHR, CDG, 0, 10)[5]
        mid1 = generate_curved_path(LHR, CDG, 1, 10)[5]
        assert _side(LHR, CDG, mid0) == pytest.approx(-_side(LHR, CDG, mid1))

    def test_coincident_endpoints(self):
        points = generate_curved_path(LHR, LHR, 0, 10)
        assert points == [LHR] * 11

    def test_deterministic(self):
        assert generate_curved_path(LHR, JFK, 3) == generate_curved_path(LHR, JFK, 3)

    def test_midpoint_bulges_away_from_straight_line(self):
        points = generate_curved_path((0.0, 0.0), (10.0, 0.0), offset=0, segments=2)
        # Even offset bulges to the left of an eastbound line, i.e. north.
        mid_lon, mid_lat = points[1]
        assert mid_lon == pytest.approx(5.0)
        bulge, _ = bulge_for(10.0, 0)
        assert mid_lat == pytest.approx(bulge / 2)

    def test_negative_offset_rejected(self):
        with pytest.raises(ValueError):
            generate_curved_path(LHR, JFK, offset=-1)

    def test_zero_segments_rejected(self):
        with pytest.raises(ValueError):
            generate_curved_path(LHR, JFK, segments=0)


class TestBulge:
    def test_base_capped(self):
        bulge, side = bulge_for(1000.0, 0)
        assert bulge == 30 + 8
        assert side == 1

    def test_odd_offset_other_side(self):
        bulge, side = bulge_for(1.0, 1)
        assert side == -1
        assert bulge == pytest.approx(0.2 + 8)

    def test_scales_with_offset_pairs(self):
        assert bulge_for(100.0, 2)[0] == pytest.approx(20 + 16)
        assert bulge_for(100.0, 4)[0] == pytest.approx(20 + 24)

    def test_odd_offsets_grow(self):
        bulges = [bulge_for(200.0, o)[0] for o in (1, 3, 5)]
        assert bulges == sorted(bulges)
        assert bulges[0] < bulges[1] < bulges[2]
