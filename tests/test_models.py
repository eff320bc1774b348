"""Tests for pydantic models and derived values."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pilotlog.models import Airport, calculate_duration

from conftest import make_flight

T = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


class TestCalculateDuration:
    def test_minutes(self):
        assert calculate_duration(T, T + timedelta(hours=1, minutes=25)) == 85

    def test_rounds_to_nearest_minute(self):
        assert calculate_duration(T, T + timedelta(minutes=10, seconds=40)) == 11

    def test_missing_end(self):
        assert calculate_duration(T, None) is None
        assert calculate_duration(None, T) is None


class TestAirport:
    def test_coordinates(self):
        assert Airport(icao="EGTK", name="Oxford", lat=51.8, lon=-1.3).coordinates == (-1.3, 51.8)

    def test_coordinates_missing(self):
        assert Airport(icao="EGTK", name="Oxford", lat=51.8).coordinates is None


class TestFlight:
    def test_defaults(self):
        f = make_flight("f1", day_landings=0)
        assert f.night_landings == 0
        assert f.duration_block is None
        assert f.notes is None

    def test_total_landings(self):
        assert make_flight("f1", day_landings=2, night_landings=3).total_landings == 5
