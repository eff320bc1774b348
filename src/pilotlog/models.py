"""Pydantic v2 models for pilotlog."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

Coordinates = tuple[float, float]  # (lon, lat)


class Airport(BaseModel):
    """A reference airport keyed by its ICAO code."""

    icao: str
    iata: Optional[str] = None
    name: str
    lat: Optional[float] = None
    lon: Optional[float] = None

    @property
    def coordinates(self) -> Coordinates | None:
        """Airport location as (lon, lat), or None when the point is missing."""
        if self.lat is None or self.lon is None:
            return None
        return (self.lon, self.lat)


def calculate_duration(start: datetime | None, end: datetime | None) -> int | None:
    """Whole minutes between two timestamps, or None if either is missing."""
    if start is None or end is None:
        return None
    return round((end - start).total_seconds() / 60)


class Flight(BaseModel):
    """A logged flight owned by one user."""

    id: str
    user_id: str = ""
    flight_number: Optional[str] = None
    aircraft_reg: str
    aircraft_type: str
    dep_airport: str
    arr_airport: str
    block_off: Optional[datetime] = None
    takeoff: Optional[datetime] = None
    landing: Optional[datetime] = None
    block_on: Optional[datetime] = None
    duration_block: Optional[int] = None  # minutes, block_off -> block_on
    duration_flight: Optional[int] = None  # minutes, takeoff -> landing
    day_landings: int = 0
    night_landings: int = 0
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def total_landings(self) -> int:
        return self.day_landings + self.night_landings


class FlightPath(Flight):
    """A flight joined with its departure/arrival airport names and locations."""

    dep_airport_name: str = ""
    dep_location: Optional[Coordinates] = None
    arr_airport_name: str = ""
    arr_location: Optional[Coordinates] = None


class FlightFilters(BaseModel):
    """Optional filters for the flight history table."""

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    aircraft_type: Optional[str] = None
    aircraft_reg: Optional[str] = None
    dep_airport: Optional[str] = None
    arr_airport: Optional[str] = None


class FlightStats(BaseModel):
    """Aggregate totals over a set of flights."""

    total_flights: int = 0
    total_hours: float = 0.0
    total_landings: int = 0
    total_day_landings: int = 0
    total_night_landings: int = 0


class FilterOptions(BaseModel):
    """Distinct values available for the dashboard filter dropdowns."""

    aircraft_types: list[str] = Field(default_factory=list)
    aircraft_regs: list[str] = Field(default_factory=list)
    airports: list[str] = Field(default_factory=list)
