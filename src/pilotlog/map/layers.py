"""GeoJSON layers for the flight map."""

from __future__ import annotations

import json
from typing import Any

from pilotlog.map.curves import generate_curved_path
from pilotlog.models import Coordinates, FlightPath


def parse_point(value: Any) -> Coordinates | None:
    """Extract (lon, lat) from a GeoJSON Point given as a dict or JSON text.

    Returns None for anything that is not a well-formed Point.
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return None
    if not isinstance(value, dict) or value.get("type") != "Point":
        return None
    coords = value.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None
    try:
        return (float(coords[0]), float(coords[1]))
    except (TypeError, ValueError):
        return None


def route_offsets(paths: list[FlightPath]) -> list[int]:
    """Index of each flight within the group sharing its departure/arrival pair."""
    seen: dict[tuple[str, str], int] = {}
    offsets = []
    for path in paths:
        key = (path.dep_airport, path.arr_airport)
        offsets.append(seen.get(key, 0))
        seen[key] = seen.get(key, 0) + 1
    return offsets


def _flight_properties(path: FlightPath, offset: int) -> dict[str, Any]:
    return {
        "kind": "route",
        "flight_id": path.id,
        "flight_number": path.flight_number,
        "dep_airport": path.dep_airport,
        "arr_airport": path.arr_airport,
        "aircraft_type": path.aircraft_type,
        "aircraft_reg": path.aircraft_reg,
        "duration_flight": path.duration_flight,
        "day_landings": path.day_landings,
        "night_landings": path.night_landings,
        "notes": path.notes,
        "offset": offset,
    }


def _marker(coords: Coordinates, path: FlightPath, role: str) -> dict[str, Any]:
    if role == "departure":
        code, name = path.dep_airport, path.dep_airport_name
    else:
        code, name = path.arr_airport, path.arr_airport_name
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": list(coords)},
        "properties": {
            "kind": "airport",
            "role": role,
            "flight_id": path.id,
            "icao": code,
            "name": name,
        },
    }


def build_flight_map(paths: list[FlightPath], segments: int = 50) -> dict[str, Any]:
    """Build a GeoJSON FeatureCollection with a curved line per flight.

    Each rendered flight contributes a LineString plus departure and arrival
    markers at the unmodified endpoints. Flights missing either location are
    left out.
    """
    features: list[dict[str, Any]] = []
    endpoints: list[Coordinates] = []

    for path, offset in zip(paths, route_offsets(paths)):
        dep, arr = path.dep_location, path.arr_location
        if dep is None or arr is None:
            continue

        line = generate_curved_path(dep, arr, offset, segments)
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [list(p) for p in line],
            },
            "properties": _flight_properties(path, offset),
        })
        features.append(_marker(dep, path, "departure"))
        features.append(_marker(arr, path, "arrival"))
        endpoints.extend([dep, arr])

    collection: dict[str, Any] = {"type": "FeatureCollection", "features": features}
    if endpoints:
        lons = [p[0] for p in endpoints]
        lats = [p[1] for p in endpoints]
        collection["bbox"] = [min(lons), min(lats), max(lons), max(lats)]
    return collection
