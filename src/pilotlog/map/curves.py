"""Curved route lines for the flight map.

Flights sharing the same departure and arrival would draw on top of each
other as one straight line. Each one instead gets a quadratic Bezier arc,
bulging to alternating sides and further out as the offset index grows.

Distances here are planar, in coordinate degrees. This is a rendering
approximation only, not a geodesic.
"""

from __future__ import annotations

import math

from pilotlog.models import Coordinates

BULGE_SCALE = 0.2  # fraction of the endpoint distance
MAX_BASE_BULGE = 30.0  # degrees
BULGE_STEP = 8.0  # degrees per offset pair
MIN_BULGE = 5.0  # degrees


def bulge_for(distance: float, offset: int) -> tuple[float, int]:
    """Control point displacement and side (+1 left, -1 right) for an offset.

    Even offsets bulge to one side, odd offsets to the other. The
    displacement grows with every pair of offsets, on both sides.
    """
    side = 1 if offset % 2 == 0 else -1
    base = min(distance * BULGE_SCALE, MAX_BASE_BULGE)
    bulge = max(MIN_BULGE, base + (offset // 2 + 1) * BULGE_STEP)
    return bulge, side


def generate_curved_path(
    start: Coordinates,
    end: Coordinates,
    offset: int = 0,
    segments: int = 50,
) -> list[Coordinates]:
    """Sample a curved line from start to end.

    Args:
        start: Departure as (lon, lat).
        end: Arrival as (lon, lat).
        offset: Index of this flight among flights sharing the same endpoints.
        segments: Number of segments; ``segments + 1`` points are returned.

    Returns:
        Points as (lon, lat), first exactly ``start`` and last exactly ``end``.
    """
    if offset < 0:
        raise ValueError("offset must be >= 0")
    if segments < 1:
        raise ValueError("segments must be >= 1")

    start_lon, start_lat = start
    end_lon, end_lat = end

    mid_lon = (start_lon + end_lon) / 2
    mid_lat = (start_lat + end_lat) / 2
    distance = math.hypot(end_lon - start_lon, end_lat - start_lat)

    if distance == 0:
        # No direction to bulge away from: the curve collapses onto the point.
        return [(start_lon, start_lat)] * (segments + 1)

    bulge, side = bulge_for(distance, offset)
    angle = math.atan2(end_lat - start_lat, end_lon - start_lon)
    perp_angle = angle + side * math.pi / 2
    control_lon = mid_lon + math.cos(perp_angle) * bulge
    control_lat = mid_lat + math.sin(perp_angle) * bulge

    points: list[Coordinates] = [(start_lon, start_lat)]
    for i in range(1, segments):
        t = i / segments
        a = (1 - t) ** 2
        b = 2 * (1 - t) * t
        c = t**2
        points.append((
            a * start_lon + b * control_lon + c * end_lon,
            a * start_lat + b * control_lat + c * end_lat,
        ))
    points.append((end_lon, end_lat))
    return points
