"""Airport reference data access."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.orm import Session

from pilotlog.db.models import AirportRow
from pilotlog.map.layers import parse_point
from pilotlog.models import Airport

logger = logging.getLogger(__name__)


def _row_to_airport(row: AirportRow) -> Airport:
    return Airport(icao=row.icao, iata=row.iata, name=row.name, lat=row.lat, lon=row.lon)


def list_airports(session: Session) -> list[Airport]:
    """All airports, ordered by ICAO code."""
    rows = session.execute(select(AirportRow).order_by(AirportRow.icao)).scalars().all()
    return [_row_to_airport(r) for r in rows]


def load_airport(session: Session, icao: str) -> Airport:
    """Load an airport by ICAO code. Raises KeyError if not found."""
    row = session.get(AirportRow, icao.upper())
    if row is None:
        raise KeyError(f"Airport not found: {icao}")
    return _row_to_airport(row)


def save_airport(session: Session, airport: Airport) -> None:
    """Insert or update an airport row."""
    row = session.get(AirportRow, airport.icao)
    if row is None:
        row = AirportRow(icao=airport.icao)
        session.add(row)
    row.iata = airport.iata
    row.name = airport.name
    row.lat = airport.lat
    row.lon = airport.lon
    session.flush()


def _parse_csv_row(record: dict[str, str]) -> Airport:
    """Build an Airport from a CSV record.

    Coordinates come from ``lat``/``lon`` columns, or from a ``location``
    column holding a GeoJSON Point as exported by PostGIS.
    """
    lat = lon = None
    if record.get("lat") and record.get("lon"):
        lat, lon = float(record["lat"]), float(record["lon"])
    else:
        point = parse_point(record.get("location"))
        if point is not None:
            lon, lat = point

    return Airport(
        icao=record["icao"].strip().upper(),
        iata=(record.get("iata") or "").strip().upper() or None,
        name=record["name"].strip(),
        lat=lat,
        lon=lon,
    )


def import_airports_csv(session: Session, path: Path) -> int:
    """Upsert airports from a CSV file with a header row. Returns the row count.

    Rows whose ICAO code is not 4 characters are skipped with a warning.
    """
    count = 0
    with open(path, newline="", encoding="utf-8") as f:
        for line_no, record in enumerate(csv.DictReader(f), start=2):
            airport = _parse_csv_row(record)
            if len(airport.icao) != 4:
                logger.warning("Skipping line %d: invalid ICAO %r", line_no, airport.icao)
                continue
            save_airport(session, airport)
            count += 1
    logger.info("Imported %d airports from %s", count, path)
    return count
