"""API endpoints for airport reference data."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from pilotlog.airport_cache import filter_airports
from pilotlog.db.deps import get_db
from pilotlog.models import Airport
from pilotlog.storage.airports import list_airports, load_airport

router = APIRouter(prefix="/airports", tags=["airports"])


@router.get("", response_model=list[Airport])
def get_all_airports(db: Session = Depends(get_db)):
    """Every airport, ordered by ICAO. Clients cache this list locally."""
    return list_airports(db)


@router.get("/search", response_model=list[Airport])
def search_airports(q: str = "", db: Session = Depends(get_db)):
    """Autocomplete match on ICAO, IATA or name (at most 20 results)."""
    return filter_airports(list_airports(db), q)


@router.get("/{icao}", response_model=Airport)
def get_airport(
    icao: str = Path(min_length=4, max_length=4),
    db: Session = Depends(get_db),
):
    try:
        return load_airport(db, icao)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Airport '{icao.upper()}' not found")
