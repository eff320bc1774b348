"""Client-side airport reference cache with a fixed freshness window.

The full airport list is fetched once and kept in a persistent store so that
autocomplete lookups do not go back to the server on every keystroke or
every run. Entries older than the TTL are deleted on read and refetched.
"""

from __future__ import annotations

import json
import logging
import math
import time
from typing import Callable, Protocol

from pydantic import ValidationError

from pilotlog.models import Airport

logger = logging.getLogger(__name__)

AIRPORT_CACHE_TTL = 12 * 60 * 60  # seconds
AIRPORT_CACHE_KEY = "pilotlog_airport_cache_v1"

MIN_QUERY_LENGTH = 2
MAX_FILTER_RESULTS = 20


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class AirportCache:
    """Staleness-aware cache of the full airport list.

    Args:
        fetcher: Returns every airport from the authoritative source.
            Any exception it raises is treated as a transient failure.
        store: Persistent keyed store holding one serialized entry.
        clock: Returns the current time in seconds since the epoch.
        ttl_seconds: Maximum age of an entry before it is discarded.
        key: Store key for the entry.
    """

    def __init__(
        self,
        fetcher: Callable[[], list[Airport]],
        store: KeyValueStore,
        clock: Callable[[], float] = time.time,
        ttl_seconds: float = AIRPORT_CACHE_TTL,
        key: str = AIRPORT_CACHE_KEY,
    ):
        self.fetcher = fetcher
        self.store = store
        self.clock = clock
        self.ttl_seconds = ttl_seconds
        self.key = key

    def _read_entry(self) -> list[Airport] | None:
        """Return cached airports if a fresh entry exists, else None."""
        try:
            raw = self.store.get_item(self.key)
        except OSError:
            logger.warning("Airport cache store unreadable", exc_info=True)
            return None
        except UnicodeDecodeError:
            logger.warning("Ignoring airport cache entry that is not valid UTF-8")
            return None
        if raw is None:
            return None

        try:
            entry = json.loads(raw)
            timestamp = float(entry["timestamp"])
            airports = [Airport.model_validate(a) for a in entry["data"]]
        except (ValueError, TypeError, KeyError, ValidationError):
            logger.warning("Ignoring corrupt airport cache entry")
            return None
        if not math.isfinite(timestamp):
            logger.warning("Ignoring airport cache entry with timestamp %r", timestamp)
            return None

        age = self.clock() - timestamp
        if age < 0:
            # Stamped in the future: cannot prove freshness.
            logger.debug("Airport cache entry has a future timestamp, ignoring")
            return None
        if age > self.ttl_seconds:
            logger.debug("Airport cache expired (age %.0fs)", age)
            self._remove_entry()
            return None
        return airports

    def _write_entry(self, airports: list[Airport]) -> None:
        entry = {
            "data": [a.model_dump() for a in airports],
            "timestamp": self.clock(),
        }
        try:
            self.store.set_item(self.key, json.dumps(entry))
        except OSError:
            logger.warning("Failed to persist airport cache", exc_info=True)

    def _remove_entry(self) -> None:
        try:
            self.store.remove_item(self.key)
        except OSError:
            logger.warning("Failed to remove airport cache entry", exc_info=True)

    def get_cached_airports(self, force_refresh: bool = False) -> list[Airport]:
        """Return all airports, from the cache when fresh, otherwise refetched.

        Returns an empty list if the fetch fails. Callers should read an empty
        result as "temporarily unavailable", not "no airports exist".
        """
        if not force_refresh:
            cached = self._read_entry()
            if cached is not None:
                return cached

        try:
            airports = list(self.fetcher())
        except Exception:
            logger.warning("Airport list fetch failed", exc_info=True)
            return []

        self._write_entry(airports)
        logger.info("Airport cache refreshed (%d airports)", len(airports))
        return airports

    def preload_airports(self) -> None:
        """Warm the cache ahead of use. Never raises."""
        try:
            self.get_cached_airports()
        except Exception:
            logger.warning("Failed to preload airports", exc_info=True)

    def clear_airport_cache(self) -> None:
        """Delete the persisted entry so the next read fetches."""
        self._remove_entry()


def filter_airports(airports: list[Airport], query: str) -> list[Airport]:
    """Case-insensitive substring match on ICAO, IATA and name.

    Queries shorter than two characters match nothing. At most 20 airports
    are returned, in input order.
    """
    if len(query) < MIN_QUERY_LENGTH:
        return []

    needle = query.casefold()
    matches: list[Airport] = []
    for airport in airports:
        if (
            needle in airport.icao.casefold()
            or (airport.iata and needle in airport.iata.casefold())
            or needle in airport.name.casefold()
        ):
            matches.append(airport)
            if len(matches) >= MAX_FILTER_RESULTS:
                break
    return matches
