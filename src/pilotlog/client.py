"""HTTP client for the PilotLog API."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

import requests

from pilotlog.models import Airport, Flight, FlightStats

logger = logging.getLogger(__name__)


class LogbookClient:
    """Client for a PilotLog server.

    Every method raises ``requests.HTTPError`` on a non-2xx response.
    """

    def __init__(self, base_url: str, token: str | None = None, timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        resp.raise_for_status()
        return resp

    # --- Airports ---

    def get_all_airports(self) -> list[Airport]:
        resp = self._request("GET", "/api/airports")
        return [Airport.model_validate(a) for a in resp.json()]

    def get_airport(self, icao: str) -> Airport:
        resp = self._request("GET", f"/api/airports/{icao.upper()}")
        return Airport.model_validate(resp.json())

    # --- Flights ---

    def log_flight(self, payload: dict[str, Any]) -> Flight:
        """Log a flight. ``payload`` follows the server's flight request schema."""
        resp = self._request("POST", "/api/flights", json=payload)
        return Flight.model_validate(resp.json())

    def list_flights(self, **filters: Any) -> list[Flight]:
        """List flights; keyword filters are passed as query parameters."""
        params = {k: _param(v) for k, v in filters.items() if v is not None}
        resp = self._request("GET", "/api/flights", params=params)
        return [Flight.model_validate(f) for f in resp.json()]

    def get_flight(self, flight_id: str) -> Flight:
        resp = self._request("GET", f"/api/flights/{flight_id}")
        return Flight.model_validate(resp.json())

    def delete_flight(self, flight_id: str) -> None:
        self._request("DELETE", f"/api/flights/{flight_id}")

    def flight_stats(self, **params: Any) -> FlightStats:
        query = {k: _param(v) for k, v in params.items() if v is not None}
        resp = self._request("GET", "/api/flights/stats", params=query)
        return FlightStats.model_validate(resp.json())

    def flight_map(self, segments: int = 50) -> dict[str, Any]:
        resp = self._request("GET", "/api/flights/map", params={"segments": segments})
        return resp.json()


def _param(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value
