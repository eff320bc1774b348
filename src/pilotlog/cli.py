"""Command-line client for the flight logbook."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

import requests
from dotenv import load_dotenv

from pilotlog.airport_cache import AirportCache, filter_airports
from pilotlog.cache_store import FileStore
from pilotlog.client import LogbookClient
from pilotlog.config import ClientConfig, load_client_config
from pilotlog.models import Airport, Flight

logger = logging.getLogger(__name__)


def _format_minutes(minutes: int | None) -> str:
    if minutes is None:
        return "-"
    return f"{minutes // 60}h {minutes % 60:02d}m"


def _airport_label(code: str, by_icao: dict[str, Airport]) -> str:
    airport = by_icao.get(code)
    return f"{code} ({airport.name})" if airport else code


def _build_cache(client: LogbookClient, config: ClientConfig) -> AirportCache:
    return AirportCache(client.get_all_airports, FileStore(config.cache_dir))


def cmd_airports(args: argparse.Namespace, client: LogbookClient, cache: AirportCache) -> None:
    airports = cache.get_cached_airports(force_refresh=args.refresh)
    if not airports:
        print("Airport list temporarily unavailable.")
        return
    matches = filter_airports(airports, args.query)
    if not matches:
        print("No matches.")
        return
    for a in matches:
        print(f"  {a.icao}  {a.iata or '   '}  {a.name}")


def cmd_clear_cache(args: argparse.Namespace, client: LogbookClient, cache: AirportCache) -> None:
    cache.clear_airport_cache()
    print("Airport cache cleared.")


def _print_flights(flights: list[Flight], by_icao: dict[str, Airport]) -> None:
    if not flights:
        print("No flights match your filters.")
        return
    for f in flights:
        route = f"{_airport_label(f.dep_airport, by_icao)} -> {_airport_label(f.arr_airport, by_icao)}"
        print(
            f"  {f.created_at:%d %b %y}  {route}  {f.aircraft_type} {f.aircraft_reg}  "
            f"{_format_minutes(f.duration_flight)}  "
            f"landings {f.day_landings}D/{f.night_landings}N  [{f.id}]"
        )


def cmd_flights(args: argparse.Namespace, client: LogbookClient, cache: AirportCache) -> None:
    cache.preload_airports()
    flights = client.list_flights(
        period="month" if args.month else None,
        start_date=args.start,
        end_date=args.end,
        aircraft_type=args.aircraft_type,
        aircraft_reg=args.reg,
        dep_airport=args.dep,
        arr_airport=args.arr,
    )
    by_icao = {a.icao: a for a in cache.get_cached_airports()}
    _print_flights(flights, by_icao)


def cmd_stats(args: argparse.Namespace, client: LogbookClient, cache: AirportCache) -> None:
    if args.month:
        stats = client.flight_stats(period="month")
    elif args.date_from:
        stats = client.flight_stats(period="range", **{"from": args.date_from, "to": args.date_to})
    else:
        stats = client.flight_stats()
    print(f"  Flights:        {stats.total_flights}")
    print(f"  Hours:          {stats.total_hours:.1f}")
    print(f"  Landings:       {stats.total_landings}")
    print(f"    day/night:    {stats.total_day_landings}/{stats.total_night_landings}")


def cmd_log(args: argparse.Namespace, client: LogbookClient, cache: AirportCache) -> None:
    by_icao = {a.icao: a for a in cache.get_cached_airports()}
    for code in (args.dep, args.arr):
        if by_icao and code.upper() not in by_icao:
            logger.warning("Airport %s is not in the reference list", code.upper())

    payload = {
        "flight_number": args.flight_number,
        "aircraft_reg": args.reg,
        "aircraft_type": args.aircraft_type,
        "dep_airport": args.dep,
        "arr_airport": args.arr,
        "block_off": args.block_off,
        "takeoff": args.takeoff,
        "landing": args.landing,
        "block_on": args.block_on,
        "day_landings": args.day,
        "night_landings": args.night,
        "notes": args.notes,
    }
    flight = client.log_flight({k: v for k, v in payload.items() if v is not None})
    print(f"Logged flight {flight.id}")
    _print_flights([flight], by_icao)


def cmd_delete(args: argparse.Namespace, client: LogbookClient, cache: AirportCache) -> None:
    client.delete_flight(args.flight_id)
    print(f"Deleted flight {args.flight_id}")


def cmd_map(args: argparse.Namespace, client: LogbookClient, cache: AirportCache) -> None:
    collection = client.flight_map(segments=args.segments)
    text = json.dumps(collection, indent=2)
    if args.out:
        Path(args.out).write_text(text)
        routes = sum(1 for f in collection["features"] if f["properties"]["kind"] == "route")
        print(f"Map with {routes} routes saved: {args.out}")
    else:
        print(text)


def cmd_import_airports(args: argparse.Namespace) -> None:
    """Seed the reference table directly in the server's database."""
    from pilotlog.db.engine import SessionLocal, get_engine, init_db
    from pilotlog.storage.airports import import_airports_csv

    init_db(get_engine())
    with SessionLocal() as session:
        count = import_airports_csv(session, Path(args.csv))
        session.commit()
    print(f"Imported {count} airports.")


def _parse_dt(value: str) -> str:
    datetime.fromisoformat(value)
    return value


def main() -> None:
    """CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(prog="pilotlog", description="Personal flight logbook")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=Path, help="Client config file (default ~/.pilotlog/config.yaml)")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("airports", help="Search airports by ICAO, IATA or name")
    p.add_argument("query")
    p.add_argument("--refresh", action="store_true", help="Refetch the airport list")
    p.set_defaults(func=cmd_airports)

    p = sub.add_parser("clear-cache", help="Delete the local airport cache")
    p.set_defaults(func=cmd_clear_cache)

    p = sub.add_parser("flights", help="List logged flights")
    p.add_argument("--month", action="store_true", help="Only this month")
    p.add_argument("--start", type=_parse_dt, help="Created at or after (ISO datetime)")
    p.add_argument("--end", type=_parse_dt, help="Created at or before (ISO datetime)")
    p.add_argument("--type", dest="aircraft_type")
    p.add_argument("--reg")
    p.add_argument("--dep")
    p.add_argument("--arr")
    p.set_defaults(func=cmd_flights)

    p = sub.add_parser("stats", help="Show totals")
    p.add_argument("--month", action="store_true", help="Only this month")
    p.add_argument("--from", dest="date_from", type=date.fromisoformat)
    p.add_argument("--to", dest="date_to", type=date.fromisoformat)
    p.set_defaults(func=cmd_stats)

    p = sub.add_parser("log", help="Log a flight")
    p.add_argument("dep", metavar="DEP")
    p.add_argument("arr", metavar="ARR")
    p.add_argument("--reg", required=True, help="Aircraft registration")
    p.add_argument("--type", dest="aircraft_type", required=True, help="Aircraft type")
    p.add_argument("--flight-number")
    p.add_argument("--block-off", type=_parse_dt)
    p.add_argument("--takeoff", type=_parse_dt)
    p.add_argument("--landing", type=_parse_dt)
    p.add_argument("--block-on", type=_parse_dt)
    p.add_argument("--day", type=int, default=0, help="Day landings")
    p.add_argument("--night", type=int, default=0, help="Night landings")
    p.add_argument("--notes")
    p.set_defaults(func=cmd_log)

    p = sub.add_parser("delete", help="Delete a flight")
    p.add_argument("flight_id")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("map", help="Export flight routes as GeoJSON")
    p.add_argument("--out", help="Output file (default: stdout)")
    p.add_argument("--segments", type=int, default=50)
    p.set_defaults(func=cmd_map)

    p = sub.add_parser("import-airports", help="Load airports from CSV into the database")
    p.add_argument("csv")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.command == "import-airports":
        cmd_import_airports(args)
        return

    config = load_client_config(args.config)
    client = LogbookClient(config.base_url, token=config.token)
    cache = _build_cache(client, config)

    try:
        args.func(args, client, cache)
    except requests.HTTPError as exc:
        print(f"Error: {exc}")
        sys.exit(1)
    except requests.ConnectionError:
        print(f"Error: cannot reach {config.base_url}")
        sys.exit(1)


if __name__ == "__main__":
    main()
