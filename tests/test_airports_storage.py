"""Tests for airport reference data access."""

from __future__ import annotations

import pytest

from pilotlog.models import Airport
from pilotlog.storage.airports import (
    import_airports_csv,
    list_airports,
    load_airport,
    save_airport,
)


class TestAirportAccess:
    def test_list_ordered_by_icao(self, db_session, sample_airports):
        for airport in sample_airports:
            save_airport(db_session, airport)
        icaos = [a.icao for a in list_airports(db_session)]
        assert icaos == ["EGLL", "EGTK", "KJFK", "KLAX", "LFPG"]

    def test_load_case_insensitive(self, db_session, sample_airports):
        save_airport(db_session, sample_airports[0])
        airport = load_airport(db_session, "egll")
        assert airport.name == "London Heathrow"
        assert airport.coordinates == (-0.4619, 51.4706)

    def test_load_missing_raises(self, db_session):
        with pytest.raises(KeyError):
            load_airport(db_session, "ZZZZ")

    def test_save_updates(self, db_session):
        save_airport(db_session, Airport(icao="EGTK", name="Kidlington"))
        save_airport(db_session, Airport(icao="EGTK", name="Oxford Kidlington", lat=51.8, lon=-1.3))
        airport = load_airport(db_session, "EGTK")
        assert airport.name == "Oxford Kidlington"
        assert airport.lat == 51.8


class TestImportCSV:
    def test_lat_lon_columns(self, db_session, tmp_path):
        path = tmp_path / "airports.csv"
        path.write_text(
            "icao,iata,name,lat,lon\n"
            "egll,lhr,London Heathrow,51.4706,-0.4619\n"
            "EGTK,,Oxford Kidlington,51.8361,-1.32\n"
        )
        assert import_airports_csv(db_session, path) == 2
        assert load_airport(db_session, "EGLL").iata == "LHR"
        assert load_airport(db_session, "EGTK").iata is None

    def test_geojson_location_column(self, db_session, tmp_path):
        path = tmp_path / "airports.csv"
        path.write_text(
            "icao,iata,name,location\n"
            'LFPG,CDG,Paris CDG,"{""type"":""Point"",""coordinates"":[2.5479,49.0097]}"\n'
            "LFPB,,Le Bourget,\n"
        )
        assert import_airports_csv(db_session, path) == 2
        assert load_airport(db_session, "LFPG").coordinates == (2.5479, 49.0097)
        assert load_airport(db_session, "LFPB").coordinates is None

    def test_invalid_icao_skipped(self, db_session, tmp_path):
        path = tmp_path / "airports.csv"
        path.write_text("icao,iata,name,lat,lon\nLHR,,Too short,1,2\nEGLL,LHR,Heathrow,51.4,-0.4\n")
        assert import_airports_csv(db_session, path) == 1
        assert [a.icao for a in list_airports(db_session)] == ["EGLL"]
