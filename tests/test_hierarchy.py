"""Tests for the country / city / district hierarchy loader."""

import asyncio

import pytest

from core.upstream_client import UpstreamDataError, UpstreamError
from models.locations import Country, District
from services.hierarchy import load_country_cities, load_hierarchy


def load(client):
    return asyncio.run(load_hierarchy(client))


def test_full_hierarchy(upstream, location_payloads):
    snapshot = load(upstream(**location_payloads))

    assert [c.id for c in snapshot.flat_countries] == ["2", "33"]
    assert [c.id for c in snapshot.flat_cities] == ["539", "506"]
    assert [d.id for d in snapshot.flat_districts] == ["9500", "9501", "9502", "9503"]
    assert not snapshot.degraded

    turkey, germany = snapshot.countries
    assert turkey.country.display_name("en") == "TURKEY"
    assert turkey.country.display_name("tr") == "TÜRKİYE"
    assert [n.city.id for n in turkey.cities.items] == ["539", "506"]
    assert [d.id for d in turkey.cities.items[0].districts.items] == ["9500", "9501"]
    assert germany.cities.items == ()
    assert not germany.cities.degraded


def test_one_failing_city_keeps_siblings(upstream, location_payloads, upstream_failure):
    location_payloads["districts"]["539"] = upstream_failure
    snapshot = load(upstream(**location_payloads))

    istanbul, ankara = snapshot.countries[0].cities.items
    assert istanbul.districts.items == ()
    assert istanbul.districts.degraded
    assert "503" in istanbul.districts.error
    assert [d.id for d in ankara.districts.items] == ["9502", "9503"]
    assert not ankara.districts.degraded

    assert [d.id for d in snapshot.flat_districts] == ["9502", "9503"]
    assert [c.id for c in snapshot.flat_cities] == ["539", "506"]
    assert snapshot.degraded


def test_one_failing_country_keeps_others(upstream, location_payloads, upstream_failure):
    location_payloads["cities"]["2"] = upstream_failure
    location_payloads["cities"]["33"] = [
        {"SehirID": "10", "SehirAdi": "BERLIN", "SehirAdiEn": "BERLIN"}
    ]
    location_payloads["districts"]["10"] = [
        {"IlceID": "11002", "IlceAdi": "BERLIN", "IlceAdiEn": "BERLIN"}
    ]
    snapshot = load(upstream(**location_payloads))

    turkey, germany = snapshot.countries
    assert turkey.cities.degraded
    assert turkey.cities.items == ()
    assert [n.city.id for n in germany.cities.items] == ["10"]
    assert [d.id for d in snapshot.flat_districts] == ["11002"]


def test_malformed_branch_is_degraded(upstream, location_payloads):
    location_payloads["districts"]["506"] = [{"IlceAdi": "NO ID"}]
    snapshot = load(upstream(**location_payloads))

    ankara = snapshot.countries[0].cities.items[1]
    assert ankara.districts.degraded
    assert ankara.districts.items == ()


def test_root_failure_propagates(upstream, upstream_failure):
    client = upstream(countries=upstream_failure)

    with pytest.raises(UpstreamError):
        load(client)
    assert client.calls == [("countries", None)]


def test_root_not_a_list_propagates(upstream):
    with pytest.raises(UpstreamDataError):
        load(upstream(countries={"error": "maintenance"}))


def test_fetches_are_sequential_in_source_order(upstream, location_payloads):
    client = upstream(**location_payloads)
    load(client)

    assert client.calls == [
        ("countries", None),
        ("cities", "2"),
        ("districts", "539"),
        ("districts", "506"),
        ("cities", "33"),
    ]


def test_location_from_api_falls_back_to_turkish_name():
    country = Country.from_api({"UlkeID": 2, "UlkeAdi": "TÜRKİYE"})
    assert country.id == "2"
    assert country.display_name("en") == "TÜRKİYE"

    with pytest.raises(UpstreamDataError):
        District.from_api({"IlceAdi": "NO ID"})


@pytest.mark.parametrize(
    "record",
    [
        {"UlkeID": "2", "UlkeAdi": None},
        {"UlkeID": "2", "UlkeAdi": 7, "UlkeAdiEn": "TURKEY"},
        {"UlkeID": "2", "UlkeAdi": "TÜRKİYE", "UlkeAdiEn": ["TURKEY"]},
        {"UlkeID": None, "UlkeAdi": "TÜRKİYE"},
    ],
)
def test_location_from_api_rejects_non_string_names(record):
    with pytest.raises(UpstreamDataError):
        Country.from_api(record)


def test_null_district_name_degrades_only_that_city(upstream, location_payloads):
    location_payloads["districts"]["539"][0]["IlceAdi"] = None
    location_payloads["districts"]["539"][0]["IlceAdiEn"] = None
    snapshot = load(upstream(**location_payloads))

    istanbul, ankara = snapshot.countries[0].cities.items
    assert istanbul.districts.degraded
    assert [d.id for d in ankara.districts.items] == ["9502", "9503"]
    assert [d.id for d in snapshot.flat_districts] == ["9502", "9503"]


def test_load_country_cities(upstream, location_payloads):
    client = upstream(**location_payloads)
    cities = asyncio.run(load_country_cities(client, "2"))

    assert not cities.degraded
    assert [n.city.id for n in cities.items] == ["539", "506"]
    assert [d.id for d in cities.items[1].districts.items] == ["9502", "9503"]
    assert client.calls == [("cities", "2"), ("districts", "539"), ("districts", "506")]


def test_load_country_cities_failed_city_list(upstream, location_payloads, upstream_failure):
    location_payloads["cities"]["2"] = upstream_failure
    client = upstream(**location_payloads)
    cities = asyncio.run(load_country_cities(client, "2"))

    assert cities.degraded
    assert cities.items == ()
    assert client.calls == [("cities", "2")]
