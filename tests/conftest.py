"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest
from faker import Faker

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.upstream_client import UpstreamError  # noqa: E402

Faker.seed(1234)


def make_vakit(day: str, times: tuple[str, str, str, str, str, str]) -> dict:
    """Upstream Vakit record for an ISO date ("2024-03-15") and six HH:MM times."""
    year, month, dom = day.split("-")
    imsak, gunes, ogle, ikindi, aksam, yatsi = times
    return {
        "HicriTarihKisa": "5.9.1445",
        "HicriTarihKisaIso8601": None,
        "HicriTarihUzun": "5 Ramazan 1445",
        "HicriTarihUzunIso8601": None,
        "AyinSekliURL": "https://namazvakti.diyanet.gov.tr/images/ay.gif",
        "MiladiTarihKisa": f"{dom}.{month}.{year}",
        "MiladiTarihKisaIso8601": f"{dom}.{month}.{year}",
        "MiladiTarihUzun": f"{dom} Mart {year} Cuma",
        "MiladiTarihUzunIso8601": f"{day}T00:00:00.0000000+03:00",
        "GreenwichOrtalamaZamani": 3.0,
        "Imsak": imsak,
        "Gunes": gunes,
        "Ogle": ogle,
        "Ikindi": ikindi,
        "Aksam": aksam,
        "Yatsi": yatsi,
        "GunesBatis": aksam,
        "GunesDogus": gunes,
        "KibleSaati": "11:02",
    }


class FakeUpstreamClient:
    """
    Stand-in for EzanVaktiClient.

    Each mapping holds the payload to return per id; an Exception value is
    raised instead. Calls are recorded in order.
    """

    def __init__(self, countries=None, cities=None, districts=None, prayer_times=None):
        self.countries = countries if countries is not None else []
        self.cities = cities or {}
        self.districts = districts or {}
        self.prayer_times = prayer_times or {}
        self.calls: list[tuple[str, str | None]] = []

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value

    async def get_countries(self):
        self.calls.append(("countries", None))
        return self._answer(self.countries)

    async def get_cities(self, country_id):
        self.calls.append(("cities", country_id))
        return self._answer(self.cities.get(country_id, []))

    async def get_districts(self, city_id):
        self.calls.append(("districts", city_id))
        return self._answer(self.districts.get(city_id, []))

    async def get_prayer_times(self, district_id):
        self.calls.append(("prayer_times", district_id))
        return self._answer(self.prayer_times.get(district_id, []))

    async def aclose(self):
        pass


@pytest.fixture
def fake():
    return Faker()


@pytest.fixture
def sample_times():
    """Three consecutive days of prayer times for one district."""
    return [
        make_vakit("2024-03-15", ("05:12", "06:36", "12:28", "15:49", "18:11", "19:30")),
        make_vakit("2024-03-16", ("05:10", "06:34", "12:28", "15:50", "18:12", "19:31")),
        make_vakit("2024-03-17", ("05:09", "06:33", "12:27", "15:50", "18:13", "19:32")),
    ]


@pytest.fixture
def location_payloads(fake):
    """Two countries; the first has two cities with two districts each."""
    countries = [
        {"UlkeID": "2", "UlkeAdi": "TÜRKİYE", "UlkeAdiEn": "TURKEY"},
        {"UlkeID": "33", "UlkeAdi": "ALMANYA", "UlkeAdiEn": "GERMANY"},
    ]
    cities = {
        "2": [
            {"SehirID": "539", "SehirAdi": "İSTANBUL", "SehirAdiEn": "ISTANBUL"},
            {"SehirID": "506", "SehirAdi": "ANKARA", "SehirAdiEn": "ANKARA"},
        ],
        "33": [],
    }
    districts = {}
    next_id = 9500
    for city in cities["2"]:
        districts[city["SehirID"]] = []
        for _ in range(2):
            name = fake.unique.city()
            districts[city["SehirID"]].append(
                {"IlceID": str(next_id), "IlceAdi": name.upper(), "IlceAdiEn": name.upper()}
            )
            next_id += 1
    return {"countries": countries, "cities": cities, "districts": districts}


@pytest.fixture
def upstream_failure():
    return UpstreamError("API request failed: 503 Service Unavailable")


@pytest.fixture
def vakit():
    """Factory for upstream Vakit records."""
    return make_vakit


@pytest.fixture
def upstream():
    """Factory for FakeUpstreamClient instances."""
    return FakeUpstreamClient
