"""
Location hierarchy models: countries, cities, districts.

Nodes are built once from upstream records and never mutated.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from core.upstream_client import UpstreamDataError

T = TypeVar("T")


@dataclass(frozen=True)
class LocationNode:
    """Common shape of a country, city or district."""

    id: str
    name_tr: str
    name_en: str

    # Upstream field names: (id, Turkish name, English name)
    api_fields: ClassVar[tuple[str, str, str]] = ("", "", "")

    def display_name(self, language: str) -> str:
        """Name to show for the given language ('tr' or 'en')."""
        return self.name_tr if language == "tr" else self.name_en

    @classmethod
    def from_api(cls, record: Any):
        id_key, tr_key, en_key = cls.api_fields
        if not isinstance(record, dict):
            raise UpstreamDataError(f"Expected an object for {cls.__name__}, got {type(record).__name__}")
        try:
            node_id, name_tr = record[id_key], record[tr_key]
        except KeyError as e:
            raise UpstreamDataError(f"{cls.__name__} record missing field {e}") from e

        name_en = record.get(en_key) or name_tr
        if node_id is None or not isinstance(name_tr, str) or not isinstance(name_en, str):
            raise UpstreamDataError(
                f"{cls.__name__} record has invalid id or names: {record!r}"
            )
        return cls(id=str(node_id), name_tr=name_tr, name_en=name_en)

    @classmethod
    def list_from_api(cls, payload: Any) -> list:
        if not isinstance(payload, list):
            raise UpstreamDataError(f"Expected a list of {cls.__name__} records")
        return [cls.from_api(record) for record in payload]


@dataclass(frozen=True)
class Country(LocationNode):
    api_fields = ("UlkeID", "UlkeAdi", "UlkeAdiEn")


@dataclass(frozen=True)
class City(LocationNode):
    api_fields = ("SehirID", "SehirAdi", "SehirAdiEn")


@dataclass(frozen=True)
class District(LocationNode):
    api_fields = ("IlceID", "IlceAdi", "IlceAdiEn")


@dataclass(frozen=True)
class BranchResult(Generic[T]):
    """
    Outcome of fetching one parent's children.

    Either success-with-data, or degraded-empty when the fetch failed and the
    branch was substituted with no children.
    """

    items: tuple[T, ...] = ()
    degraded: bool = False
    error: str | None = None

    @classmethod
    def ok(cls, items) -> "BranchResult[T]":
        return cls(items=tuple(items))

    @classmethod
    def failed(cls, error: str) -> "BranchResult[T]":
        return cls(items=(), degraded=True, error=error)


@dataclass(frozen=True)
class CityNode:
    city: City
    districts: BranchResult[District]


@dataclass(frozen=True)
class CountryNode:
    country: Country
    cities: BranchResult[CityNode]


@dataclass(frozen=True)
class HierarchySnapshot:
    """Fully-resolved tree plus flat lookup lists, built once per request."""

    countries: tuple[CountryNode, ...] = ()
    flat_countries: tuple[Country, ...] = ()
    flat_cities: tuple[City, ...] = ()
    flat_districts: tuple[District, ...] = ()

    @property
    def degraded(self) -> bool:
        """True if any branch of the tree was substituted with an empty list."""
        for country_node in self.countries:
            if country_node.cities.degraded:
                return True
            if any(city_node.districts.degraded for city_node in country_node.cities.items):
                return True
        return False
