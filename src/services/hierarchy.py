"""
Country / city / district hierarchy loading from the Ezan Vakti API.
"""

import logging
from typing import Awaitable, Callable, TypeVar

from core.upstream_client import EzanVaktiClient, UpstreamError
from models.locations import (
    BranchResult,
    City,
    CityNode,
    Country,
    CountryNode,
    District,
    HierarchySnapshot,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def fetch_branch(
    fetch: Callable[[], Awaitable[list[T]]], description: str
) -> BranchResult[T]:
    """
    Run one child-list fetch, isolating its failure.

    A failed fetch (network error, timeout, error status, bad payload) becomes
    a degraded, empty branch instead of an exception.
    """
    try:
        return BranchResult.ok(await fetch())
    except UpstreamError as e:
        logger.warning("Failed to fetch %s: %s", description, e)
        return BranchResult.failed(str(e))


async def fetch_countries(client: EzanVaktiClient) -> list[Country]:
    return Country.list_from_api(await client.get_countries())


async def fetch_cities(client: EzanVaktiClient, country_id: str) -> list[City]:
    return City.list_from_api(await client.get_cities(country_id))


async def fetch_districts(client: EzanVaktiClient, city_id: str) -> list[District]:
    return District.list_from_api(await client.get_districts(city_id))


async def load_country_cities(
    client: EzanVaktiClient, country_id: str
) -> BranchResult[CityNode]:
    """
    Load one country's cities and each city's districts.

    A failed city list degrades the whole country branch; a failed district
    list degrades only that city.
    """
    cities = await fetch_branch(
        lambda: fetch_cities(client, country_id),
        f"cities for country {country_id}",
    )
    if cities.degraded:
        return cities

    city_nodes = []
    for city in cities.items:
        districts = await fetch_branch(
            lambda: fetch_districts(client, city.id),
            f"districts for city {city.id}",
        )
        city_nodes.append(CityNode(city=city, districts=districts))
    return BranchResult.ok(city_nodes)


async def load_hierarchy(client: EzanVaktiClient) -> HierarchySnapshot:
    """
    Load every country, its cities, and each city's districts.

    Fetches run sequentially. A failure below the root degrades only that
    branch (empty child list, warning logged); a failure fetching the country
    list itself propagates and no partial tree is returned.

    Raises:
        UpstreamError: if the country list cannot be fetched
    """
    countries = await fetch_countries(client)

    flat_cities: list[City] = []
    flat_districts: list[District] = []
    country_nodes: list[CountryNode] = []

    logger.info("Loading cities and districts for %d countries", len(countries))

    for country in countries:
        cities = await load_country_cities(client, country.id)
        for city_node in cities.items:
            flat_cities.append(city_node.city)
            flat_districts.extend(city_node.districts.items)
        country_nodes.append(CountryNode(country=country, cities=cities))

    snapshot = HierarchySnapshot(
        countries=tuple(country_nodes),
        flat_countries=tuple(countries),
        flat_cities=tuple(flat_cities),
        flat_districts=tuple(flat_districts),
    )
    logger.info(
        "Loaded %d countries, %d cities, %d districts%s",
        len(snapshot.flat_countries),
        len(snapshot.flat_cities),
        len(snapshot.flat_districts),
        " (degraded)" if snapshot.degraded else "",
    )
    return snapshot
