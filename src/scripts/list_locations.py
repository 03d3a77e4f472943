#!/usr/bin/env python3
"""
List countries, cities and districts from the Ezan Vakti API.

Loading the whole world takes thousands of requests; pass --country to load a
single country's cities and districts.

Usage:
    uv run python src/scripts/list_locations.py [--country 2] [--lang en]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.upstream_client import EzanVaktiClient
from models.locations import BranchResult, CityNode
from services.hierarchy import load_country_cities, load_hierarchy


def print_cities(cities: BranchResult[CityNode], language: str):
    if cities.degraded:
        print(f"  Cities: unavailable ({cities.error})")
        return
    for city_node in cities.items:
        districts = city_node.districts
        print(f"  {city_node.city.display_name(language)} (ID: {city_node.city.id})")
        if districts.degraded:
            print(f"    Districts: unavailable ({districts.error})")
            continue
        for district in districts.items:
            print(f"    - {district.display_name(language)} (ID: {district.id})")


async def main(country_id: str | None, language: str):
    client = EzanVaktiClient()
    try:
        if country_id:
            print(f"Fetching cities and districts for country {country_id}...\n")
            print_cities(await load_country_cities(client, country_id), language)
        else:
            print("Fetching all countries, cities and districts...\n")
            snapshot = await load_hierarchy(client)
            print(
                f"Found {len(snapshot.flat_countries)} countries, "
                f"{len(snapshot.flat_cities)} cities, "
                f"{len(snapshot.flat_districts)} districts\n"
            )
            print("=" * 80)
            for country_node in snapshot.countries:
                country = country_node.country
                print(f"\n{country.display_name(language)} (ID: {country.id})")
                print_cities(country_node.cities, language)
                print("-" * 80)
    finally:
        await client.aclose()

    print("\nDone!")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")

    parser = argparse.ArgumentParser(description="List Ezan Vakti locations")
    parser.add_argument("--country", default=None, help="Only this country ID (UlkeID)")
    parser.add_argument("--lang", choices=["tr", "en"], default="tr")
    args = parser.parse_args()

    asyncio.run(main(args.country, args.lang))
