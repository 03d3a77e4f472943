"""Location lookup endpoints backing the selection form."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from api.dependencies import upstream_client
from api.models.responses import (
    CityBranchResponse,
    CityNodeResponse,
    CountryNodeResponse,
    DistrictBranchResponse,
    ErrorCodes,
    FeedUrlResponse,
    HierarchyCounts,
    HierarchyResponse,
    LocationResponse,
)
from api.routes.times_ics import resolve_district_id, resolve_language
from core.upstream_client import EzanVaktiClient, UpstreamError
from models.locations import HierarchySnapshot, LocationNode
from services.feed import feed_url
from services.hierarchy import fetch_cities, fetch_countries, fetch_districts, load_hierarchy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")

HIERARCHY_FALLBACK_MESSAGE = "Failed to load location data. Please try refreshing the page."


def to_location(node: LocationNode) -> LocationResponse:
    return LocationResponse(id=node.id, name_tr=node.name_tr, name_en=node.name_en)


def to_hierarchy_response(snapshot: HierarchySnapshot) -> HierarchyResponse:
    countries = []
    for country_node in snapshot.countries:
        cities = [
            CityNodeResponse(
                **to_location(city_node.city).model_dump(),
                districts=DistrictBranchResponse(
                    items=[to_location(d) for d in city_node.districts.items],
                    degraded=city_node.districts.degraded,
                ),
            )
            for city_node in country_node.cities.items
        ]
        countries.append(
            CountryNodeResponse(
                **to_location(country_node.country).model_dump(),
                cities=CityBranchResponse(items=cities, degraded=country_node.cities.degraded),
            )
        )

    return HierarchyResponse(
        countries=countries,
        flat_countries=[to_location(c) for c in snapshot.flat_countries],
        flat_cities=[to_location(c) for c in snapshot.flat_cities],
        flat_districts=[to_location(d) for d in snapshot.flat_districts],
        counts=HierarchyCounts(
            countries=len(snapshot.flat_countries),
            cities=len(snapshot.flat_cities),
            districts=len(snapshot.flat_districts),
        ),
        degraded=snapshot.degraded,
    )


def upstream_failure(e: UpstreamError, what: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "error": f"Failed to fetch {what} from Ezan Vakti API",
            "code": ErrorCodes.UPSTREAM_ERROR,
            "details": [str(e)],
        },
    )


@router.get("/countries", response_model=list[LocationResponse])
async def list_countries(client: EzanVaktiClient = Depends(upstream_client)):
    try:
        countries = await fetch_countries(client)
    except UpstreamError as e:
        raise upstream_failure(e, "countries")
    return [to_location(c) for c in countries]


@router.get("/countries/{country_id}/cities", response_model=list[LocationResponse])
async def list_cities(country_id: str, client: EzanVaktiClient = Depends(upstream_client)):
    try:
        cities = await fetch_cities(client, country_id)
    except UpstreamError as e:
        raise upstream_failure(e, "cities")
    return [to_location(c) for c in cities]


@router.get("/cities/{city_id}/districts", response_model=list[LocationResponse])
async def list_districts(city_id: str, client: EzanVaktiClient = Depends(upstream_client)):
    try:
        districts = await fetch_districts(client, city_id)
    except UpstreamError as e:
        raise upstream_failure(e, "districts")
    return [to_location(d) for d in districts]


@router.get("/hierarchy", response_model=HierarchyResponse)
async def hierarchy(client: EzanVaktiClient = Depends(upstream_client)):
    """
    Full country / city / district tree plus flat lists for the selection form.

    If the country list itself cannot be loaded, responds with an empty
    hierarchy and a user-facing error message instead of failing.
    """
    try:
        snapshot = await load_hierarchy(client)
    except UpstreamError as e:
        logger.error("Failed to fetch hierarchical data: %s", e)
        return HierarchyResponse(error=HIERARCHY_FALLBACK_MESSAGE)
    return to_hierarchy_response(snapshot)


@router.get("/feed-url", response_model=FeedUrlResponse)
async def build_feed_url(
    request: Request,
    district_id: Annotated[str | None, Query(alias="districtID")] = None,
    lang: Annotated[str | None, Query()] = None,
):
    """Subscribable /times-ics URL for the selected district and language."""
    resolved_id = resolve_district_id(district_id, None, None, None)
    language = resolve_language(lang)
    return FeedUrlResponse(
        url=feed_url(str(request.base_url), resolved_id, language),
        district_id=resolved_id,
        language=language,
    )
