"""Prayer times calendar feed endpoint."""

import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import Response

from api.dependencies import upstream_client
from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes
from core.config import FEED_CACHE_CONTROL
from core.upstream_client import EzanVaktiClient, UpstreamDataError, UpstreamError
from core.validation import normalize_language, validate_location_id
from services.calendar import CalendarSerializationError
from services.feed import NoPrayerTimesError, feed_filename, generate_feed

router = APIRouter()

LOOKUP_HINT = (
    "Use /v1/countries, /v1/countries/{country_id}/cities, and "
    "/v1/cities/{city_id}/districts endpoints to find the correct district ID."
)


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def resolve_district_id(
    district_id: str | None,
    legacy_district_id: str | None,
    country_id: str | None,
    city_id: str | None,
) -> str:
    """Pick the district id from the current or legacy parameter names."""
    resolved = (district_id or legacy_district_id or "").strip()
    if resolved:
        try:
            return validate_location_id(resolved)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "Invalid districtID parameter",
                    "code": ErrorCodes.INVALID_REQUEST,
                    "details": [str(e)],
                    "hint": LOOKUP_HINT,
                },
            )

    if country_id or city_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "districtID is required. countryID alone is not sufficient.",
                "code": ErrorCodes.MISSING_DISTRICT,
                "details": [],
                "hint": (
                    "Please select a city and district first. Use the frontend "
                    "to navigate: Country → City → District."
                ),
            },
        )

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "error": (
                "Missing districtID parameter. Use districtID to specify the "
                "district for prayer times."
            ),
            "code": ErrorCodes.MISSING_DISTRICT,
            "details": [],
            "hint": LOOKUP_HINT,
        },
    )


def resolve_language(lang: str | None) -> str:
    try:
        return normalize_language(lang)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid lang parameter",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [str(e)],
            },
        )


async def _build_feed_response(
    request: Request,
    client: EzanVaktiClient,
    district_id: str | None,
    legacy_district_id: str | None,
    country_id: str | None,
    city_id: str | None,
    lang: str | None,
    media_type: str,
    as_attachment: bool,
) -> Response:
    """Shared pipeline for the download and view endpoints."""
    start_time = time.time()

    request_log = RequestLog(
        endpoint=request.url.path,
        method="GET",
        client_ip=get_client_ip(request),
        district_id=district_id or legacy_district_id,
        language=lang,
    )

    try:
        resolved_id = resolve_district_id(district_id, legacy_district_id, country_id, city_id)
        language = resolve_language(lang)
        request_log.district_id = resolved_id
        request_log.language = language

        try:
            feed = await generate_feed(client, resolved_id, language)
        except UpstreamDataError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={
                    "error": "Ezan Vakti API returned unusable prayer times data",
                    "code": ErrorCodes.UPSTREAM_INVALID_DATA,
                    "details": [str(e)],
                },
            )
        except UpstreamError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={
                    "error": "Failed to fetch prayer times from Ezan Vakti API",
                    "code": ErrorCodes.UPSTREAM_ERROR,
                    "details": [str(e)],
                },
            )
        except NoPrayerTimesError:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={
                    "error": "No prayer times data received for the specified district",
                    "code": ErrorCodes.NOT_FOUND,
                    "details": [f"districtID: {resolved_id}"],
                },
            )

        request_log.status_code = 200
        request_log.days_returned = feed.days
        request_log.events_generated = feed.event_count
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        headers = {"Cache-Control": FEED_CACHE_CONTROL}
        if as_attachment:
            headers["Content-Disposition"] = (
                f'attachment; filename="{feed_filename(resolved_id, language)}"'
            )
        return Response(content=feed.content, media_type=media_type, headers=headers)

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("error_detail", detail))
        else:
            request_log.error_message = str(e.detail)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise

    except CalendarSerializationError as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Something went wrong while generating the calendar",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    except Exception as e:
        # Unexpected errors
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass


@router.get("/times-ics")
@router.get("/api/times-ics", include_in_schema=False)
async def times_ics(
    request: Request,
    district_id: Annotated[
        str | None, Query(alias="districtID", description="District ID from /v1/cities/{city_id}/districts")
    ] = None,
    legacy_district_id: Annotated[
        str | None, Query(alias="ilceID", description="Legacy name for districtID")
    ] = None,
    country_id: Annotated[str | None, Query(alias="countryID", include_in_schema=False)] = None,
    city_id: Annotated[str | None, Query(alias="cityID", include_in_schema=False)] = None,
    lang: Annotated[str | None, Query(description="Title language: tr or en")] = None,
    client: EzanVaktiClient = Depends(upstream_client),
):
    """
    Subscribable iCalendar feed of prayer times for a district.

    Six 15-minute events per day (Fajr, Sunrise, Dhuhr, Asr, Maghrib, Isha),
    start times in UTC.
    """
    return await _build_feed_response(
        request,
        client,
        district_id,
        legacy_district_id,
        country_id,
        city_id,
        lang,
        media_type="text/calendar; charset=utf-8",
        as_attachment=True,
    )


@router.get("/times-ics/view")
@router.get("/api/times-ics/view", include_in_schema=False)
async def times_ics_view(
    request: Request,
    district_id: Annotated[str | None, Query(alias="districtID")] = None,
    legacy_district_id: Annotated[str | None, Query(alias="ilceID")] = None,
    lang: Annotated[str | None, Query()] = None,
    client: EzanVaktiClient = Depends(upstream_client),
):
    """Same feed as /times-ics, as plain text for viewing in a browser."""
    return await _build_feed_response(
        request,
        client,
        district_id,
        legacy_district_id,
        None,
        None,
        lang,
        media_type="text/plain; charset=utf-8",
        as_attachment=False,
    )
