"""
Ezan Vakti API client with lazy initialization.
"""

from typing import Any
from urllib.parse import quote

import httpx

from core.config import UPSTREAM_API_URL, UPSTREAM_TIMEOUT_SECONDS


def path_segment(value: Any) -> str:
    """Escape an id so it stays a single path segment (no '/', '?', or dot segments)."""
    return quote(str(value), safe="").replace(".", "%2E")


class UpstreamError(Exception):
    """The upstream API could not be reached or returned an error status."""


class UpstreamDataError(UpstreamError):
    """The upstream API answered, but the payload is not usable."""


class EzanVaktiClient:
    """Thin async wrapper around the Ezan Vakti REST endpoints."""

    def __init__(
        self,
        base_url: str = UPSTREAM_API_URL,
        timeout: float = UPSTREAM_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def _get(self, endpoint: str) -> Any:
        try:
            response = await self._http.get(endpoint)
        except httpx.TimeoutException as e:
            raise UpstreamError(f"API request timed out: {endpoint}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"API request failed: {e}") from e

        if response.is_error:
            raise UpstreamError(
                f"API request failed: {response.status_code} {response.reason_phrase}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamDataError(f"API returned invalid JSON for {endpoint}") from e

    async def get_countries(self) -> Any:
        return await self._get("/ulkeler")

    async def get_cities(self, country_id: str) -> Any:
        return await self._get(f"/sehirler/{path_segment(country_id)}")

    async def get_districts(self, city_id: str) -> Any:
        return await self._get(f"/ilceler/{path_segment(city_id)}")

    async def get_prayer_times(self, district_id: str) -> Any:
        return await self._get(f"/vakitler/{path_segment(district_id)}")

    async def aclose(self) -> None:
        await self._http.aclose()


_upstream_client: EzanVaktiClient | None = None


def get_upstream_client() -> EzanVaktiClient:
    """Get or create the Ezan Vakti client (lazy initialization)."""
    global _upstream_client
    if _upstream_client is None:
        _upstream_client = EzanVaktiClient()
    return _upstream_client


async def close_upstream_client() -> None:
    """Close the shared client, if one was created."""
    global _upstream_client
    if _upstream_client is not None:
        await _upstream_client.aclose()
        _upstream_client = None
