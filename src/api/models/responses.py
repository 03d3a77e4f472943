"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy"
    version: str
    upstream_url: str
    timestamp: str  # ISO 8601 UTC


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []
    hint: str | None = None


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    MISSING_DISTRICT = "MISSING_DISTRICT"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_INVALID_DATA = "UPSTREAM_INVALID_DATA"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class LocationResponse(BaseModel):
    """A country, city or district."""

    id: str
    name_tr: str
    name_en: str


class DistrictBranchResponse(BaseModel):
    items: list[LocationResponse] = []
    degraded: bool = False


class CityNodeResponse(LocationResponse):
    districts: DistrictBranchResponse


class CityBranchResponse(BaseModel):
    items: list[CityNodeResponse] = []
    degraded: bool = False


class CountryNodeResponse(LocationResponse):
    cities: CityBranchResponse


class HierarchyCounts(BaseModel):
    countries: int = 0
    cities: int = 0
    districts: int = 0


class HierarchyResponse(BaseModel):
    """Everything the selection form needs to render its dropdowns."""

    countries: list[CountryNodeResponse] = []
    flat_countries: list[LocationResponse] = []
    flat_cities: list[LocationResponse] = []
    flat_districts: list[LocationResponse] = []
    counts: HierarchyCounts = HierarchyCounts()
    degraded: bool = False
    error: str | None = None


class FeedUrlResponse(BaseModel):
    url: str
    district_id: str
    language: str
