"""
brand_health/schemas package marker.
"""

from brand_health.schemas.brand_health import (
    AggregateRequest,
    AggregateResponse,
    ErrorResponse,
    PageMetadataData,
    PageMetadataResponse,
    ScoresResponse,
    SourceDataResponse,
    TrendsResponse,
    UrlRequest,
)

__all__ = [
    "AggregateRequest",
    "AggregateResponse",
    "ErrorResponse",
    "PageMetadataData",
    "PageMetadataResponse",
    "ScoresResponse",
    "SourceDataResponse",
    "TrendsResponse",
    "UrlRequest",
]
