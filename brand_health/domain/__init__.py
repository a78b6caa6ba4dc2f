"""
brand_health/domain package marker.
"""

from brand_health.domain.brand_health import (
    ALL_SOURCES,
    SOURCE_DUCKDUCKGO,
    SOURCE_GOOGLE,
    SOURCE_MOZ,
    SOURCE_NEWS,
    SOURCE_TRENDS,
    SOURCE_WIKIDATA,
    SOURCE_WIKIPEDIA,
    AggregateResult,
    BrandHealthScores,
    InvalidTermError,
    SourceResult,
    normalize_term,
)
from brand_health.domain.page_metadata import PageMetadata

__all__ = [
    "ALL_SOURCES",
    "AggregateResult",
    "BrandHealthScores",
    "InvalidTermError",
    "PageMetadata",
    "SOURCE_DUCKDUCKGO",
    "SOURCE_GOOGLE",
    "SOURCE_MOZ",
    "SOURCE_NEWS",
    "SOURCE_TRENDS",
    "SOURCE_WIKIDATA",
    "SOURCE_WIKIPEDIA",
    "SourceResult",
    "normalize_term",
]
