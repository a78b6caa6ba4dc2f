"""
brand_health/services package marker.
"""

from brand_health.services.aggregation_service import (
    BrandHealthAggregator,
    SourceDefinition,
    build_brand_health_aggregator,
    get_brand_health_aggregator,
)
from brand_health.services.page_scrape_service import get_page_metadata_scraper
from brand_health.services.timeout_guard import guard
from brand_health.services.url_metrics_service import get_moz_connector

__all__ = [
    "BrandHealthAggregator",
    "SourceDefinition",
    "build_brand_health_aggregator",
    "get_brand_health_aggregator",
    "get_moz_connector",
    "get_page_metadata_scraper",
    "guard",
]
