"""
brand_health/scraping package marker.
"""

from brand_health.scraping.page_metadata import (
    PageMetadataParser,
    PageMetadataScraper,
    PageScrapeError,
    hostname_term,
    normalize_url,
)

__all__ = [
    "PageMetadataParser",
    "PageMetadataScraper",
    "PageScrapeError",
    "hostname_term",
    "normalize_url",
]
