"""
brand_health/services/page_scrape_service.py

Service wiring for page metadata scraping.
"""

from __future__ import annotations

from functools import lru_cache

from brand_health.config import get_external_http_settings, get_page_scrape_settings
from brand_health.scraping import PageMetadataScraper


@lru_cache(maxsize=1)
def get_page_metadata_scraper() -> PageMetadataScraper:
    """
    Build and cache the page metadata scraper.
    """

    return PageMetadataScraper(
        settings=get_page_scrape_settings(),
        user_agent=get_external_http_settings().user_agent,
    )
