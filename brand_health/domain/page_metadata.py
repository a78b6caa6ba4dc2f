"""
brand_health/domain/page_metadata.py

Domain model for metadata scraped from a brand's web page.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageMetadata:
    """
    Title, description and Open Graph tags extracted from one page.
    """

    url: str
    title: str = ""
    meta_description: str = ""
    og_title: str = ""
    og_description: str = ""
    og_site_name: str = ""
    suggested_term: str = ""
