"""
brand_health/api/routers/scrape.py

Page metadata scrape endpoint used to refine a URL into a brand name.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from brand_health.schemas.brand_health import (
    ErrorResponse,
    PageMetadataData,
    PageMetadataResponse,
    UrlRequest,
)
from brand_health.scraping import PageMetadataScraper, PageScrapeError
from brand_health.services.page_scrape_service import get_page_metadata_scraper

router = APIRouter(tags=["scrape"])


@router.post(
    "/scrape",
    response_model=PageMetadataResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def scrape_page(
    request: UrlRequest,
    scraper: PageMetadataScraper = Depends(get_page_metadata_scraper),
) -> PageMetadataResponse:
    """
    Extract title, meta description and Open Graph tags from a page.
    """

    try:
        metadata = scraper.scrape(request.url)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PageScrapeError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return PageMetadataResponse(
        data=PageMetadataData(
            url=metadata.url,
            title=metadata.title,
            meta_description=metadata.meta_description,
            og_title=metadata.og_title,
            og_description=metadata.og_description,
            og_site_name=metadata.og_site_name,
            suggested_term=metadata.suggested_term,
        )
    )
