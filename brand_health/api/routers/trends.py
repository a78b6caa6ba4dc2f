"""
brand_health/api/routers/trends.py

Trend-only lookup endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from brand_health.domain.brand_health import SOURCE_TRENDS, InvalidTermError
from brand_health.schemas.brand_health import ErrorResponse, TrendsResponse, UrlRequest
from brand_health.scraping import hostname_term
from brand_health.services.aggregation_service import (
    BrandHealthAggregator,
    get_brand_health_aggregator,
)

router = APIRouter(tags=["trends"])


@router.post(
    "/trends",
    response_model=TrendsResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def lookup_trends(
    request: UrlRequest,
    aggregator: BrandHealthAggregator = Depends(get_brand_health_aggregator),
) -> TrendsResponse:
    """
    Return the search-interest series for a URL's host or a plain term.
    """

    try:
        result = await aggregator.fetch_source(SOURCE_TRENDS, hostname_term(request.url))
    except InvalidTermError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    payload = result.payload or {}
    timeline = payload.get("timeline_data") or []
    synthetic = bool(payload.get("synthetic"))

    if not timeline and not synthetic and result.error:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    if not any(point.get("value") for point in timeline):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No trend data available for this search term",
        )

    return TrendsResponse(
        term=hostname_term(request.url),
        timeline_data=timeline,
        synthetic=synthetic,
    )
