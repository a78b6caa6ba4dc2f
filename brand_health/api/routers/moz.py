"""
brand_health/api/routers/moz.py

Moz URL-metrics endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from brand_health.connectors import MozConnector
from brand_health.schemas.brand_health import ErrorResponse, UrlMetricsResponse, UrlRequest
from brand_health.services.url_metrics_service import get_moz_connector

router = APIRouter(tags=["moz"])


@router.post(
    "/moz",
    response_model=UrlMetricsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def lookup_url_metrics(
    request: UrlRequest,
    connector: MozConnector = Depends(get_moz_connector),
) -> UrlMetricsResponse:
    """
    Return domain and page authority metrics Moz reports for a URL.
    """

    url = request.url.strip()
    if not url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="url is required.")
    result = connector.fetch(url)
    if result.payload is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=result.error or "Moz URL metrics unavailable.",
        )
    return UrlMetricsResponse(url=url, data=result.payload)
