"""
brand_health/api/routers/brand_health.py

Brand health aggregation endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from brand_health.domain.brand_health import InvalidTermError
from brand_health.schemas.brand_health import AggregateRequest, AggregateResponse, ErrorResponse
from brand_health.services.aggregation_service import (
    BrandHealthAggregator,
    get_brand_health_aggregator,
)

router = APIRouter(tags=["brand-health"])


@router.post(
    "/aggregate",
    response_model=AggregateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@router.post("/brand-health", response_model=AggregateResponse, include_in_schema=False)
async def aggregate_brand_health(
    request: AggregateRequest,
    aggregator: BrandHealthAggregator = Depends(get_brand_health_aggregator),
) -> AggregateResponse:
    """
    Fan out to every source for the term and return sub-scores, overall score and raw data.

    Individual source failures degrade to zero sub-scores; they never fail the request.
    """

    try:
        result = await aggregator.aggregate(request.term)
    except InvalidTermError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return AggregateResponse.from_result(result)
