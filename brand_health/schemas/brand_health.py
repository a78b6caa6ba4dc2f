"""
brand_health/schemas/brand_health.py

Request and response schemas for brand health aggregation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brand_health.domain.brand_health import (
    SOURCE_DUCKDUCKGO,
    SOURCE_GOOGLE,
    SOURCE_NEWS,
    SOURCE_TRENDS,
    SOURCE_WIKIDATA,
    SOURCE_WIKIPEDIA,
    AggregateResult,
    normalize_term,
)


class AggregateRequest(BaseModel):
    """
    Request body for one brand health aggregation.
    """

    term: str = Field(..., max_length=500, description="Brand name, free-text term or URL-derived name")

    @field_validator("term")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_term(value)


class ScoresResponse(BaseModel):
    """
    Integer sub-scores and overall score, all in [0, 100].
    """

    model_config = ConfigDict(populate_by_name=True)

    search_trend: int = Field(..., ge=0, le=100, alias="searchTrend")
    wikipedia: int = Field(..., ge=0, le=100)
    search_results: int = Field(..., ge=0, le=100, alias="searchResults")
    news_coverage: int = Field(..., ge=0, le=100, alias="newsCoverage")
    wikidata: int = Field(..., ge=0, le=100)
    google_presence: int = Field(..., ge=0, le=100, alias="googlePresence")
    overall: int = Field(..., ge=0, le=100)


class SourceDataResponse(BaseModel):
    """
    Normalized raw payload per source; None when the source was unavailable.
    """

    trends: dict[str, Any] | None = None
    wiki: dict[str, Any] | None = None
    ddg: dict[str, Any] | None = None
    news: dict[str, Any] | None = None
    wikidata: dict[str, Any] | None = None
    google: dict[str, Any] | None = None
    term: str


class AggregateResponse(BaseModel):
    """
    API response model for a brand health aggregation.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    scores: ScoresResponse
    data: SourceDataResponse
    scoring_version: str = Field(..., alias="scoringVersion")
    errors: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: AggregateResult) -> "AggregateResponse":
        return cls(
            success=True,
            scores=ScoresResponse(**result.scores.as_dict()),
            data=SourceDataResponse(
                trends=result.payload_for(SOURCE_TRENDS),
                wiki=result.payload_for(SOURCE_WIKIPEDIA),
                ddg=result.payload_for(SOURCE_DUCKDUCKGO),
                news=result.payload_for(SOURCE_NEWS),
                wikidata=result.payload_for(SOURCE_WIKIDATA),
                google=result.payload_for(SOURCE_GOOGLE),
                term=result.term,
            ),
            scoring_version=result.scoring_version,
            errors={source: item.error for source, item in result.results.items() if item.error},
        )


class ErrorResponse(BaseModel):
    """
    Error body returned for every non-200 response.
    """

    error: str
    details: Any | None = None


class UrlRequest(BaseModel):
    """
    Request body carrying a URL or a plain term.
    """

    url: str = Field(..., min_length=1, max_length=2048)


class PageMetadataData(BaseModel):
    url: str
    title: str
    meta_description: str
    og_title: str
    og_description: str
    og_site_name: str
    suggested_term: str


class PageMetadataResponse(BaseModel):
    success: bool = True
    data: PageMetadataData


class TrendsResponse(BaseModel):
    """
    Trend-only lookup response.
    """

    term: str
    timeline_data: list[dict[str, Any]] = Field(default_factory=list)
    synthetic: bool = False


class UrlMetricsResponse(BaseModel):
    """
    Moz URL metrics, passed through as the provider returned them.
    """

    url: str
    data: dict[str, Any]
