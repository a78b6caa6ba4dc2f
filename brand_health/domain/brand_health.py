"""
brand_health/domain/brand_health.py

Domain models for one brand-health aggregation request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

SOURCE_TRENDS = "trends"
SOURCE_WIKIPEDIA = "wiki"
SOURCE_DUCKDUCKGO = "ddg"
SOURCE_NEWS = "news"
SOURCE_WIKIDATA = "wikidata"
SOURCE_GOOGLE = "google"

# Unscored collaborator source behind the URL-metrics endpoint.
SOURCE_MOZ = "moz"

ALL_SOURCES = (
    SOURCE_TRENDS,
    SOURCE_WIKIPEDIA,
    SOURCE_DUCKDUCKGO,
    SOURCE_NEWS,
    SOURCE_WIKIDATA,
    SOURCE_GOOGLE,
)

_TRAILING_COMMAS = re.compile(r",+$")


class InvalidTermError(ValueError):
    """
    Raised when a query term is empty after normalization.
    """


def normalize_term(raw_term: str | None) -> str:
    """
    Trim a query term and strip trailing commas.

    Raises InvalidTermError when nothing usable remains.
    """

    if raw_term is None:
        raise InvalidTermError("term is required.")
    if not isinstance(raw_term, str):
        raise InvalidTermError("term must be a string.")

    cleaned = _TRAILING_COMMAS.sub("", raw_term.strip()).strip()
    if not cleaned:
        raise InvalidTermError("term must not be empty.")
    return cleaned


@dataclass(frozen=True)
class SourceResult:
    """
    Normalized outcome of one source adapter call.

    `payload` is None when the source errored, timed out or had no usable data.
    Some sources still return a failure-shaped payload (an empty timeline or a
    zero-valued score object) so consumers always see the same keys.
    """

    source: str
    payload: Any = None
    error: str | None = None
    elapsed_ms: float = 0.0

    @property
    def available(self) -> bool:
        return self.payload is not None

    @classmethod
    def unavailable(cls, source: str, error: str, elapsed_ms: float = 0.0) -> "SourceResult":
        return cls(source=source, payload=None, error=error, elapsed_ms=elapsed_ms)


@dataclass(frozen=True)
class BrandHealthScores:
    """
    Integer sub-scores in [0, 100] plus the overall score.
    """

    search_trend: int = 0
    wikipedia: int = 0
    search_results: int = 0
    news_coverage: int = 0
    wikidata: int = 0
    google_presence: int = 0
    overall: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "search_trend": self.search_trend,
            "wikipedia": self.wikipedia,
            "search_results": self.search_results,
            "news_coverage": self.news_coverage,
            "wikidata": self.wikidata,
            "google_presence": self.google_presence,
            "overall": self.overall,
        }


@dataclass(frozen=True)
class AggregateResult:
    """
    Scores and raw source results for one term.
    """

    term: str
    scores: BrandHealthScores
    results: dict[str, SourceResult] = field(default_factory=dict)
    scoring_version: str = ""

    def payload_for(self, source: str) -> Any:
        result = self.results.get(source)
        return result.payload if result is not None else None
