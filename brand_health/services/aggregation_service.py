"""
brand_health/services/aggregation_service.py

Concurrent fan-out to every configured source and scoring of the results.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from brand_health.config import BrandHealthSettings, get_brand_health_settings
from brand_health.connectors import (
    BaseConnector,
    DuckDuckGoConnector,
    GoogleSearchConnector,
    NewsAPIConnector,
    TrendsConnector,
    WikidataConnector,
    WikipediaConnector,
)
from brand_health.domain.brand_health import (
    SOURCE_DUCKDUCKGO,
    SOURCE_GOOGLE,
    SOURCE_NEWS,
    SOURCE_TRENDS,
    SOURCE_WIKIDATA,
    SOURCE_WIKIPEDIA,
    AggregateResult,
    SourceResult,
    normalize_term,
)
from brand_health.logging_utils import log_event
from brand_health.services.timeout_guard import DEFAULT_TIMEOUT_SECONDS, guard
from scoring import SCORING_VERSION, BaseScoringModel, BrandHealthScoringModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDefinition:
    """
    One source taking part in the fan-out.

    `included` and `weight` decide the source's share of the overall score;
    excluded sources are still fetched and reported.
    """

    connector: BaseConnector
    weight: float = 1.0
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    included: bool = True


class BrandHealthAggregator:
    """
    Runs every source concurrently under its timeout and scores the outcome.
    """

    def __init__(
        self,
        *,
        sources: Mapping[str, SourceDefinition],
        scoring_model: BaseScoringModel | None = None,
        scoring_version: str = SCORING_VERSION,
        event_logger: logging.Logger | None = None,
    ) -> None:
        self._sources = dict(sources)
        self._scoring_model = scoring_model or BrandHealthScoringModel()
        self._scoring_version = scoring_version
        self._logger = event_logger or logger

    @property
    def source_names(self) -> list[str]:
        return list(self._sources)

    @property
    def weights(self) -> dict[str, float]:
        return {
            name: definition.weight
            for name, definition in self._sources.items()
            if definition.included and definition.weight > 0
        }

    async def aggregate(self, term: str) -> AggregateResult:
        """
        Fetch every source for `term` and return scores plus raw results.

        Raises InvalidTermError before any source is called when the term is empty.
        """

        normalized = normalize_term(term)
        names = list(self._sources)
        outcomes = await asyncio.gather(
            *(self._run_source(name, self._sources[name], normalized) for name in names)
        )
        results = dict(zip(names, outcomes))
        scores = self._scoring_model.compute(results, self.weights)

        log_event(
            self._logger,
            logging.INFO,
            "brand_health_aggregated",
            term=normalized,
            scoring_version=self._scoring_version,
            available_sources=sorted(name for name, result in results.items() if result.available),
            failed_sources=sorted(name for name, result in results.items() if result.error),
            overall=scores.overall,
        )
        return AggregateResult(
            term=normalized,
            scores=scores,
            results=results,
            scoring_version=self._scoring_version,
        )

    async def fetch_source(self, name: str, term: str) -> SourceResult:
        """
        Fetch a single source under its timeout.
        """

        definition = self._sources.get(name)
        if definition is None:
            allowed = ", ".join(sorted(self._sources))
            raise ValueError(f"Unsupported source '{name}'. Allowed sources: {allowed}.")
        return await self._run_source(name, definition, normalize_term(term))

    async def _run_source(self, name: str, definition: SourceDefinition, term: str) -> SourceResult:
        result = await guard(
            lambda: asyncio.to_thread(definition.connector.fetch, term),
            timeout_seconds=definition.timeout_seconds,
            label=name,
            event_logger=self._logger,
        )
        if result is None:
            return SourceResult.unavailable(
                name,
                f"{name}: no result within {definition.timeout_seconds:.1f}s",
                elapsed_ms=definition.timeout_seconds * 1000,
            )
        return result

    def close(self) -> None:
        for definition in self._sources.values():
            definition.connector.close()


def build_brand_health_aggregator(
    settings: BrandHealthSettings,
    *,
    event_logger: logging.Logger | None = None,
) -> BrandHealthAggregator:
    """
    Build the version-2 aggregator: all six sources, equal weights.
    """

    http_settings = settings.http
    connectors: list[BaseConnector] = [
        TrendsConnector(settings=settings.trends, http_settings=http_settings, event_logger=event_logger),
        WikipediaConnector(settings=settings.wikipedia, http_settings=http_settings, event_logger=event_logger),
        DuckDuckGoConnector(settings=settings.duckduckgo, http_settings=http_settings, event_logger=event_logger),
        NewsAPIConnector(settings=settings.news, http_settings=http_settings, event_logger=event_logger),
        WikidataConnector(settings=settings.wikidata, http_settings=http_settings, event_logger=event_logger),
        GoogleSearchConnector(settings=settings.google, http_settings=http_settings, event_logger=event_logger),
    ]
    ordered = (SOURCE_TRENDS, SOURCE_WIKIPEDIA, SOURCE_DUCKDUCKGO, SOURCE_NEWS, SOURCE_WIKIDATA, SOURCE_GOOGLE)
    by_source = {connector.source: connector for connector in connectors}

    return BrandHealthAggregator(
        sources={
            name: SourceDefinition(
                connector=by_source[name],
                weight=1.0,
                timeout_seconds=settings.aggregation.timeout_for(name),
            )
            for name in ordered
        },
        event_logger=event_logger,
    )


@lru_cache(maxsize=1)
def get_brand_health_aggregator() -> BrandHealthAggregator:
    """
    Build and cache the aggregator from environment settings.
    """

    return build_brand_health_aggregator(get_brand_health_settings())
