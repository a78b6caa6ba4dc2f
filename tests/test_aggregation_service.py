"""
tests/test_aggregation_service.py

End-to-end tests for BrandHealthAggregator with stub connectors.
"""

from __future__ import annotations

import threading
import time

import pytest

from brand_health.config import (
    AggregationSettings,
    BrandHealthSettings,
    DuckDuckGoSettings,
    ExternalHTTPSettings,
    GoogleSearchSettings,
    NewsAPISettings,
    TrendsSettings,
    WikidataSettings,
    WikipediaSettings,
)
from brand_health.domain.brand_health import (
    ALL_SOURCES,
    SOURCE_DUCKDUCKGO,
    SOURCE_GOOGLE,
    SOURCE_NEWS,
    SOURCE_TRENDS,
    SOURCE_WIKIDATA,
    SOURCE_WIKIPEDIA,
    InvalidTermError,
)
from brand_health.services.aggregation_service import (
    BrandHealthAggregator,
    SourceDefinition,
    build_brand_health_aggregator,
)
from tests.conftest import StubConnector


def _acme_connectors() -> dict[str, StubConnector]:
    return {
        SOURCE_TRENDS: StubConnector(
            SOURCE_TRENDS,
            {
                "timeline_data": [{"time": "1", "formatted_time": "", "value": v} for v in (30.0, 70.0) * 5],
                "error": None,
                "synthetic": False,
            },
        ),
        SOURCE_WIKIPEDIA: StubConnector(SOURCE_WIKIPEDIA, {"title": "Acme Corp", "extract": "a" * 300}),
        SOURCE_DUCKDUCKGO: StubConnector(SOURCE_DUCKDUCKGO, error=RuntimeError("ddg down")),
        SOURCE_NEWS: StubConnector(SOURCE_NEWS, {"total_results": 4, "articles": [{"title": "x"}] * 4}),
        SOURCE_WIKIDATA: StubConnector(SOURCE_WIKIDATA, {"id": "Q1", "label": "Acme Corp"}),
        SOURCE_GOOGLE: StubConnector(SOURCE_GOOGLE, {"score": 0, "items": []}),
    }


def _aggregator(connectors: dict[str, StubConnector], timeout_seconds: float = 2.0) -> BrandHealthAggregator:
    return BrandHealthAggregator(
        sources={
            name: SourceDefinition(connector=connector, timeout_seconds=timeout_seconds)
            for name, connector in connectors.items()
        }
    )


async def test_acme_corp_end_to_end() -> None:
    connectors = _acme_connectors()

    result = await _aggregator(connectors).aggregate("  Acme Corp,, ")

    assert result.term == "Acme Corp"
    assert result.scoring_version == "2"
    assert result.scores.as_dict() == {
        "search_trend": 50,
        "wikipedia": 3,
        "search_results": 0,
        "news_coverage": 40,
        "wikidata": 80,
        "google_presence": 0,
        "overall": 29,
    }
    assert result.payload_for(SOURCE_DUCKDUCKGO) is None
    assert "ddg down" in result.results[SOURCE_DUCKDUCKGO].error
    assert result.payload_for(SOURCE_WIKIDATA)["id"] == "Q1"
    assert all(connector.calls == ["Acme Corp"] for connector in connectors.values())


@pytest.mark.parametrize("term", ["", "   ", ",,,", " , "])
async def test_empty_term_raises_before_any_call(term: str) -> None:
    connectors = _acme_connectors()

    with pytest.raises(InvalidTermError):
        await _aggregator(connectors).aggregate(term)

    assert all(connector.calls == [] for connector in connectors.values())


async def test_slow_source_times_out_without_blocking_others() -> None:
    release = threading.Event()
    connectors = _acme_connectors()
    connectors[SOURCE_WIKIPEDIA] = StubConnector(SOURCE_WIKIPEDIA, {"extract": "a" * 300}, release=release)
    aggregator = _aggregator(connectors, timeout_seconds=0.2)

    started = time.perf_counter()
    try:
        result = await aggregator.aggregate("Acme Corp")
    finally:
        release.set()
    elapsed = time.perf_counter() - started

    assert elapsed < 2.0
    assert result.payload_for(SOURCE_WIKIPEDIA) is None
    assert "no result within 0.2s" in result.results[SOURCE_WIKIPEDIA].error
    assert result.scores.wikipedia == 0
    assert result.scores.wikidata == 80
    assert result.scores.overall == 28


async def test_all_sources_failing_scores_zero() -> None:
    connectors = {name: StubConnector(name, error=RuntimeError("down")) for name in ALL_SOURCES}

    result = await _aggregator(connectors).aggregate("Acme Corp")

    assert result.scores.overall == 0
    assert all(not source_result.available for source_result in result.results.values())


async def test_excluded_source_is_reported_but_not_scored() -> None:
    connectors = _acme_connectors()
    aggregator = BrandHealthAggregator(
        sources={
            name: SourceDefinition(connector=connector, included=name != SOURCE_GOOGLE)
            for name, connector in connectors.items()
        }
    )

    result = await aggregator.aggregate("Acme Corp")

    assert SOURCE_GOOGLE not in aggregator.weights
    assert result.payload_for(SOURCE_GOOGLE) == {"score": 0, "items": []}
    assert result.scores.overall == 35


async def test_fetch_single_source() -> None:
    connectors = _acme_connectors()

    result = await _aggregator(connectors).fetch_source(SOURCE_WIKIDATA, "Acme Corp")

    assert result.payload["label"] == "Acme Corp"
    assert connectors[SOURCE_TRENDS].calls == []


async def test_fetch_unknown_source() -> None:
    with pytest.raises(ValueError, match="Unsupported source 'moz'"):
        await _aggregator(_acme_connectors()).fetch_source("moz", "Acme Corp")


def test_build_from_settings_wires_six_sources() -> None:
    settings = BrandHealthSettings(
        http=ExternalHTTPSettings(),
        aggregation=AggregationSettings(source_timeouts={SOURCE_WIKIPEDIA: 2.5}),
        trends=TrendsSettings(),
        wikipedia=WikipediaSettings(),
        duckduckgo=DuckDuckGoSettings(),
        news=NewsAPISettings(),
        wikidata=WikidataSettings(),
        google=GoogleSearchSettings(),
    )

    aggregator = build_brand_health_aggregator(settings)

    assert aggregator.source_names == list(ALL_SOURCES)
    assert aggregator.weights == {name: 1.0 for name in ALL_SOURCES}
    aggregator.close()


def test_close_closes_every_session() -> None:
    connectors = _acme_connectors()

    _aggregator(connectors).close()

    assert all(connector._session.closed for connector in connectors.values())
