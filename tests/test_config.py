"""
tests/test_config.py

Environment-driven settings resolution.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from brand_health import config


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    getters = (
        config.get_app_settings,
        config.get_aggregation_settings,
        config.get_trends_settings,
        config.get_google_search_settings,
        config.get_external_http_settings,
        config.get_moz_settings,
    )
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("AGGREGATION_TIMEOUT_SECONDS", "TRENDS_TIMEOUT_SECONDS", "TRENDS_MAX_RETRIES", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)

    aggregation = config.get_aggregation_settings()
    trends = config.get_trends_settings()

    assert aggregation.timeout_for("wiki") == 5.0
    assert trends.retry.max_retries == 5
    assert trends.retry.backoff_for(0) == 1.0
    assert trends.retry.backoff_for(4) == 16.0
    assert trends.retry.max_elapsed_seconds == pytest.approx(4.5)
    assert config.get_app_settings().is_production is False


def test_per_source_timeout_bounds_trend_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGGREGATION_TIMEOUT_SECONDS", "6")
    monkeypatch.setenv("TRENDS_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("NEWS_TIMEOUT_SECONDS", "not-a-number")

    aggregation = config.get_aggregation_settings()

    assert aggregation.timeout_for("trends") == 3.5
    assert aggregation.timeout_for("news") == 6.0
    assert config.get_trends_settings().retry.max_elapsed_seconds == pytest.approx(3.15)


def test_google_lists(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_SEARCH_EXTRA_KEYWORDS", "company, brand ,")
    monkeypatch.setenv("GOOGLE_SEARCH_EXCLUDED_SITES", "pinterest.com")
    monkeypatch.setenv("GOOGLE_SEARCH_NUM_RESULTS", "50")

    settings = config.get_google_search_settings()

    assert settings.extra_keywords == ("company", "brand")
    assert settings.excluded_sites == ("pinterest.com",)
    assert settings.num_results == 10


def test_production_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "Production")

    assert config.get_app_settings().is_production is True


def test_http_timeout_floor(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXTERNAL_HTTP_TIMEOUT_SECONDS", "0")

    assert config.get_external_http_settings().timeout_seconds == 0.5


def test_moz_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MOZ_ACCESS_ID", "moz-id")
    monkeypatch.setenv("MOZ_SECRET_KEY", "moz-secret")

    settings = config.get_moz_settings()

    assert settings.enabled is True
    assert (settings.access_id, settings.secret_key) == ("moz-id", "moz-secret")
    assert settings.base_url == "https://lsapi.seomoz.com/v2/url_metrics"
