"""
brand_health/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

_PRODUCTION_ENVIRONMENTS = {"prod", "production"}

# Share of the trend source timeout its retry loop may spend.
TRENDS_RETRY_BUDGET_FRACTION = 0.9


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _get_list_env(name: str) -> tuple[str, ...]:
    """
    Read a comma-separated list from environment variables.
    """

    raw_value = _get_optional_str_env(name)
    if raw_value is None:
        return ()
    return tuple(item.strip() for item in raw_value.split(",") if item.strip())


@dataclass(frozen=True)
class AppSettings:
    """
    Top-level application settings.
    """

    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment in _PRODUCTION_ENVIRONMENTS


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry behaviour for one source.

    `max_elapsed_seconds` caps the total time spent sleeping between attempts
    so a retry loop never outlives the aggregation timeout for its source.
    """

    max_retries: int = 0
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    max_elapsed_seconds: float | None = None

    def backoff_for(self, attempt: int) -> float:
        return self.backoff_initial_seconds * (self.backoff_multiplier**attempt)


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    Shared HTTP behavior settings for external connectors.
    """

    timeout_seconds: float = 4.0
    rate_limit_per_second: float = 0.0
    user_agent: str = "brand-health/1.0"


@dataclass(frozen=True)
class TrendsSettings:
    """
    Search-trend time series connector settings (SerpApi Google Trends engine).
    """

    enabled: bool = True
    api_key: str | None = None
    base_url: str = "https://serpapi.com/search.json"
    engine: str = "google_trends"
    data_type: str = "TIMESERIES"
    synthetic_weeks: int = 52
    retry: RetryPolicy = field(
        default_factory=lambda: RetryPolicy(
            max_retries=5,
            backoff_initial_seconds=1.0,
            backoff_multiplier=2.0,
        )
    )


@dataclass(frozen=True)
class WikipediaSettings:
    """
    Wikipedia REST summary connector settings.
    """

    enabled: bool = True
    base_url: str = "https://en.wikipedia.org/api/rest_v1/page/summary"
    disambiguation_hint: str | None = "company"


@dataclass(frozen=True)
class DuckDuckGoSettings:
    """
    DuckDuckGo instant answer connector settings.
    """

    enabled: bool = True
    base_url: str = "https://api.duckduckgo.com/"


@dataclass(frozen=True)
class NewsAPISettings:
    """
    News API connector settings.
    """

    enabled: bool = True
    api_key: str | None = None
    base_url: str = "https://newsapi.org/v2/everything"
    language: str = "en"
    sort_by: str = "relevancy"
    page_size: int = 10


@dataclass(frozen=True)
class WikidataSettings:
    """
    Wikidata entity search connector settings.
    """

    enabled: bool = True
    base_url: str = "https://www.wikidata.org/w/api.php"
    language: str = "en"


@dataclass(frozen=True)
class GoogleSearchSettings:
    """
    Google Custom Search connector settings.
    """

    enabled: bool = True
    api_key: str | None = None
    search_engine_id: str | None = None
    base_url: str = "https://www.googleapis.com/customsearch/v1"
    num_results: int = 10
    extra_keywords: tuple[str, ...] = ()
    excluded_sites: tuple[str, ...] = ()


@dataclass(frozen=True)
class MozSettings:
    """
    Moz Links API URL-metrics connector settings.
    """

    enabled: bool = True
    access_id: str | None = None
    secret_key: str | None = None
    base_url: str = "https://lsapi.seomoz.com/v2/url_metrics"


@dataclass(frozen=True)
class AggregationSettings:
    """
    Per-source timeout budgets for the aggregation fan-out.
    """

    default_timeout_seconds: float = 5.0
    source_timeouts: dict[str, float] = field(default_factory=dict)

    def timeout_for(self, source: str) -> float:
        return self.source_timeouts.get(source, self.default_timeout_seconds)


@dataclass(frozen=True)
class PageScrapeSettings:
    """
    Page metadata scrape settings.
    """

    timeout_seconds: float = 10.0
    max_bytes: int = 2_000_000


@dataclass(frozen=True)
class BrandHealthSettings:
    """
    Everything the aggregator and its connectors need, resolved once.
    """

    http: ExternalHTTPSettings
    aggregation: AggregationSettings
    trends: TrendsSettings
    wikipedia: WikipediaSettings
    duckduckgo: DuckDuckGoSettings
    news: NewsAPISettings
    wikidata: WikidataSettings
    google: GoogleSearchSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings.
    """

    return AppSettings(
        environment=_get_str_env("ENVIRONMENT", "development").lower(),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return shared connector HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(0.5, _get_float_env("EXTERNAL_HTTP_TIMEOUT_SECONDS", 4.0)),
        rate_limit_per_second=max(0.0, _get_float_env("EXTERNAL_HTTP_RATE_LIMIT_PER_SECOND", 0.0)),
        user_agent=_get_str_env("EXTERNAL_HTTP_USER_AGENT", "brand-health/1.0"),
    )


@lru_cache(maxsize=1)
def get_aggregation_settings() -> AggregationSettings:
    """
    Return aggregation timeout settings from environment variables.

    Per-source overrides use `<SOURCE>_TIMEOUT_SECONDS`, e.g. `TRENDS_TIMEOUT_SECONDS`.
    """

    default_timeout = max(0.1, _get_float_env("AGGREGATION_TIMEOUT_SECONDS", 5.0))
    overrides: dict[str, float] = {}
    for source in ("trends", "wiki", "ddg", "news", "wikidata", "google"):
        value = _get_float_env(f"{source.upper()}_TIMEOUT_SECONDS", -1.0)
        if value > 0:
            overrides[source] = value
    return AggregationSettings(default_timeout_seconds=default_timeout, source_timeouts=overrides)


@lru_cache(maxsize=1)
def get_trends_settings() -> TrendsSettings:
    """
    Return trend connector settings from environment variables.
    """

    aggregation = get_aggregation_settings()
    return TrendsSettings(
        enabled=_get_bool_env("TRENDS_ENABLED", True),
        api_key=_get_optional_str_env("SERP_API_KEY"),
        base_url=_get_str_env("TRENDS_BASE_URL", "https://serpapi.com/search.json"),
        synthetic_weeks=max(1, _get_int_env("TRENDS_SYNTHETIC_WEEKS", 52)),
        retry=RetryPolicy(
            max_retries=max(0, _get_int_env("TRENDS_MAX_RETRIES", 5)),
            backoff_initial_seconds=max(0.0, _get_float_env("TRENDS_BACKOFF_INITIAL_SECONDS", 1.0)),
            backoff_multiplier=max(1.0, _get_float_env("TRENDS_BACKOFF_MULTIPLIER", 2.0)),
            max_elapsed_seconds=aggregation.timeout_for("trends") * TRENDS_RETRY_BUDGET_FRACTION,
        ),
    )


@lru_cache(maxsize=1)
def get_wikipedia_settings() -> WikipediaSettings:
    """
    Return Wikipedia connector settings from environment variables.
    """

    return WikipediaSettings(
        enabled=_get_bool_env("WIKIPEDIA_ENABLED", True),
        base_url=_get_str_env(
            "WIKIPEDIA_BASE_URL",
            "https://en.wikipedia.org/api/rest_v1/page/summary",
        ),
        disambiguation_hint=_get_optional_str_env("WIKIPEDIA_DISAMBIGUATION_HINT") or "company",
    )


@lru_cache(maxsize=1)
def get_duckduckgo_settings() -> DuckDuckGoSettings:
    """
    Return DuckDuckGo connector settings from environment variables.
    """

    return DuckDuckGoSettings(
        enabled=_get_bool_env("DUCKDUCKGO_ENABLED", True),
        base_url=_get_str_env("DUCKDUCKGO_BASE_URL", "https://api.duckduckgo.com/"),
    )


@lru_cache(maxsize=1)
def get_news_api_settings() -> NewsAPISettings:
    """
    Return News API connector settings from environment variables.
    """

    return NewsAPISettings(
        enabled=_get_bool_env("NEWS_API_ENABLED", True),
        api_key=_get_optional_str_env("NEWS_API_KEY"),
        base_url=_get_str_env("NEWS_API_BASE_URL", "https://newsapi.org/v2/everything"),
        language=_get_str_env("NEWS_API_LANGUAGE", "en"),
        sort_by=_get_str_env("NEWS_API_SORT_BY", "relevancy"),
        page_size=max(1, _get_int_env("NEWS_API_PAGE_SIZE", 10)),
    )


@lru_cache(maxsize=1)
def get_wikidata_settings() -> WikidataSettings:
    """
    Return Wikidata connector settings from environment variables.
    """

    return WikidataSettings(
        enabled=_get_bool_env("WIKIDATA_ENABLED", True),
        base_url=_get_str_env("WIKIDATA_BASE_URL", "https://www.wikidata.org/w/api.php"),
        language=_get_str_env("WIKIDATA_LANGUAGE", "en"),
    )


@lru_cache(maxsize=1)
def get_google_search_settings() -> GoogleSearchSettings:
    """
    Return Google Custom Search connector settings from environment variables.
    """

    return GoogleSearchSettings(
        enabled=_get_bool_env("GOOGLE_SEARCH_ENABLED", True),
        api_key=_get_optional_str_env("GOOGLE_API_KEY"),
        search_engine_id=_get_optional_str_env("GOOGLE_CSE_ID"),
        base_url=_get_str_env("GOOGLE_SEARCH_BASE_URL", "https://www.googleapis.com/customsearch/v1"),
        num_results=min(10, max(1, _get_int_env("GOOGLE_SEARCH_NUM_RESULTS", 10))),
        extra_keywords=_get_list_env("GOOGLE_SEARCH_EXTRA_KEYWORDS"),
        excluded_sites=_get_list_env("GOOGLE_SEARCH_EXCLUDED_SITES"),
    )


@lru_cache(maxsize=1)
def get_moz_settings() -> MozSettings:
    """
    Return Moz connector settings from environment variables.
    """

    return MozSettings(
        enabled=_get_bool_env("MOZ_ENABLED", True),
        access_id=_get_optional_str_env("MOZ_ACCESS_ID"),
        secret_key=_get_optional_str_env("MOZ_SECRET_KEY"),
        base_url=_get_str_env("MOZ_BASE_URL", "https://lsapi.seomoz.com/v2/url_metrics"),
    )


@lru_cache(maxsize=1)
def get_page_scrape_settings() -> PageScrapeSettings:
    """
    Return page metadata scrape settings from environment variables.
    """

    return PageScrapeSettings(
        timeout_seconds=max(1.0, _get_float_env("PAGE_SCRAPE_TIMEOUT_SECONDS", 10.0)),
        max_bytes=max(1024, _get_int_env("PAGE_SCRAPE_MAX_BYTES", 2_000_000)),
    )


@lru_cache(maxsize=1)
def get_brand_health_settings() -> BrandHealthSettings:
    """
    Return the composite settings object handed to the aggregator.
    """

    return BrandHealthSettings(
        http=get_external_http_settings(),
        aggregation=get_aggregation_settings(),
        trends=get_trends_settings(),
        wikipedia=get_wikipedia_settings(),
        duckduckgo=get_duckduckgo_settings(),
        news=get_news_api_settings(),
        wikidata=get_wikidata_settings(),
        google=get_google_search_settings(),
    )
