"""
brand_health/connectors package marker.
"""

from brand_health.connectors.base import (
    BaseConnector,
    ConnectorPayloadError,
    ConnectorRequestError,
    ConnectorRetriesExhaustedError,
)
from brand_health.connectors.duckduckgo_connector import DuckDuckGoConnector
from brand_health.connectors.google_search_connector import GoogleSearchConnector
from brand_health.connectors.moz_connector import MozConnector
from brand_health.connectors.news_api_connector import NewsAPIConnector
from brand_health.connectors.trends_connector import TrendsConnector
from brand_health.connectors.wikidata_connector import WikidataConnector
from brand_health.connectors.wikipedia_connector import WikipediaConnector

__all__ = [
    "BaseConnector",
    "ConnectorPayloadError",
    "ConnectorRequestError",
    "ConnectorRetriesExhaustedError",
    "DuckDuckGoConnector",
    "GoogleSearchConnector",
    "MozConnector",
    "NewsAPIConnector",
    "TrendsConnector",
    "WikidataConnector",
    "WikipediaConnector",
]
