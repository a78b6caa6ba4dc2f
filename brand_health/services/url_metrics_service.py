"""
brand_health/services/url_metrics_service.py

Service wiring for the Moz URL-metrics lookup.
"""

from __future__ import annotations

from functools import lru_cache

from brand_health.config import get_external_http_settings, get_moz_settings
from brand_health.connectors import MozConnector


@lru_cache(maxsize=1)
def get_moz_connector() -> MozConnector:
    """
    Build and cache the Moz connector.
    """

    return MozConnector(settings=get_moz_settings(), http_settings=get_external_http_settings())
