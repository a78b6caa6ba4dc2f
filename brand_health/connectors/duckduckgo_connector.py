"""
brand_health/connectors/duckduckgo_connector.py

DuckDuckGo instant answer connector.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from brand_health.config import DuckDuckGoSettings, ExternalHTTPSettings
from brand_health.connectors.base import BaseConnector
from brand_health.domain.brand_health import SOURCE_DUCKDUCKGO


class DuckDuckGoConnector(BaseConnector):
    """
    Connector for the abstract and related topics DuckDuckGo knows for a term.
    """

    def __init__(
        self,
        *,
        settings: DuckDuckGoSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
        event_logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(
            source=SOURCE_DUCKDUCKGO,
            http_settings=http_settings,
            enabled=settings.enabled,
            session=session,
            event_logger=event_logger,
        )
        self._settings = settings

    def _fetch(self, term: str) -> dict[str, Any] | None:
        payload = self._request_json(
            method="GET",
            url=self._settings.base_url,
            params={"q": term, "format": "json", "no_html": 1, "skip_disambig": 0},
        )
        if not isinstance(payload, dict):
            return None

        related = payload.get("RelatedTopics") if isinstance(payload.get("RelatedTopics"), list) else []
        topics = [self._normalize_topic(item) for item in related if isinstance(item, dict)]
        return {
            "heading": payload.get("Heading") or "",
            "abstract": payload.get("AbstractText") or payload.get("Abstract") or "",
            "abstract_url": payload.get("AbstractURL") or None,
            "related_topics": topics,
        }

    @staticmethod
    def _normalize_topic(item: dict[str, Any]) -> dict[str, Any]:
        # Grouped topics carry a Name and nested Topics instead of Text.
        if "Topics" in item and "Text" not in item:
            nested = item.get("Topics") if isinstance(item.get("Topics"), list) else []
            return {
                "text": item.get("Name") or "",
                "first_url": None,
                "icon_url": None,
                "topic_count": len(nested),
            }

        icon = item.get("Icon") if isinstance(item.get("Icon"), dict) else {}
        return {
            "text": item.get("Text") or "",
            "first_url": item.get("FirstURL") or None,
            "icon_url": icon.get("URL") or None,
        }
