"""
brand_health/connectors/google_search_connector.py

Google Custom Search connector scoring a brand's web presence.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from brand_health.config import ExternalHTTPSettings, GoogleSearchSettings
from brand_health.connectors.base import BaseConnector, ConnectorRequestError
from brand_health.domain.brand_health import SOURCE_GOOGLE
from scoring.search_presence import SearchPresenceModel


class GoogleSearchConnector(BaseConnector):
    """
    Connector for the first page of web results for a brand.

    Failures are reported as a zero-valued score object rather than None.
    """

    def __init__(
        self,
        *,
        settings: GoogleSearchSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
        event_logger: logging.Logger | None = None,
        presence_model: SearchPresenceModel | None = None,
    ) -> None:
        super().__init__(
            source=SOURCE_GOOGLE,
            http_settings=http_settings,
            enabled=settings.enabled,
            session=session,
            event_logger=event_logger,
        )
        self._settings = settings
        self._presence_model = presence_model or SearchPresenceModel()
        self._secrets = tuple(secret for secret in (settings.api_key, settings.search_engine_id) if secret)

    def _fetch(self, term: str) -> dict[str, Any]:
        if not self._settings.api_key or not self._settings.search_engine_id:
            raise ConnectorRequestError("GOOGLE_API_KEY or GOOGLE_CSE_ID is missing; web search skipped.")

        payload = self._request_json(
            method="GET",
            url=self._settings.base_url,
            params={
                "q": self.build_query(term),
                "key": self._settings.api_key,
                "cx": self._settings.search_engine_id,
                "num": self._settings.num_results,
            },
        )
        if not isinstance(payload, dict):
            raise ConnectorRequestError(f"{self.source}: payload is not a JSON object.")

        raw_items = payload.get("items") if isinstance(payload.get("items"), list) else []
        items = [
            {
                "title": item.get("title") or "",
                "link": item.get("link") or "",
                "snippet": item.get("snippet") or "",
            }
            for item in raw_items
            if isinstance(item, dict)
        ]
        search_info = payload.get("searchInformation") if isinstance(payload.get("searchInformation"), dict) else {}
        total_results = self._parse_total(search_info.get("totalResults"))

        scored = self._presence_model.compute(term, items, total_results)
        return {**scored, "total_results": total_results, "items": items}

    def _failure_payload(self, error: Exception) -> dict[str, Any]:
        return self.zero_score()

    def build_query(self, term: str) -> str:
        parts = [term]
        parts.extend(self._settings.extra_keywords)
        parts.extend(f"-site:{site}" for site in self._settings.excluded_sites)
        return " ".join(parts)

    @staticmethod
    def zero_score() -> dict[str, Any]:
        return {
            "score": 0,
            "total_results": 0,
            "exact_matches": 0,
            "authority_score": 0,
            "items": [],
        }

    @staticmethod
    def _parse_total(raw_value: Any) -> int:
        try:
            return int(raw_value or 0)
        except (TypeError, ValueError):
            return 0
