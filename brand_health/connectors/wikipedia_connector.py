"""
brand_health/connectors/wikipedia_connector.py

Wikipedia REST page-summary connector.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from brand_health.config import ExternalHTTPSettings, WikipediaSettings
from brand_health.connectors.base import BaseConnector, ConnectorRequestError
from brand_health.domain.brand_health import SOURCE_WIKIPEDIA


class WikipediaConnector(BaseConnector):
    """
    Connector for the encyclopedia summary of a brand.

    Looks up `<term>_(<hint>)` first so company articles win over homonyms,
    then falls back to the bare term.
    """

    def __init__(
        self,
        *,
        settings: WikipediaSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
        event_logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(
            source=SOURCE_WIKIPEDIA,
            http_settings=http_settings,
            enabled=settings.enabled,
            session=session,
            event_logger=event_logger,
        )
        self._settings = settings

    def _fetch(self, term: str) -> dict[str, Any] | None:
        last_error: ConnectorRequestError | None = None
        for title in self.candidate_titles(term, self._settings.disambiguation_hint):
            try:
                payload = self._request_json(method="GET", url=self._summary_url(title))
            except ConnectorRequestError as exc:
                last_error = exc
                continue

            summary = self._normalize_summary(payload)
            if summary is not None:
                return summary

        if last_error is not None:
            raise last_error
        return None

    @staticmethod
    def candidate_titles(term: str, hint: str | None) -> list[str]:
        base = "_".join(term.split())
        if not hint:
            return [base]
        return [f"{base}_({hint})", base]

    def _summary_url(self, title: str) -> str:
        return f"{self._settings.base_url.rstrip('/')}/{quote(title, safe='')}"

    @staticmethod
    def _normalize_summary(payload: Any) -> dict[str, Any] | None:
        if not isinstance(payload, dict):
            return None

        extract = (payload.get("extract") or "").strip()
        if not extract:
            return None

        content_urls = payload.get("content_urls") if isinstance(payload.get("content_urls"), dict) else {}
        desktop = content_urls.get("desktop") if isinstance(content_urls.get("desktop"), dict) else {}
        return {
            "title": payload.get("title"),
            "extract": extract,
            "description": payload.get("description"),
            "type": payload.get("type"),
            "url": desktop.get("page"),
        }
