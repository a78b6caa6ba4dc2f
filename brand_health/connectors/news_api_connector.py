"""
brand_health/connectors/news_api_connector.py

News API connector for brand press coverage.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from brand_health.config import ExternalHTTPSettings, NewsAPISettings
from brand_health.connectors.base import BaseConnector, ConnectorRequestError
from brand_health.domain.brand_health import SOURCE_NEWS


class NewsAPIConnector(BaseConnector):
    """
    Connector for articles that mention the exact brand name.
    """

    def __init__(
        self,
        *,
        settings: NewsAPISettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
        event_logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(
            source=SOURCE_NEWS,
            http_settings=http_settings,
            enabled=settings.enabled,
            session=session,
            event_logger=event_logger,
        )
        self._settings = settings
        self._secrets = tuple(secret for secret in (settings.api_key,) if secret)

    def _fetch(self, term: str) -> dict[str, Any] | None:
        if not self._settings.api_key:
            raise ConnectorRequestError("NEWS_API_KEY is missing; news lookup skipped.")

        payload = self._request_json(
            method="GET",
            url=self._settings.base_url,
            params={
                "q": self.exact_query(term),
                "language": self._settings.language,
                "sortBy": self._settings.sort_by,
                "pageSize": self._settings.page_size,
            },
            headers={"X-Api-Key": self._settings.api_key},
        )
        if not isinstance(payload, dict) or payload.get("status") == "error":
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ConnectorRequestError(f"{self.source}: provider error: {message or 'unexpected payload'}")

        articles = payload.get("articles") if isinstance(payload.get("articles"), list) else []
        normalized = [item for item in (self._normalize_article(article) for article in articles) if item is not None]
        return {
            "total_results": int(payload.get("totalResults") or 0),
            "articles": normalized,
        }

    @staticmethod
    def exact_query(term: str) -> str:
        cleaned = term.replace(",", " ").replace('"', " ")
        return f'"{" ".join(cleaned.split())}"'

    @staticmethod
    def _normalize_article(article: Any) -> dict[str, Any] | None:
        if not isinstance(article, dict):
            return None

        title = (article.get("title") or "").strip()
        if not title:
            return None

        source_meta = article.get("source") if isinstance(article.get("source"), dict) else {}
        return {
            "title": title,
            "description": article.get("description"),
            "url": article.get("url"),
            "published_at": article.get("publishedAt"),
            "source": source_meta.get("name"),
        }
