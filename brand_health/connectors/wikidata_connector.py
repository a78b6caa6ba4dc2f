"""
brand_health/connectors/wikidata_connector.py

Wikidata entity search connector.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from brand_health.config import ExternalHTTPSettings, WikidataSettings
from brand_health.connectors.base import BaseConnector
from brand_health.domain.brand_health import SOURCE_WIKIDATA


class WikidataConnector(BaseConnector):
    """
    Connector returning the best matching knowledge-graph entity, if any.
    """

    def __init__(
        self,
        *,
        settings: WikidataSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
        event_logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(
            source=SOURCE_WIKIDATA,
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
            params={
                "action": "wbsearchentities",
                "search": term,
                "language": self._settings.language,
                "format": "json",
                "limit": 1,
            },
        )
        matches = payload.get("search") if isinstance(payload, dict) else None
        if not isinstance(matches, list) or not matches or not isinstance(matches[0], dict):
            return None

        entity = matches[0]
        aliases = entity.get("aliases") if isinstance(entity.get("aliases"), list) else []
        return {
            "id": entity.get("id"),
            "label": entity.get("label"),
            "description": entity.get("description"),
            "url": entity.get("concepturi") or entity.get("url"),
            "aliases": [alias for alias in aliases if isinstance(alias, str)],
        }
