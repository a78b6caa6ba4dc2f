"""
brand_health/connectors/moz_connector.py

Moz Links API connector for URL authority metrics.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from brand_health.config import ExternalHTTPSettings, MozSettings
from brand_health.connectors.base import BaseConnector, ConnectorPayloadError, ConnectorRequestError
from brand_health.domain.brand_health import SOURCE_MOZ


class MozConnector(BaseConnector):
    """
    Connector for the link metrics Moz reports for one URL.

    Not part of the scored fan-out; it backs the URL-metrics endpoint.
    """

    def __init__(
        self,
        *,
        settings: MozSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
        event_logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(
            source=SOURCE_MOZ,
            http_settings=http_settings,
            enabled=settings.enabled,
            session=session,
            event_logger=event_logger,
        )
        self._settings = settings
        self._secrets = tuple(secret for secret in (settings.access_id, settings.secret_key) if secret)

    def _fetch(self, term: str) -> dict[str, Any]:
        if not self._settings.access_id or not self._settings.secret_key:
            raise ConnectorRequestError("MOZ_ACCESS_ID or MOZ_SECRET_KEY is missing; URL metrics skipped.")

        payload = self._request_json(
            method="POST",
            url=self._settings.base_url,
            json_body={"targets": [term]},
            auth=(self._settings.access_id, self._settings.secret_key),
        )
        if not isinstance(payload, dict):
            raise ConnectorPayloadError(f"{self.source}: payload is not a JSON object.")
        return payload
