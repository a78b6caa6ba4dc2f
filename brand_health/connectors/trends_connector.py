"""
brand_health/connectors/trends_connector.py

Search-interest time series connector using the SerpApi Google Trends engine.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import requests

from brand_health.config import ExternalHTTPSettings, TrendsSettings
from brand_health.connectors.base import (
    BaseConnector,
    ConnectorPayloadError,
    ConnectorRequestError,
    ConnectorRetriesExhaustedError,
)
from brand_health.domain.brand_health import SOURCE_TRENDS


class TrendsConnector(BaseConnector):
    """
    Connector for weekly search interest of one term.

    Rate-limit shaped failures (HTTP 429, an HTML page instead of JSON, or a
    payload without a timeline) are retried with backoff. When retries run out
    the connector reports a flat zero series instead of failing.
    """

    retryable_status_codes = frozenset({429})
    retry_on_transport_errors = False
    retry_on_invalid_payload = True

    def __init__(
        self,
        *,
        settings: TrendsSettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
        event_logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(
            source=SOURCE_TRENDS,
            http_settings=http_settings,
            retry_policy=settings.retry,
            enabled=settings.enabled,
            session=session,
            event_logger=event_logger,
        )
        self._settings = settings
        self._secrets = tuple(secret for secret in (settings.api_key,) if secret)

    def _fetch(self, term: str) -> dict[str, Any]:
        if not self._settings.api_key:
            raise ConnectorRequestError("SERP_API_KEY is missing; trend lookup skipped.")

        try:
            payload = self._request_json(
                method="GET",
                url=self._settings.base_url,
                params={
                    "engine": self._settings.engine,
                    "data_type": self._settings.data_type,
                    "q": term,
                    "api_key": self._settings.api_key,
                },
                validator=self._validate_payload,
            )
        except ConnectorRetriesExhaustedError as exc:
            self._logger.warning(
                "Trend lookup rate limited; reporting flat series source=%s weeks=%s error=%s",
                self.source,
                self._settings.synthetic_weeks,
                self._redact(str(exc.__cause__ or exc)),
            )
            return self.synthetic_series(self._settings.synthetic_weeks)

        timeline = payload["interest_over_time"]["timeline_data"]
        points = [point for point in (self._normalize_point(item) for item in timeline) if point is not None]
        return {"timeline_data": points, "error": None, "synthetic": False}

    def _failure_payload(self, error: Exception) -> dict[str, Any]:
        return {
            "timeline_data": [],
            "error": f"Failed to fetch trends data: {self._redact(str(error))}",
            "synthetic": False,
        }

    @staticmethod
    def _validate_payload(payload: Any) -> None:
        if not isinstance(payload, dict):
            raise ConnectorPayloadError("trends: payload is not a JSON object.")
        interest = payload.get("interest_over_time")
        timeline = interest.get("timeline_data") if isinstance(interest, dict) else None
        if not isinstance(timeline, list):
            message = payload.get("error") or "no interest_over_time.timeline_data in payload"
            raise ConnectorPayloadError(f"trends: {message}")

    @staticmethod
    def _normalize_point(item: Any) -> dict[str, Any] | None:
        if not isinstance(item, dict):
            return None

        values = item.get("values")
        first = values[0] if isinstance(values, list) and values else {}
        raw_value = first.get("extracted_value", first.get("value")) if isinstance(first, dict) else None
        try:
            value = float(raw_value) if raw_value is not None else 0.0
        except (TypeError, ValueError):
            value = 0.0

        return {
            "time": item.get("timestamp"),
            "formatted_time": item.get("date"),
            "value": value,
        }

    @staticmethod
    def synthetic_series(weeks: int, *, now: datetime | None = None) -> dict[str, Any]:
        """
        Build a flat zero-valued weekly series ending at `now`.
        """

        end = now or datetime.now(timezone.utc)
        start = end - timedelta(weeks=weeks - 1)
        points = []
        for index in range(weeks):
            moment = start + timedelta(weeks=index)
            points.append(
                {
                    "time": str(int(moment.timestamp())),
                    "formatted_time": moment.strftime("%b %d, %Y"),
                    "value": 0.0,
                }
            )
        return {
            "timeline_data": points,
            "error": "Trend provider rate limited; reporting a flat series.",
            "synthetic": True,
        }
