"""
brand_health/connectors/base.py

Base connector abstraction and shared HTTP mechanics.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import requests

from brand_health.config import ExternalHTTPSettings, RetryPolicy
from brand_health.domain.brand_health import SourceResult
from brand_health.logging_utils import log_event, redact

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class ConnectorRequestError(RuntimeError):
    """
    Raised when a connector cannot fetch data.
    """


class ConnectorPayloadError(ConnectorRequestError):
    """
    Raised when a response body is not JSON or lacks the expected structure.
    """


class ConnectorRetriesExhaustedError(ConnectorRequestError):
    """
    Raised when every retry allowed by the connector's policy has failed.
    """


class BaseConnector(ABC):
    """
    Source adapter interface: one term in, one normalized SourceResult out.

    `fetch` never raises. Subclasses implement `_fetch`, which may raise
    ConnectorRequestError, and `_failure_payload` for sources that report
    failures with a specific shape instead of None.
    """

    source: str
    retryable_status_codes: frozenset[int] = RETRYABLE_STATUS_CODES
    retry_on_transport_errors: bool = True
    retry_on_invalid_payload: bool = False

    def __init__(
        self,
        *,
        source: str,
        http_settings: ExternalHTTPSettings,
        retry_policy: RetryPolicy | None = None,
        enabled: bool = True,
        session: requests.Session | None = None,
        event_logger: logging.Logger | None = None,
    ) -> None:
        self.source = source
        self._enabled = enabled
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._user_agent = http_settings.user_agent
        self._retry_policy = retry_policy or RetryPolicy()
        self._logger = event_logger or logger
        self._min_request_interval_seconds = (
            1.0 / http_settings.rate_limit_per_second if http_settings.rate_limit_per_second > 0 else 0.0
        )
        self._last_request_monotonic: float = 0.0
        self._secrets: tuple[str, ...] = ()

    def fetch(self, term: str) -> SourceResult:
        """
        Fetch and normalize data for `term`, converting every failure into a result.
        """

        started = time.perf_counter()
        if not self._enabled:
            return SourceResult.unavailable(self.source, "disabled")

        error: str | None = None
        try:
            payload = self._fetch(term)
            if payload is None:
                error = "no usable data"
        except ConnectorRequestError as exc:
            error = self._redact(str(exc))
            payload = self._failure_payload(exc)
        except Exception as exc:
            self._logger.exception("Unhandled connector failure source=%s", self.source)
            error = self._redact(f"{self.source}: unexpected error: {exc}")
            payload = self._failure_payload(exc)

        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        log_event(
            self._logger,
            logging.INFO if error is None else logging.WARNING,
            "source_fetch_completed",
            source=self.source,
            available=payload is not None,
            error=error,
            elapsed_ms=elapsed_ms,
        )
        return SourceResult(source=self.source, payload=payload, error=error, elapsed_ms=elapsed_ms)

    @abstractmethod
    def _fetch(self, term: str) -> Any:
        """
        Fetch external data for `term` and return the normalized payload or None.
        """

    def _failure_payload(self, error: Exception) -> Any:
        """
        Payload reported when `_fetch` fails.
        """

        return None

    def _request_json(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        auth: tuple[str, str] | None = None,
        validator: Callable[[Any], None] | None = None,
    ) -> Any:
        """
        Execute an HTTP request and return parsed JSON with retry support.

        `validator` raises ConnectorPayloadError for structurally invalid bodies.
        """

        def attempt(timeout_seconds: float) -> Any:
            response = self._send(
                method=method,
                url=url,
                params=params,
                headers=headers,
                json_body=json_body,
                auth=auth,
                timeout_seconds=timeout_seconds,
            )
            try:
                payload = response.json()
            except ValueError as exc:
                raise ConnectorPayloadError(f"{self.source}: response was not valid JSON.") from exc
            if validator is not None:
                validator(payload)
            return payload

        return self._with_retries(url=url, attempt=attempt)

    def _with_retries(self, *, url: str, attempt: Callable[[float], Any]) -> Any:
        """
        Run `attempt(timeout_seconds)` until it succeeds or the policy gives up.

        With a `max_elapsed_seconds` budget, each request timeout is capped at
        the time left, so sleeps and requests together never outlast it.
        """

        policy = self._retry_policy
        started = time.monotonic()
        last_error: Exception | None = None

        for attempt_index in range(policy.max_retries + 1):
            timeout_seconds = self._timeout_seconds
            if policy.max_elapsed_seconds is not None:
                remaining = policy.max_elapsed_seconds - (time.monotonic() - started)
                if remaining <= 0:
                    break
                timeout_seconds = min(timeout_seconds, remaining)

            try:
                return attempt(timeout_seconds)
            except requests.HTTPError as exc:
                last_error = exc
            except ConnectorPayloadError as exc:
                if not self.retry_on_invalid_payload:
                    raise
                last_error = exc
            except (requests.Timeout, requests.ConnectionError) as exc:
                if isinstance(exc, requests.Timeout) and timeout_seconds < self._timeout_seconds:
                    # Cut short by the retry budget rather than by the provider.
                    last_error = exc
                    break
                if not self.retry_on_transport_errors:
                    raise ConnectorRequestError(f"{self.source}: transport failure: {exc}") from exc
                last_error = exc

            if attempt_index >= policy.max_retries:
                break

            backoff_seconds = policy.backoff_for(attempt_index)
            if policy.max_elapsed_seconds is not None:
                elapsed = time.monotonic() - started
                if elapsed + backoff_seconds >= policy.max_elapsed_seconds:
                    self._logger.warning(
                        "Connector retry budget exhausted source=%s attempt=%s elapsed_seconds=%.2f",
                        self.source,
                        attempt_index + 1,
                        elapsed,
                    )
                    break

            self._logger.warning(
                "Connector request retry source=%s attempt=%s/%s wait_seconds=%.2f error=%s",
                self.source,
                attempt_index + 1,
                policy.max_retries,
                backoff_seconds,
                self._redact(str(last_error)),
            )
            time.sleep(backoff_seconds)

        self._logger.error(
            "Connector request exhausted retries source=%s url=%s error=%s",
            self.source,
            url,
            self._redact(str(last_error)),
        )
        raise ConnectorRetriesExhaustedError(f"{self.source}: request failed after retries.") from last_error

    def _send(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        json_body: Any = None,
        auth: tuple[str, str] | None = None,
        timeout_seconds: float | None = None,
    ) -> requests.Response:
        """
        Issue one request. Retryable statuses surface as requests.HTTPError.
        """

        self._apply_rate_limit()
        merged_headers = {"User-Agent": self._user_agent, "Accept": "application/json"}
        if headers:
            merged_headers.update(headers)

        response = self._session.request(
            method=method,
            url=url,
            params=params,
            headers=merged_headers,
            json=json_body,
            auth=auth,
            timeout=timeout_seconds if timeout_seconds is not None else self._timeout_seconds,
        )
        if response.status_code in self.retryable_status_codes:
            raise requests.HTTPError(
                f"Retryable HTTP status code: {response.status_code}",
                response=response,
            )
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            self._logger.error(
                "Connector request failed source=%s status=%s",
                self.source,
                response.status_code,
            )
            raise ConnectorRequestError(
                f"{self.source}: non-retryable request failure (status={response.status_code})."
            ) from exc
        return response

    def _apply_rate_limit(self) -> None:
        """
        Enforce minimum interval between outbound requests.
        """

        if self._min_request_interval_seconds <= 0:
            return

        now = time.monotonic()
        elapsed = now - self._last_request_monotonic
        remaining = self._min_request_interval_seconds - elapsed
        if remaining > 0:
            time.sleep(remaining)
        self._last_request_monotonic = time.monotonic()

    def _redact(self, text: str) -> str:
        return redact(text, *self._secrets)

    def close(self) -> None:
        self._session.close()
