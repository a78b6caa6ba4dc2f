"""
Shared fixtures and HTTP fakes. No test touches the network.
"""

from __future__ import annotations

import json
import threading
from typing import Any

import pytest
import requests

from brand_health.config import ExternalHTTPSettings
from brand_health.connectors.base import BaseConnector


def make_response(
    status_code: int = 200,
    *,
    json_body: Any = None,
    text: str | None = None,
    content_type: str | None = None,
    url: str = "https://api.example.test/",
) -> requests.Response:
    """Build a real requests.Response without a socket."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = content_type or "application/json"
    else:
        response._content = (text or "").encode("utf-8")
        response.headers["Content-Type"] = content_type or "text/html; charset=utf-8"
    response._content_consumed = True
    return response


class FakeSession:
    """Replays queued responses (or raises queued exceptions) in order.

    The last queued item repeats once the queue is drained.
    """

    def __init__(self, responses: list[Any] | None = None) -> None:
        self._responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        json: Any = None,
        auth: tuple[str, str] | None = None,
        stream: bool = False,
    ) -> requests.Response:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "headers": headers,
                "timeout": timeout,
                "json": json,
                "auth": auth,
                "stream": stream,
            }
        )
        if not self._responses:
            raise AssertionError(f"Unexpected request to {url}")
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        stream: bool = False,
    ) -> requests.Response:
        return self.request("GET", url, headers=headers, timeout=timeout, stream=stream)

    def close(self) -> None:
        self.closed = True


class StubConnector(BaseConnector):
    """Connector returning a canned payload, optionally blocking until released."""

    def __init__(
        self,
        source: str,
        payload: Any = None,
        *,
        error: Exception | None = None,
        release: threading.Event | None = None,
    ) -> None:
        super().__init__(source=source, http_settings=ExternalHTTPSettings(), session=FakeSession())
        self.payload = payload
        self.error = error
        self.release = release
        self.calls: list[str] = []

    def _fetch(self, term: str) -> Any:
        self.calls.append(term)
        if self.release is not None:
            self.release.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture()
def http_settings() -> ExternalHTTPSettings:
    return ExternalHTTPSettings(timeout_seconds=1.0, rate_limit_per_second=0.0)


@pytest.fixture()
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record backoff sleeps instead of waiting."""
    import brand_health.connectors.base as base_module

    sleeps: list[float] = []
    monkeypatch.setattr(base_module.time, "sleep", sleeps.append)
    return sleeps
