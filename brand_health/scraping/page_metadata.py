"""
BeautifulSoup-based metadata extraction for brand landing pages.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from brand_health.config import PageScrapeSettings
from brand_health.domain.page_metadata import PageMetadata
from brand_health.logging_utils import log_event

logger = logging.getLogger(__name__)

TITLE_SEPARATORS = re.compile(r"\s+[|\-–—:·]\s+")
HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")
READ_CHUNK_BYTES = 64 * 1024


class PageScrapeError(RuntimeError):
    """
    Raised when a page cannot be fetched or is not HTML.
    """


def normalize_url(raw_url: str) -> str:
    """
    Return an absolute http(s) URL, adding https:// when no scheme is given.
    """

    candidate = (raw_url or "").strip()
    if not candidate:
        raise ValueError("url is required.")
    if "://" not in candidate:
        candidate = f"https://{candidate}"

    parsed = urlparse(candidate)
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        raise ValueError(f"'{raw_url}' is not a valid http(s) URL.")
    return candidate


def hostname_term(value: str) -> str:
    """
    Use the host of a URL (minus `www.`) as a search term; plain terms pass through.
    """

    stripped = (value or "").strip()
    parsed = urlparse(stripped)
    if parsed.scheme in {"http", "https"} and parsed.hostname:
        host = parsed.hostname.lower()
        return host[4:] if host.startswith("www.") else host
    return stripped


class PageMetadataParser:
    """
    Deterministic parser for title, description and Open Graph tags.
    """

    @classmethod
    def parse(cls, *, url: str, html: str | bytes) -> PageMetadata:
        soup = BeautifulSoup(html, "html.parser")
        title = cls._clean_text(soup.title.get_text(" ", strip=True)) if soup.title else ""
        meta_description = cls._meta_content(soup, name="description")
        og_title = cls._meta_content(soup, prop="og:title")
        og_description = cls._meta_content(soup, prop="og:description")
        og_site_name = cls._meta_content(soup, prop="og:site_name")

        return PageMetadata(
            url=url,
            title=title,
            meta_description=meta_description,
            og_title=og_title,
            og_description=og_description,
            og_site_name=og_site_name,
            suggested_term=cls.suggest_term(
                url=url,
                candidates=(og_site_name, og_title, title),
            ),
        )

    @classmethod
    def suggest_term(cls, *, url: str, candidates: tuple[str, ...]) -> str:
        """
        First segment of the best available page name, else the bare domain label.
        """

        for candidate in candidates:
            if not candidate:
                continue
            head = TITLE_SEPARATORS.split(candidate, maxsplit=1)[0].strip()
            if head:
                return head[:120]

        host = hostname_term(url)
        return host.split(".")[0] if host else ""

    @staticmethod
    def _meta_content(soup: BeautifulSoup, *, name: str | None = None, prop: str | None = None) -> str:
        attrs = {"name": name} if name else {"property": prop}
        node = soup.find("meta", attrs=attrs)
        if node is None:
            return ""
        content = node.get("content") or ""
        return re.sub(r"\s+", " ", str(content)).strip()

    @staticmethod
    def _clean_text(value: str) -> str:
        return re.sub(r"\s+", " ", value).strip()


class PageMetadataScraper:
    """
    Fetches one page and extracts its metadata.
    """

    def __init__(
        self,
        *,
        settings: PageScrapeSettings,
        session: requests.Session | None = None,
        user_agent: str = "brand-health/1.0",
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._user_agent = user_agent

    def scrape(self, raw_url: str) -> PageMetadata:
        url = normalize_url(raw_url)
        try:
            with self._session.get(
                url,
                headers={"User-Agent": self._user_agent, "Accept": "text/html,application/xhtml+xml"},
                timeout=self._settings.timeout_seconds,
                stream=True,
            ) as response:
                response.raise_for_status()
                content_type = (response.headers.get("Content-Type") or "").lower()
                if content_type and not content_type.startswith(HTML_CONTENT_TYPES):
                    raise PageScrapeError(f"{url} did not return HTML (content-type={content_type}).")
                body = self._read_capped(response)
        except requests.RequestException as exc:
            log_event(logger, logging.WARNING, "page_scrape_failed", url=url, error=str(exc))
            raise PageScrapeError(f"Failed to fetch {url}: {exc}") from exc

        metadata = PageMetadataParser.parse(url=url, html=body)
        log_event(
            logger,
            logging.INFO,
            "page_scrape_completed",
            url=url,
            suggested_term=metadata.suggested_term,
        )
        return metadata

    def _read_capped(self, response: requests.Response) -> bytes:
        """
        Read at most `max_bytes` of the body without downloading the rest.
        """

        limit = self._settings.max_bytes
        chunks: list[bytes] = []
        size = 0
        for chunk in response.iter_content(chunk_size=READ_CHUNK_BYTES):
            if not chunk:
                continue
            chunk = chunk[: limit - size]
            chunks.append(chunk)
            size += len(chunk)
            if size >= limit:
                break
        return b"".join(chunks)
