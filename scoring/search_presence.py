"""
scoring/search_presence.py

Search-engine presence score computed from one page of web results.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlparse

from scoring.normalizer import ScoreNormalizer

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


class SearchPresenceModel:
    """Scores how prominently a term appears in web search results.

    For each result:
        - +1 exact match when the term appears in the title or snippet.
        - +AUTHORITY_DOMAIN_POINTS when the host is on the authority list.
        - +OFFICIAL_DOMAIN_POINTS when the host contains the term itself.

    Score = min(100, EXACT_MATCH_POINTS * matches + authority points
    + LARGE_RESULT_SET_BONUS when the engine reports more than
    LARGE_RESULT_SET_THRESHOLD results).
    """

    EXACT_MATCH_POINTS: int = 10
    AUTHORITY_DOMAIN_POINTS: int = 10
    OFFICIAL_DOMAIN_POINTS: int = 20
    LARGE_RESULT_SET_THRESHOLD: int = 1000
    LARGE_RESULT_SET_BONUS: int = 20

    AUTHORITY_SUFFIXES: tuple[str, ...] = (".gov", ".edu", ".org")
    AUTHORITY_DOMAINS: tuple[str, ...] = (
        "wikipedia.org",
        "linkedin.com",
        "bloomberg.com",
        "reuters.com",
    )

    def __init__(self) -> None:
        self._normalizer = ScoreNormalizer()

    def compute(
        self,
        term: str,
        items: Iterable[Mapping[str, Any]],
        total_results: int,
    ) -> dict[str, int]:
        """Return score, exact_matches and authority_score for the items."""
        needle = term.strip().lower()
        compact_term = _NON_ALNUM.sub("", needle)

        exact_matches = 0
        authority_score = 0
        for item in items:
            title = str(item.get("title") or "").lower()
            snippet = str(item.get("snippet") or "").lower()
            if needle and (needle in title or needle in snippet):
                exact_matches += 1

            host = self.host_of(str(item.get("link") or ""))
            if self.is_authority_host(host):
                authority_score += self.AUTHORITY_DOMAIN_POINTS
            if compact_term and compact_term in _NON_ALNUM.sub("", host):
                authority_score += self.OFFICIAL_DOMAIN_POINTS

        bonus = self.LARGE_RESULT_SET_BONUS if total_results > self.LARGE_RESULT_SET_THRESHOLD else 0
        raw = exact_matches * self.EXACT_MATCH_POINTS + authority_score + bonus
        return {
            "score": self._normalizer.to_score(raw),
            "exact_matches": exact_matches,
            "authority_score": authority_score,
        }

    def is_authority_host(self, host: str) -> bool:
        if not host:
            return False
        if host.endswith(self.AUTHORITY_SUFFIXES):
            return True
        return any(host == domain or host.endswith(f".{domain}") for domain in self.AUTHORITY_DOMAINS)

    @staticmethod
    def host_of(link: str) -> str:
        host = (urlparse(link).hostname or "").lower()
        return host[4:] if host.startswith("www.") else host
