"""
scoring/brand_health_model.py

Brand health model implementing BaseScoringModel.
Maps the six source results into 0-100 sub-scores and an overall score.
"""

from collections.abc import Mapping
from typing import Any

from brand_health.domain.brand_health import (
    ALL_SOURCES,
    SOURCE_DUCKDUCKGO,
    SOURCE_GOOGLE,
    SOURCE_NEWS,
    SOURCE_TRENDS,
    SOURCE_WIKIDATA,
    SOURCE_WIKIPEDIA,
    BrandHealthScores,
    SourceResult,
)
from scoring.base import BaseScoringModel
from scoring.normalizer import ScoreNormalizer

SCORING_VERSION = "2"


class BrandHealthScoringModel(BaseScoringModel):
    """Heuristic brand health scoring model.

    Every sub-score is an integer in [0, 100]; an unavailable source
    scores 0. The overall score is the rounded weighted mean of the
    sub-scores of the contributing sources.

    The constants below are heuristics, not fitted parameters. Version
    2 counts all six sources with equal weight.
    """

    # Characters of encyclopedia extract per point
    EXTRACT_CHARS_PER_POINT: float = 100.0

    # Points per related topic / news article
    RELATED_TOPIC_POINTS: float = 10.0
    NEWS_ARTICLE_POINTS: float = 10.0

    # Flat score for an existing knowledge-graph entity
    KNOWLEDGE_GRAPH_ENTITY_POINTS: float = 80.0

    MAX_SCORE: float = 100.0

    DEFAULT_WEIGHTS: Mapping[str, float] = {source: 1.0 for source in ALL_SOURCES}

    def __init__(self) -> None:
        """Initialize the model with a shared ScoreNormalizer instance."""
        self._normalizer = ScoreNormalizer()

    def compute(
        self,
        results: Mapping[str, SourceResult | None],
        weights: Mapping[str, float] | None = None,
    ) -> BrandHealthScores:
        """Compute brand health scores from source results.

        Args:
            results: Source name to SourceResult; missing entries score 0.
            weights: Contributing sources and their weights. Defaults to
                     DEFAULT_WEIGHTS. Sources absent from the mapping or
                     with weight 0 still get a sub-score but do not
                     contribute to the overall score.

        Returns:
            BrandHealthScores with integer values in [0, 100].
        """
        sub_scores = {
            SOURCE_TRENDS: self.trend_score(self._payload(results, SOURCE_TRENDS)),
            SOURCE_WIKIPEDIA: self.encyclopedia_score(self._payload(results, SOURCE_WIKIPEDIA)),
            SOURCE_DUCKDUCKGO: self.related_topics_score(self._payload(results, SOURCE_DUCKDUCKGO)),
            SOURCE_NEWS: self.news_score(self._payload(results, SOURCE_NEWS)),
            SOURCE_WIKIDATA: self.knowledge_graph_score(self._payload(results, SOURCE_WIKIDATA)),
            SOURCE_GOOGLE: self.search_presence_score(self._payload(results, SOURCE_GOOGLE)),
        }

        active_weights = self.DEFAULT_WEIGHTS if weights is None else weights
        overall = self._normalizer.weighted_mean(
            (sub_scores[source], weight)
            for source, weight in active_weights.items()
            if source in sub_scores
        )

        return BrandHealthScores(
            search_trend=sub_scores[SOURCE_TRENDS],
            wikipedia=sub_scores[SOURCE_WIKIPEDIA],
            search_results=sub_scores[SOURCE_DUCKDUCKGO],
            news_coverage=sub_scores[SOURCE_NEWS],
            wikidata=sub_scores[SOURCE_WIKIDATA],
            google_presence=sub_scores[SOURCE_GOOGLE],
            overall=self._normalizer.to_score(overall),
        )

    def trend_score(self, payload: Any) -> int:
        """Mean of the timeline point values."""
        if not isinstance(payload, Mapping):
            return 0
        timeline = payload.get("timeline_data")
        if not isinstance(timeline, list):
            return 0
        values = [point.get("value", 0.0) for point in timeline if isinstance(point, Mapping)]
        return self._normalizer.to_score(self._normalizer.mean(values))

    def encyclopedia_score(self, payload: Any) -> int:
        """One point per EXTRACT_CHARS_PER_POINT characters of extract."""
        if not isinstance(payload, Mapping):
            return 0
        extract = payload.get("extract")
        if not isinstance(extract, str) or not extract:
            return 0
        return self._capped(len(extract) / self.EXTRACT_CHARS_PER_POINT)

    def related_topics_score(self, payload: Any) -> int:
        if not isinstance(payload, Mapping):
            return 0
        topics = payload.get("related_topics")
        if not isinstance(topics, list):
            return 0
        return self._capped(len(topics) * self.RELATED_TOPIC_POINTS)

    def news_score(self, payload: Any) -> int:
        if not isinstance(payload, Mapping):
            return 0
        articles = payload.get("articles")
        if not isinstance(articles, list):
            return 0
        return self._capped(len(articles) * self.NEWS_ARTICLE_POINTS)

    def knowledge_graph_score(self, payload: Any) -> int:
        if not payload:
            return 0
        return self._capped(self.KNOWLEDGE_GRAPH_ENTITY_POINTS)

    def search_presence_score(self, payload: Any) -> int:
        """Score already computed by the search connector, clamped."""
        if not isinstance(payload, Mapping):
            return 0
        return self._normalizer.to_score(self._normalizer.finite(payload.get("score", 0)))

    def _capped(self, value: float) -> int:
        return self._normalizer.to_score(min(self.MAX_SCORE, value))

    @staticmethod
    def _payload(results: Mapping[str, SourceResult | None], source: str) -> Any:
        result = results.get(source)
        if result is None:
            return None
        return result.payload
