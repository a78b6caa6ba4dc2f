"""
scoring/base.py

Abstract base interface for brand-health scoring models.
All scoring model implementations must inherit from BaseScoringModel.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from brand_health.domain.brand_health import BrandHealthScores, SourceResult


class BaseScoringModel(ABC):
    """Abstract base class for brand-health scoring models.

    Defines the interface that all scoring model implementations
    must follow. Implementations must be pure: the same results
    always produce the same scores.
    """

    @abstractmethod
    def compute(
        self,
        results: Mapping[str, SourceResult | None],
        weights: Mapping[str, float] | None = None,
    ) -> BrandHealthScores:
        """Compute sub-scores and the overall score from source results.

        Args:
            results: Source name to SourceResult. Missing or None
                     entries are treated as unavailable.
            weights: Optional source name to weight mapping selecting
                     the sources that contribute to the overall score.

        Returns:
            BrandHealthScores with every value in [0, 100].
        """
        raise NotImplementedError("Subclasses must implement compute()")
