"""
scoring/normalizer.py

Deterministic normalization utilities for brand-health sub-scores.
"""

import math
from collections.abc import Iterable


class ScoreNormalizer:
    """Provides stateless normalization methods for sub-scores.

    All methods are deterministic and never raise on numeric input;
    NaN and infinities collapse to 0.
    """

    def clamp(self, value: float, min_value: float, max_value: float) -> float:
        """Clamp a value to the specified [min_value, max_value] range."""
        return max(min_value, min(value, max_value))

    def finite(self, value: float) -> float:
        """Return value, or 0.0 when it is NaN or infinite."""
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        return number if math.isfinite(number) else 0.0

    def round_half_up(self, value: float) -> int:
        """Round to the nearest integer with halves rounded up.

        Python's built-in round() rounds halves to even, which would
        turn a 2.5 sub-score into 2.
        """
        return int(math.floor(self.finite(value) + 0.5))

    def to_score(self, value: float) -> int:
        """Convert a raw value into an integer score in [0, 100]."""
        return int(self.clamp(self.round_half_up(value), 0, 100))

    def mean(self, values: Iterable[float]) -> float:
        """Arithmetic mean of the finite values; 0.0 for an empty input."""
        numbers = [self.finite(value) for value in values]
        if not numbers:
            return 0.0
        return sum(numbers) / len(numbers)

    def weighted_mean(self, pairs: Iterable[tuple[float, float]]) -> float:
        """Weighted mean of (value, weight) pairs; 0.0 when total weight is 0."""
        total = 0.0
        total_weight = 0.0
        for value, weight in pairs:
            weight = self.finite(weight)
            if weight <= 0:
                continue
            total += self.finite(value) * weight
            total_weight += weight
        if total_weight == 0:
            return 0.0
        return total / total_weight
