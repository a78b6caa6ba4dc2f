"""
scoring package marker.
"""

from scoring.base import BaseScoringModel
from scoring.brand_health_model import SCORING_VERSION, BrandHealthScoringModel
from scoring.normalizer import ScoreNormalizer
from scoring.search_presence import SearchPresenceModel

__all__ = [
    "BaseScoringModel",
    "BrandHealthScoringModel",
    "SCORING_VERSION",
    "ScoreNormalizer",
    "SearchPresenceModel",
]
