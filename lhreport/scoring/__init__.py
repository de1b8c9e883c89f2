"""Score aggregation for report categories."""

from .aggregator import ScoreAggregator, compute_category_score
from .models import CategoryScore

__all__ = [
    "ScoreAggregator",
    "CategoryScore",
    "compute_category_score",
]
