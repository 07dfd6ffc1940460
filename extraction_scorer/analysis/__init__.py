"""Analysis engine components."""

from .metrics import MetricNormalizer, normalize
from .scoring import ScoreAggregator
from .coupling import calculate_raw_coupling
from .ranking import RankingEngine

__all__ = [
    "MetricNormalizer",
    "normalize",
    "ScoreAggregator",
    "calculate_raw_coupling",
    "RankingEngine",
]
