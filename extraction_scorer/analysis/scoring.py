"""Composite extraction difficulty scoring."""

from typing import Dict, Optional

from ..exceptions import ConfigurationError, MetricsInsufficientError
from ..models.data_models import ExtractionScore, NormalizedMetric, RawProjectMetrics, ScoringWeights
from ..utils.logging import get_logger
from .metrics import MetricNormalizer


class ScoreAggregator:
    """Combine normalized metrics into one extraction difficulty score.

    Complexity and tech debt are mandatory contributors and coupling counts
    only when available. Weights are re-normalized over the metrics that are
    present, so the score stays on the 0-100 scale. The external API count
    is reported next to the score but never blended into it.
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        """Initialize score aggregator.

        Args:
            weights: Scoring weights; defaults to 0.40/0.30/0.30

        Raises:
            ConfigurationError: if the weights are out of range or do not sum to 1.0
        """
        self.weights = weights or ScoringWeights()
        self.logger = get_logger("scoring")

        is_valid, error = self.weights.is_valid()
        if not is_valid:
            raise ConfigurationError(f"Invalid scoring weights configuration. {error}")

    def aggregate(
        self,
        coupling: NormalizedMetric,
        complexity: NormalizedMetric,
        tech_debt: NormalizedMetric,
        external_api_count: int,
        project_name: str = ""
    ) -> float:
        """Compute the composite score at full precision.

        Args:
            coupling: Normalized coupling, may be unavailable
            complexity: Normalized complexity
            tech_debt: Normalized tech debt
            external_api_count: Endpoint count, carried by the caller; not blended
            project_name: Project named in the error when scoring is impossible

        Returns:
            Score in [0, 100]

        Raises:
            MetricsInsufficientError: if neither complexity nor tech debt is available
        """
        if not (complexity.is_available or tech_debt.is_available):
            raise MetricsInsufficientError(project_name)

        contributions: Dict[str, tuple] = {}
        if coupling.is_available:
            contributions["coupling"] = (coupling.value, self.weights.coupling)
        if complexity.is_available:
            contributions["complexity"] = (complexity.value, self.weights.complexity)
        if tech_debt.is_available:
            contributions["tech_debt"] = (tech_debt.value, self.weights.tech_debt)

        total_weight = sum(weight for _, weight in contributions.values())
        if not total_weight > 0:
            # Only a zero-weighted mandatory metric is present
            raise MetricsInsufficientError(
                project_name,
                f"Project '{project_name}' has no available metric with a non-zero weight"
            )

        score = sum(value * weight for value, weight in contributions.values()) / total_weight

        self.logger.debug(
            f"Project {project_name}: weights used "
            + ", ".join(f"{name}={weight / total_weight:.3f}" for name, (_, weight) in contributions.items())
            + f", external APIs={external_api_count}"
        )

        return max(0.0, min(100.0, score))

    def score_project(self, metrics: RawProjectMetrics, normalizer: MetricNormalizer) -> ExtractionScore:
        """Normalize and aggregate one project's raw metrics.

        Raises:
            MetricsInsufficientError: if the project cannot be scored
        """
        coupling, complexity, tech_debt = normalizer.normalize_project(metrics)

        final_score = self.aggregate(
            coupling, complexity, tech_debt,
            metrics.external_api_count,
            project_name=metrics.project_name
        )

        score = ExtractionScore(
            project_name=metrics.project_name,
            final_score=final_score,
            coupling=coupling,
            complexity=complexity,
            tech_debt=tech_debt,
            external_api_count=metrics.external_api_count
        )

        self.logger.debug(
            f"Project {metrics.project_name} final extraction score: "
            f"{final_score:.2f} ({score.difficulty_category})"
        )
        return score
