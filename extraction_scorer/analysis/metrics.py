"""Metric normalization onto the common 0-100 scale."""

import math
from typing import Dict, Optional, Tuple

from ..models.data_models import MetricRange, NormalizedMetric, RawProjectMetrics

SCALE = 100.0

DEFAULT_RANGES: Dict[str, MetricRange] = {
    "complexity": MetricRange(minimum=0.0, maximum=100.0),
    "tech_debt": MetricRange(minimum=0.0, maximum=100.0),
}


def normalize(raw: Optional[float], known_min: float, known_max: float) -> NormalizedMetric:
    """Linearly rescale a raw value against its known range.

    Values outside the range are clamped to [0, 100]. Unavailable input
    (None or NaN) stays unavailable; it is never turned into 0. A degenerate
    range (``known_min == known_max``) maps every available value to 0.

    Raises:
        ValueError: if ``known_max < known_min``
    """
    if known_max < known_min:
        raise ValueError(f"Range maximum {known_max} is below minimum {known_min}")

    if raw is None or math.isnan(raw):
        return NormalizedMetric.unavailable()

    span = known_max - known_min
    if span == 0:
        return NormalizedMetric(value=0.0)

    scaled = (raw - known_min) / span * SCALE
    return NormalizedMetric(value=max(0.0, min(SCALE, scaled)))


class MetricNormalizer:
    """Normalize the raw signals of a project against shared ranges."""

    def __init__(self, ranges: Optional[Dict[str, MetricRange]] = None):
        """Initialize metric normalizer.

        Args:
            ranges: Known range per metric name; complexity and tech debt
                default to 0-100, coupling defaults to 0-100 as well
        """
        self.ranges = dict(DEFAULT_RANGES)
        if ranges:
            self.ranges.update(ranges)

    def range_for(self, metric: str) -> MetricRange:
        return self.ranges.get(metric, MetricRange())

    def normalize_metric(self, metric: str, raw: Optional[float]) -> NormalizedMetric:
        known = self.range_for(metric)
        return normalize(raw, known.minimum, known.maximum)

    def normalize_project(
        self, metrics: RawProjectMetrics
    ) -> Tuple[NormalizedMetric, NormalizedMetric, NormalizedMetric]:
        """Normalize coupling, complexity and tech debt of one project."""
        return (
            self.normalize_metric("coupling", metrics.coupling),
            self.normalize_metric("complexity", metrics.complexity),
            self.normalize_metric("tech_debt", metrics.tech_debt),
        )
