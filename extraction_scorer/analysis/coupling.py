"""Raw coupling counts from project dependency edges."""

from collections import Counter
from typing import Dict, Iterable

from ..models.data_models import DependencyEdge, MetricRange

# Consumers depending on a project make extraction harder than its own dependencies.
INCOMING_WEIGHT = 2
OUTGOING_WEIGHT = 1


def calculate_raw_coupling(edges: Iterable[DependencyEdge], projects: Iterable[str]) -> Dict[str, float]:
    """Compute ``incoming * 2 + outgoing`` for each project.

    Edges should already be filtered to in-scope targets.

    Args:
        edges: Dependency edges
        projects: Project names to report; projects without edges get 0

    Returns:
        Raw coupling per project name
    """
    incoming: Counter = Counter()
    outgoing: Counter = Counter()
    for edge in edges:
        incoming[edge.target] += 1
        outgoing[edge.source] += 1

    return {
        name: float(incoming[name] * INCOMING_WEIGHT + outgoing[name] * OUTGOING_WEIGHT)
        for name in projects
    }


def observed_range(values: Iterable[float]) -> MetricRange:
    """Range from 0 to the largest observed value, for relative scoring."""
    maximum = max((v for v in values if v is not None), default=0.0)
    return MetricRange(minimum=0.0, maximum=max(0.0, maximum))
