"""Dependency scoping with blocklist and allowlist patterns."""

from typing import Iterable, List, Optional

from ..models.data_models import DependencyEdge, FilterConfiguration, InvalidPatternFinding
from ..utils.logging import get_logger
from ..utils.validation import validate_filter_configuration
from .patterns import matches


class FilterEngine:
    """Decide which namespaces count toward dependency analysis.

    The configuration is read-only, so one engine can be shared by
    concurrent scoring tasks.
    """

    def __init__(self, config: Optional[FilterConfiguration] = None):
        """Initialize filter engine.

        Args:
            config: Filter configuration; built-in defaults when omitted
        """
        self.config = config or FilterConfiguration()
        self.logger = get_logger("filter_engine")

    def is_in_scope(self, namespace: str) -> bool:
        """Check whether a namespace is in scope.

        An allowlist match always wins over a blocklist match. A namespace
        matching neither list is in scope.
        """
        if any(matches(pattern, namespace) for pattern in self.config.allow_list):
            return True
        return not any(matches(pattern, namespace) for pattern in self.config.block_list)

    def validate(self) -> List[InvalidPatternFinding]:
        """Validate the configuration without raising."""
        return validate_filter_configuration(self.config)

    def filter_dependencies(self, edges: Iterable[DependencyEdge]) -> List[DependencyEdge]:
        """Drop dependency edges whose target is out of scope.

        Args:
            edges: Dependency edges to filter

        Returns:
            Edges with an in-scope target, in input order
        """
        edges = list(edges)
        retained = [edge for edge in edges if self.is_in_scope(edge.target)]

        if edges:
            blocked_count = len(edges) - len(retained)
            self.logger.info(
                f"Filtered {blocked_count} framework refs "
                f"({blocked_count / len(edges) * 100:.1f}%), retained {len(retained)} "
                f"custom refs ({len(retained) / len(edges) * 100:.1f}%)"
            )

        return retained
