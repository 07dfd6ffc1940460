"""Validation utilities."""

from typing import List, Sequence

from ..models.data_models import FilterConfiguration, InvalidPatternFinding

WILDCARD = "*"


def validate_patterns(list_name: str, patterns: Sequence[str]) -> List[InvalidPatternFinding]:
    """Validate one list of namespace patterns.

    Args:
        list_name: Name of the list, used in findings ("BlockList" or "AllowList")
        patterns: Patterns to check

    Returns:
        Findings in list order; empty if every pattern is usable
    """
    findings = []

    for index, pattern in enumerate(patterns):
        message = None

        if not pattern.strip():
            message = "Pattern is empty or whitespace"
        elif pattern == WILDCARD:
            message = f"Pattern '*' is too broad; it matches every namespace in the {list_name}"
        elif WILDCARD in pattern[:-1]:
            message = "Wildcard '*' is only supported as the final character"

        if message:
            findings.append(InvalidPatternFinding(
                list_name=list_name,
                index=index,
                pattern=pattern,
                message=message
            ))

    return findings


def validate_filter_configuration(config: FilterConfiguration) -> List[InvalidPatternFinding]:
    """Validate a filter configuration.

    Findings are advisory: nothing is raised and the configuration is not
    changed. Callers decide whether to warn and continue or abort.

    Args:
        config: Filter configuration to validate

    Returns:
        BlockList findings followed by AllowList findings
    """
    return (
        validate_patterns("BlockList", config.block_list)
        + validate_patterns("AllowList", config.allow_list)
    )
