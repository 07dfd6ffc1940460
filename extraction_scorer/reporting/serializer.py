"""Extraction score report records."""

from typing import Optional, Union

from ..models.data_models import (
    ExtractionScore, ExtractionScoreRecord, NormalizedMetric, NOT_AVAILABLE
)


def format_score(value: Union[NormalizedMetric, float, None]) -> str:
    """Format a score with one decimal digit, or ``N/A`` when unavailable."""
    if isinstance(value, NormalizedMetric):
        value = value.value
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.1f}"


def to_record(
    project_name: str,
    extraction_score: Optional[float],
    coupling: NormalizedMetric,
    complexity: NormalizedMetric,
    tech_debt: NormalizedMetric,
    external_api_count: int
) -> ExtractionScoreRecord:
    """Build the report record for one project.

    Never fails for well-formed input. An empty project name is passed
    through unchanged.
    """
    return ExtractionScoreRecord(
        project_name=project_name,
        extraction_score=format_score(extraction_score),
        coupling_metric=format_score(coupling),
        complexity_metric=format_score(complexity),
        tech_debt_score=format_score(tech_debt),
        external_apis=external_api_count
    )


def score_to_record(score: ExtractionScore) -> ExtractionScoreRecord:
    return to_record(
        score.project_name,
        score.final_score,
        score.coupling,
        score.complexity,
        score.tech_debt,
        score.external_api_count
    )
