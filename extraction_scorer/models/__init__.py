"""Data models."""

from .data_models import (
    AnalysisRequest,
    AnalysisResult,
    DependencyEdge,
    ExtractionScore,
    ExtractionScoreRecord,
    ExtractionStatistics,
    FilterConfiguration,
    InvalidPatternFinding,
    MetricRange,
    NormalizedMetric,
    ProjectFailure,
    RankedExtractionCandidates,
    RawProjectMetrics,
    ScoringTask,
    ScoringWeights,
    REPORT_COLUMNS,
)

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "DependencyEdge",
    "ExtractionScore",
    "ExtractionScoreRecord",
    "ExtractionStatistics",
    "FilterConfiguration",
    "InvalidPatternFinding",
    "MetricRange",
    "NormalizedMetric",
    "ProjectFailure",
    "RankedExtractionCandidates",
    "RawProjectMetrics",
    "ScoringTask",
    "ScoringWeights",
    "REPORT_COLUMNS",
]
