"""Data models for extraction difficulty scoring."""

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_BLOCK_LIST: Tuple[str, ...] = ("Microsoft.*", "System.*", "mscorlib", "netstandard")

# Column headers of the extraction score report, in export order.
REPORT_COLUMNS: Tuple[str, ...] = (
    "Project Name",
    "Extraction Score",
    "Coupling Metric",
    "Complexity Metric",
    "Tech Debt Score",
    "External APIs",
)

NOT_AVAILABLE = "N/A"

EASY_THRESHOLD = 33.0
HARD_THRESHOLD = 67.0


class FilterConfiguration(BaseModel):
    """Blocklist and allowlist namespace patterns for dependency scoping.

    Allowlist matches take precedence over blocklist matches.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    block_list: Tuple[str, ...] = Field(default=DEFAULT_BLOCK_LIST, alias="BlockList")
    allow_list: Tuple[str, ...] = Field(default=(), alias="AllowList")


class InvalidPatternFinding(BaseModel):
    """Advisory finding produced by filter configuration validation."""

    model_config = ConfigDict(frozen=True)

    list_name: str
    index: int
    pattern: str
    message: str

    def __str__(self) -> str:
        return f"{self.list_name}[{self.index}] '{self.pattern}': {self.message}"


class RawProjectMetrics(BaseModel):
    """Raw per-project signals supplied by the metrics producer."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    coupling: Optional[float] = None
    complexity: Optional[float] = None
    tech_debt: Optional[float] = None
    external_api_count: int = Field(default=0, ge=0)

    @field_validator("coupling", "complexity", "tech_debt")
    @classmethod
    def nan_is_unavailable(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and math.isnan(v):
            return None
        return v


class MetricRange(BaseModel):
    """Known minimum and maximum of a raw metric."""

    model_config = ConfigDict(frozen=True)

    minimum: float = 0.0
    maximum: float = 100.0

    @model_validator(mode="after")
    def check_bounds(self) -> "MetricRange":
        if self.maximum < self.minimum:
            raise ValueError(
                f"Range maximum {self.maximum} is below minimum {self.minimum}"
            )
        return self


class NormalizedMetric(BaseModel):
    """A metric on the 0-100 scale, or unavailable when ``value`` is None."""

    model_config = ConfigDict(frozen=True)

    value: Optional[float] = None

    @field_validator("value")
    @classmethod
    def within_scale(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0.0 <= v <= 100.0:
            raise ValueError(f"Normalized value {v} outside [0, 100]")
        return v

    @classmethod
    def unavailable(cls) -> "NormalizedMetric":
        return cls(value=None)

    @property
    def is_available(self) -> bool:
        return self.value is not None


class ScoringWeights(BaseModel):
    """Weights for combining normalized metrics into the extraction score.

    Coupling is optional per project; complexity and tech debt are the
    mandatory contributors. With the defaults, a project without coupling
    is scored with complexity and tech debt weighted 0.5 each.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    coupling: float = Field(default=0.40, alias="Coupling")
    complexity: float = Field(default=0.30, alias="Complexity")
    tech_debt: float = Field(default=0.30, alias="TechDebt")

    def is_valid(self) -> Tuple[bool, Optional[str]]:
        """Check weight ranges and sum.

        Returns:
            Tuple of (is_valid, error_message)
        """
        weights = (self.coupling, self.complexity, self.tech_debt)
        if not all(math.isfinite(w) for w in weights):
            return False, (
                "All weights must be finite numbers. "
                f"Current: Coupling={self.coupling}, Complexity={self.complexity}, "
                f"TechDebt={self.tech_debt}"
            )

        if any(w < 0.0 or w > 1.0 for w in weights):
            return False, (
                "All weights must be between 0.0 and 1.0. "
                f"Current: Coupling={self.coupling}, Complexity={self.complexity}, "
                f"TechDebt={self.tech_debt}"
            )

        total = sum(weights)
        if abs(total - 1.0) > 0.01:
            return False, (
                f"Weights must sum to 1.0 (±0.01 tolerance). Current sum: {total:.3f}"
            )

        if self.complexity + self.tech_debt <= 0.0:
            return False, "Complexity and TechDebt weights cannot both be zero"

        return True, None


class ExtractionScore(BaseModel):
    """Composite extraction difficulty of one project, at full precision."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    final_score: float
    coupling: NormalizedMetric
    complexity: NormalizedMetric
    tech_debt: NormalizedMetric
    external_api_count: int = 0

    @property
    def difficulty_category(self) -> str:
        if self.final_score <= EASY_THRESHOLD:
            return "Easy"
        if self.final_score >= HARD_THRESHOLD:
            return "Hard"
        return "Medium"


class ExtractionScoreRecord(BaseModel):
    """One row of the extraction score report."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(serialization_alias="Project Name")
    extraction_score: str = Field(serialization_alias="Extraction Score")
    coupling_metric: str = Field(serialization_alias="Coupling Metric")
    complexity_metric: str = Field(serialization_alias="Complexity Metric")
    tech_debt_score: str = Field(serialization_alias="Tech Debt Score")
    external_apis: int = Field(serialization_alias="External APIs")

    def to_row(self) -> Dict[str, Any]:
        """Return the record keyed by report column header, in column order."""
        return self.model_dump(by_alias=True)


class ProjectFailure(BaseModel):
    """A project that could not be scored, and why."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    reason: str

    def as_tuple(self) -> Tuple[str, str]:
        return self.project_name, self.reason


class DependencyEdge(BaseModel):
    """A dependency from one project or assembly to another."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class ScoringTask(BaseModel):
    """Unit of work for scoring a single project."""

    task_id: str
    project: RawProjectMetrics
    priority: int = 0
    status: str = "pending"
    result: Optional[Any] = None
    error: Optional[str] = None


class ExtractionStatistics(BaseModel):
    """Counts of projects per difficulty category."""

    model_config = ConfigDict(frozen=True)

    total_projects: int
    easy_count: int
    medium_count: int
    hard_count: int

    @property
    def is_valid(self) -> bool:
        return self.easy_count + self.medium_count + self.hard_count == self.total_projects


class RankedExtractionCandidates(BaseModel):
    """Scores ranked from easiest to hardest extraction."""

    model_config = ConfigDict(frozen=True)

    all_projects: List[ExtractionScore]
    easiest_candidates: List[ExtractionScore]
    hardest_candidates: List[ExtractionScore]
    statistics: ExtractionStatistics


class AnalysisRequest(BaseModel):
    """Request to score a batch of projects."""

    projects: List[RawProjectMetrics]
    dependencies: List[DependencyEdge] = Field(default_factory=list)
    filter_configuration: FilterConfiguration = Field(default_factory=FilterConfiguration)
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    metric_ranges: Dict[str, MetricRange] = Field(default_factory=dict)
    solution_name: str = "solution"
    output_format: str = "markdown"

    @field_validator("output_format")
    @classmethod
    def supported_format(cls, v: str) -> str:
        if v.lower() not in ("markdown", "json", "text"):
            raise ValueError(f"Unsupported output format: {v}")
        return v.lower()

    @field_validator("metric_ranges")
    @classmethod
    def known_metrics(cls, v: Dict[str, MetricRange]) -> Dict[str, MetricRange]:
        unknown = set(v) - {"coupling", "complexity", "tech_debt"}
        if unknown:
            raise ValueError(f"Unknown metric names: {', '.join(sorted(unknown))}")
        return v


class AnalysisResult(BaseModel):
    """Outcome of a scoring run: what was scored and what could not be."""

    request_id: str
    status: str
    scores: List[ExtractionScore] = Field(default_factory=list)
    records: List[ExtractionScoreRecord] = Field(default_factory=list)
    failures: List[ProjectFailure] = Field(default_factory=list)
    findings: List[InvalidPatternFinding] = Field(default_factory=list)
    ranked: Optional[RankedExtractionCandidates] = None
    report: Optional[str] = None
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    execution_time: float = 0.0
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
