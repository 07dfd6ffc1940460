"""Main orchestrator for extraction difficulty analysis."""

import json
import uuid
from typing import Dict, List, Optional
from datetime import datetime, timezone

from ..analysis.coupling import calculate_raw_coupling, observed_range
from ..analysis.metrics import MetricNormalizer
from ..analysis.ranking import RankingEngine
from ..analysis.scoring import ScoreAggregator
from ..exceptions import ExtractionScorerError
from ..filtering.filter_engine import FilterEngine
from ..models.data_models import (
    AnalysisRequest, AnalysisResult, ExtractionScore, ExtractionScoreRecord,
    MetricRange, ProjectFailure, RawProjectMetrics, ScoringTask, REPORT_COLUMNS
)
from ..reporting.serializer import score_to_record
from ..utils.config import Config
from ..utils.logging import get_logger
from .coordinator import WorkerCoordinator


class ExtractionScoringOrchestrator:
    """Main orchestrator for extraction difficulty analysis."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize orchestrator.

        Args:
            config: Configuration instance
        """
        self.config = config or Config()
        self.logger = get_logger("orchestrator")
        self.coordinator = WorkerCoordinator(self.config)
        self.ranking_engine = RankingEngine()
        self._running = False

    async def start(self):
        """Start the orchestrator."""
        self._running = True
        await self.coordinator.start()
        self.logger.info("Orchestrator started")

    async def stop(self):
        """Stop the orchestrator."""
        self._running = False
        await self.coordinator.stop()
        self.logger.info("Orchestrator stopped")

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """Score every project of a request.

        The run always completes: projects that cannot be scored are
        returned as failures next to the records of those that could.

        Args:
            request: Analysis request

        Returns:
            Analysis result
        """
        start_time = datetime.now(timezone.utc)
        request_id = str(uuid.uuid4())

        self.logger.info(f"Starting analysis {request_id} of {len(request.projects)} projects")

        filter_engine = FilterEngine(request.filter_configuration)
        findings = filter_engine.validate()
        for finding in findings:
            self.logger.warning(f"Filter configuration: {finding}")

        try:
            projects = self._apply_dependency_coupling(request, filter_engine)
            normalizer = MetricNormalizer(self._resolve_ranges(request, projects))
            aggregator = ScoreAggregator(request.weights)

            tasks = [
                ScoringTask(task_id=f"{request_id}-{index}", project=project)
                for index, project in enumerate(projects)
            ]

            worker = await self.coordinator.create_worker(normalizer, aggregator, request_id)
            try:
                task_results = await self.coordinator.execute_tasks(tasks, worker)
            finally:
                await self.coordinator.release_worker(request_id)

        except ExtractionScorerError as e:
            execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
            self.logger.error(f"Analysis {request_id} failed: {e}")

            return AnalysisResult(
                request_id=request_id,
                status="failed",
                findings=findings,
                errors=[str(e)],
                execution_time=execution_time
            )

        scores: List[ExtractionScore] = []
        records: List[ExtractionScoreRecord] = []
        failures: List[ProjectFailure] = []

        for task_result in task_results:
            if task_result.status == "completed":
                score, record = task_result.result
                scores.append(score)
                records.append(record)
            else:
                failures.append(ProjectFailure(
                    project_name=task_result.project.project_name,
                    reason=task_result.error or task_result.status
                ))

        ranked = self.ranking_engine.generate_ranked_list(scores)

        warnings = [str(finding) for finding in findings]
        warnings.extend(
            f"Project {failure.project_name} not scored: {failure.reason}" for failure in failures
        )

        if not failures:
            status = "completed"
        elif records:
            status = "partial"
        else:
            status = "failed"

        result = AnalysisResult(
            request_id=request_id,
            status=status,
            scores=scores,
            records=records,
            failures=failures,
            findings=findings,
            ranked=ranked,
            warnings=warnings
        )
        result.report = self.generate_report(result, request.solution_name, request.output_format)
        result.execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()

        self.logger.info(
            f"Analysis {request_id} {status} in {result.execution_time:.2f}s: "
            f"{len(records)} scored, {len(failures)} not scored"
        )
        return result

    def _apply_dependency_coupling(
        self, request: AnalysisRequest, filter_engine: FilterEngine
    ) -> List[RawProjectMetrics]:
        """Fill in missing coupling from in-scope dependency edges."""
        if not request.dependencies:
            return list(request.projects)

        edges = filter_engine.filter_dependencies(request.dependencies)
        coupling = calculate_raw_coupling(edges, [p.project_name for p in request.projects])

        return [
            project.model_copy(update={"coupling": coupling[project.project_name]})
            if project.coupling is None else project
            for project in request.projects
        ]

    def _resolve_ranges(
        self, request: AnalysisRequest, projects: List[RawProjectMetrics]
    ) -> Dict[str, MetricRange]:
        """Known ranges for the run; coupling is relative to the batch maximum by default."""
        ranges = dict(request.metric_ranges)
        if "coupling" not in ranges:
            ranges["coupling"] = observed_range(p.coupling for p in projects)
        return ranges

    def generate_report(
        self,
        result: AnalysisResult,
        solution_name: str = "solution",
        format: str = "markdown"
    ) -> str:
        """Generate analysis report.

        Args:
            result: Analysis result
            solution_name: Name shown in the report title
            format: Report format

        Returns:
            Generated report
        """
        if format.lower() == "markdown":
            return self._generate_markdown_report(result, solution_name)
        elif format.lower() == "json":
            return json.dumps({
                "solution": solution_name,
                "status": result.status,
                "statistics": result.ranked.statistics.model_dump() if result.ranked else None,
                "records": [record.to_row() for record in self._ranked_records(result)],
                "failures": [failure.model_dump() for failure in result.failures],
                "findings": [finding.model_dump() for finding in result.findings]
            }, indent=2)
        else:
            return self._generate_text_report(result, solution_name)

    def _ranked_records(self, result: AnalysisResult) -> List[ExtractionScoreRecord]:
        if result.ranked is None:
            return list(result.records)
        return [score_to_record(score) for score in result.ranked.all_projects]

    def _generate_markdown_report(self, result: AnalysisResult, solution_name: str) -> str:
        """Generate markdown report."""
        report = []

        report.append(f"# Extraction Difficulty Report: {solution_name}")
        report.append("")
        report.append(f"**Status:** {result.status}")
        report.append("")

        if result.ranked:
            stats = result.ranked.statistics
            report.append("## Summary")
            report.append(f"- Projects scored: {stats.total_projects}")
            report.append(f"- Easy (0-33): {stats.easy_count}")
            report.append(f"- Medium (34-66): {stats.medium_count}")
            report.append(f"- Hard (67-100): {stats.hard_count}")
            report.append(f"- Not scored: {len(result.failures)}")
            report.append("")

            report.append("## Easiest Candidates")
            report.extend(self._markdown_table(
                [score_to_record(s) for s in result.ranked.easiest_candidates]
            ))
            report.append("")

            report.append("## Hardest Candidates")
            report.extend(self._markdown_table(
                [score_to_record(s) for s in result.ranked.hardest_candidates]
            ))
            report.append("")

        report.append("## All Projects")
        report.extend(self._markdown_table(self._ranked_records(result)))
        report.append("")

        if result.failures:
            report.append("## Projects Not Scored")
            for failure in result.failures:
                report.append(f"- **{failure.project_name}**: {failure.reason}")
            report.append("")

        if result.findings:
            report.append("## Filter Configuration Findings")
            for finding in result.findings:
                report.append(f"- {finding}")
            report.append("")

        return "\n".join(report)

    @staticmethod
    def _markdown_table(records: List[ExtractionScoreRecord]) -> List[str]:
        if not records:
            return ["_None_"]

        lines = [
            "| " + " | ".join(REPORT_COLUMNS) + " |",
            "|" + "|".join("---" for _ in REPORT_COLUMNS) + "|",
        ]
        for record in records:
            lines.append("| " + " | ".join(str(v) for v in record.to_row().values()) + " |")
        return lines

    def _generate_text_report(self, result: AnalysisResult, solution_name: str) -> str:
        """Generate plain text report."""
        report = []

        report.append(f"EXTRACTION DIFFICULTY REPORT: {solution_name}")
        report.append("=" * 60)
        report.append(f"Status: {result.status}")

        if result.ranked:
            stats = result.ranked.statistics
            report.append(
                f"Scored: {stats.total_projects} "
                f"(easy {stats.easy_count}, medium {stats.medium_count}, hard {stats.hard_count})"
            )
        report.append("")

        for rank, record in enumerate(self._ranked_records(result), 1):
            report.append(
                f"{rank:>3}. {record.project_name:<40} {record.extraction_score:>6}  "
                f"coupling {record.coupling_metric:>5}  complexity {record.complexity_metric:>5}  "
                f"tech debt {record.tech_debt_score:>5}  APIs {record.external_apis}"
            )

        if result.failures:
            report.append("")
            report.append("NOT SCORED:")
            for failure in result.failures:
                report.append(f"  - {failure.project_name}: {failure.reason}")

        return "\n".join(report)
