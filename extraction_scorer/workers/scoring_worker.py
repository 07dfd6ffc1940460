"""Worker scoring a single project."""

import asyncio
from concurrent.futures import Executor
from typing import Optional, Tuple

from ..analysis.metrics import MetricNormalizer
from ..analysis.scoring import ScoreAggregator
from ..models.data_models import ExtractionScore, ExtractionScoreRecord, ScoringTask
from ..reporting.serializer import score_to_record
from .base import BaseWorker


class ScoringWorker(BaseWorker):
    """Normalize, aggregate and serialize one project per task.

    The normalizer and aggregator hold no per-project state and are shared
    across concurrent tasks.
    """

    def __init__(
        self,
        normalizer: MetricNormalizer,
        aggregator: ScoreAggregator,
        executor: Optional[Executor] = None
    ):
        """Initialize scoring worker.

        Args:
            normalizer: Metric normalizer with the run's known ranges
            aggregator: Score aggregator with the run's weights
            executor: Executor for the computation; the loop default when omitted
        """
        super().__init__()
        self.normalizer = normalizer
        self.aggregator = aggregator
        self.executor = executor

    def score(self, task: ScoringTask) -> Tuple[ExtractionScore, ExtractionScoreRecord]:
        """Score a project synchronously."""
        score = self.aggregator.score_project(task.project, self.normalizer)
        return score, score_to_record(score)

    async def process(self, task: ScoringTask) -> Tuple[ExtractionScore, ExtractionScoreRecord]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self.score, task)
