"""Ranking of extraction candidates."""

from typing import List

from ..models.data_models import (
    ExtractionScore, ExtractionStatistics, RankedExtractionCandidates
)
from ..utils.logging import get_logger

TOP_CANDIDATES = 10


class RankingEngine:
    """Rank scored projects from easiest to hardest to extract."""

    def __init__(self, top_n: int = TOP_CANDIDATES):
        self.top_n = top_n
        self.logger = get_logger("ranking")

    def generate_ranked_list(self, scores: List[ExtractionScore]) -> RankedExtractionCandidates:
        """Sort scores and pick the easiest and hardest candidates.

        Args:
            scores: Extraction scores in any order

        Returns:
            Ranked candidates with per-category statistics
        """
        ordered = sorted(scores, key=lambda s: (s.final_score, s.project_name))

        easy = [s for s in ordered if s.difficulty_category == "Easy"]
        medium = [s for s in ordered if s.difficulty_category == "Medium"]
        hard = [s for s in ordered if s.difficulty_category == "Hard"]

        hardest = sorted(hard, key=lambda s: s.final_score, reverse=True)[:self.top_n]

        statistics = ExtractionStatistics(
            total_projects=len(ordered),
            easy_count=len(easy),
            medium_count=len(medium),
            hard_count=len(hard)
        )

        if not statistics.is_valid:
            self.logger.warning(
                f"Statistics validation failed: {statistics.easy_count} + "
                f"{statistics.medium_count} + {statistics.hard_count} != {statistics.total_projects}"
            )

        self.logger.info(
            f"Ranked {statistics.total_projects} projects: {statistics.easy_count} easy (0-33), "
            f"{statistics.medium_count} medium (34-66), {statistics.hard_count} hard (67-100)"
        )

        return RankedExtractionCandidates(
            all_projects=ordered,
            easiest_candidates=easy[:self.top_n],
            hardest_candidates=hardest,
            statistics=statistics
        )
