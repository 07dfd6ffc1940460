"""Test metric normalization, score aggregation, coupling and ranking."""

import math

import pytest

from extraction_scorer.analysis.coupling import calculate_raw_coupling, observed_range
from extraction_scorer.analysis.metrics import MetricNormalizer, normalize
from extraction_scorer.analysis.ranking import RankingEngine
from extraction_scorer.analysis.scoring import ScoreAggregator
from extraction_scorer.exceptions import ConfigurationError, MetricsInsufficientError
from extraction_scorer.models.data_models import (
    DependencyEdge, ExtractionScore, MetricRange, NormalizedMetric, RawProjectMetrics, ScoringWeights
)


def metric(value):
    return NormalizedMetric(value=value)


def make_score(name, final_score):
    return ExtractionScore(
        project_name=name,
        final_score=final_score,
        coupling=NormalizedMetric.unavailable(),
        complexity=metric(final_score),
        tech_debt=metric(final_score),
    )


class TestNormalize:
    """Test linear rescaling onto 0-100."""

    def test_linear_rescale(self):
        """Test values inside the range."""
        assert normalize(50, 0, 200).value == 25.0
        assert normalize(15, 10, 20).value == 50.0

    def test_range_bounds(self):
        """Test that the range ends map to the scale ends."""
        assert normalize(10, 10, 20).value == 0.0
        assert normalize(20, 10, 20).value == 100.0

    @pytest.mark.parametrize("raw,expected", [(-5, 0.0), (1000, 100.0), (250, 100.0)])
    def test_out_of_range_is_clamped(self, raw, expected):
        """Test clamping of values outside the known range."""
        assert normalize(raw, 0, 200).value == expected

    @pytest.mark.parametrize("raw", [None, float("nan")])
    def test_unavailable_stays_unavailable(self, raw):
        """Test that missing input is never turned into zero."""
        result = normalize(raw, 0, 100)

        assert result.is_available is False
        assert result.value is None

    def test_degenerate_range(self):
        """Test that an empty range maps to 0."""
        assert normalize(5, 5, 5).value == 0.0
        assert normalize(500, 5, 5).value == 0.0

    def test_inverted_range_raises(self):
        """Test that max below min is rejected."""
        with pytest.raises(ValueError):
            normalize(5, 10, 0)

    @pytest.mark.parametrize("raw", [-1e9, -1, 0, 0.5, 33.3, 99.99, 1e9])
    def test_result_always_on_scale(self, raw):
        """Test that any finite value lands in [0, 100]."""
        value = normalize(raw, -50, 150).value

        assert 0.0 <= value <= 100.0


class TestMetricNormalizer:
    """Test per-project normalization."""

    def test_default_ranges(self):
        """Test that all metrics default to 0-100."""
        normalizer = MetricNormalizer()

        assert normalizer.range_for("complexity") == MetricRange(minimum=0, maximum=100)
        assert normalizer.range_for("coupling") == MetricRange(minimum=0, maximum=100)

    def test_custom_ranges(self):
        """Test that supplied ranges override the defaults."""
        normalizer = MetricNormalizer({"complexity": MetricRange(minimum=0, maximum=400)})

        assert normalizer.normalize_metric("complexity", 100).value == 25.0
        assert normalizer.normalize_metric("tech_debt", 100).value == 100.0

    def test_normalize_project(self):
        """Test normalization of all three signals."""
        normalizer = MetricNormalizer({"coupling": MetricRange(minimum=0, maximum=20)})
        project = RawProjectMetrics(project_name="Acme.Orders", coupling=5, complexity=40, tech_debt=None)

        coupling, complexity, tech_debt = normalizer.normalize_project(project)

        assert coupling.value == 25.0
        assert complexity.value == 40.0
        assert tech_debt.is_available is False

    def test_inverted_range_is_rejected(self):
        """Test range validation at construction."""
        with pytest.raises(ValueError):
            MetricRange(minimum=10, maximum=0)


class TestScoreAggregator:
    """Test composite scoring."""

    def test_all_metrics_available(self):
        """Test the weighted mean with default weights."""
        aggregator = ScoreAggregator()

        score = aggregator.aggregate(metric(60), metric(40), metric(80), 3)

        assert score == pytest.approx(60.0)

    def test_missing_coupling_renormalizes(self):
        """Test that complexity and tech debt split the weight evenly without coupling."""
        aggregator = ScoreAggregator()

        score = aggregator.aggregate(NormalizedMetric.unavailable(), metric(40), metric(80), 0)

        assert score == pytest.approx(60.0)

    def test_missing_tech_debt_renormalizes(self):
        """Test scoring with a single mandatory metric."""
        aggregator = ScoreAggregator()

        score = aggregator.aggregate(metric(100), metric(30), NormalizedMetric.unavailable(), 0)

        assert score == pytest.approx((0.4 * 100 + 0.3 * 30) / 0.7)

    def test_both_mandatory_missing_raises(self):
        """Test that coupling alone is not enough to score."""
        aggregator = ScoreAggregator()

        with pytest.raises(MetricsInsufficientError) as exc_info:
            aggregator.aggregate(
                metric(50), NormalizedMetric.unavailable(), NormalizedMetric.unavailable(), 0,
                project_name="Acme.Ghost"
            )

        assert exc_info.value.project_name == "Acme.Ghost"
        assert "Acme.Ghost" in str(exc_info.value)

    def test_zero_weighted_metric_only_raises(self):
        """Test that a present metric with no weight cannot carry the score."""
        aggregator = ScoreAggregator(ScoringWeights(coupling=0.5, complexity=0.5, tech_debt=0.0))

        with pytest.raises(MetricsInsufficientError):
            aggregator.aggregate(
                NormalizedMetric.unavailable(), NormalizedMetric.unavailable(), metric(80), 0
            )

    def test_external_api_count_not_blended(self):
        """Test that the endpoint count does not move the score."""
        aggregator = ScoreAggregator()

        without_apis = aggregator.aggregate(metric(10), metric(20), metric(30), 0)
        with_apis = aggregator.aggregate(metric(10), metric(20), metric(30), 500)

        assert without_apis == with_apis

    @pytest.mark.parametrize("values", [(0, 0, 0), (100, 100, 100), (0, 100, 0), (None, 100, 100), (None, 0, None)])
    def test_score_stays_on_scale(self, values):
        """Test that the composite never leaves [0, 100]."""
        aggregator = ScoreAggregator()
        coupling, complexity, tech_debt = (NormalizedMetric(value=v) for v in values)

        score = aggregator.aggregate(coupling, complexity, tech_debt, 0)

        assert 0.0 <= score <= 100.0

    def test_monotonic_in_each_metric(self):
        """Test that raising one metric never lowers the score."""
        aggregator = ScoreAggregator()

        low = aggregator.aggregate(metric(20), metric(20), metric(20), 0)
        higher = aggregator.aggregate(metric(20), metric(21), metric(20), 0)

        assert higher >= low

    @pytest.mark.parametrize("weights", [
        ScoringWeights(coupling=0.5, complexity=0.5, tech_debt=0.5),
        ScoringWeights(coupling=-0.2, complexity=0.6, tech_debt=0.6),
        ScoringWeights(coupling=1.0, complexity=0.0, tech_debt=0.0),
        ScoringWeights(coupling=float("nan"), complexity=0.5, tech_debt=0.5),
    ])
    def test_invalid_weights_raise(self, weights):
        """Test weight validation at construction."""
        with pytest.raises(ConfigurationError):
            ScoreAggregator(weights)

    def test_score_project(self):
        """Test end-to-end scoring of raw metrics."""
        aggregator = ScoreAggregator()
        project = RawProjectMetrics(
            project_name="Acme.Reporting", coupling=None, complexity=40, tech_debt=80, external_api_count=2
        )

        score = aggregator.score_project(project, MetricNormalizer())

        assert score.project_name == "Acme.Reporting"
        assert score.final_score == pytest.approx(60.0)
        assert score.coupling.is_available is False
        assert score.external_api_count == 2
        assert score.difficulty_category == "Medium"

    def test_nan_raw_metric_is_unavailable(self):
        """Test that NaN in raw input counts as missing."""
        project = RawProjectMetrics(project_name="Acme.Orders", coupling=math.nan, complexity=40, tech_debt=80)

        score = ScoreAggregator().score_project(project, MetricNormalizer())

        assert project.coupling is None
        assert score.final_score == pytest.approx(60.0)


class TestCoupling:
    """Test coupling counts from dependency edges."""

    def test_incoming_counts_double(self):
        """Test incoming * 2 + outgoing."""
        edges = [
            DependencyEdge(source="A", target="B"),
            DependencyEdge(source="C", target="B"),
            DependencyEdge(source="B", target="D"),
        ]

        coupling = calculate_raw_coupling(edges, ["A", "B", "C", "D", "E"])

        assert coupling == {"A": 1.0, "B": 5.0, "C": 1.0, "D": 2.0, "E": 0.0}

    def test_only_listed_projects_reported(self):
        """Test that external targets are not reported."""
        edges = [DependencyEdge(source="A", target="Newtonsoft.Json")]

        assert calculate_raw_coupling(edges, ["A"]) == {"A": 1.0}

    def test_observed_range(self):
        """Test the batch-relative coupling range."""
        assert observed_range([3.0, None, 12.0, 0.0]) == MetricRange(minimum=0, maximum=12)
        assert observed_range([]) == MetricRange(minimum=0, maximum=0)


class TestRankingEngine:
    """Test ranking of extraction candidates."""

    def test_sorted_easiest_first(self):
        """Test ascending order with ties broken by name."""
        scores = [make_score("C", 70), make_score("B", 10), make_score("A", 10), make_score("D", 50)]

        ranked = RankingEngine().generate_ranked_list(scores)

        assert [s.project_name for s in ranked.all_projects] == ["A", "B", "D", "C"]

    def test_categories_and_statistics(self):
        """Test category boundaries at 33 and 67."""
        scores = [make_score(str(v), v) for v in (0, 33, 33.5, 50, 66.9, 67, 100)]

        ranked = RankingEngine().generate_ranked_list(scores)
        stats = ranked.statistics

        assert (stats.easy_count, stats.medium_count, stats.hard_count) == (2, 3, 2)
        assert stats.total_projects == 7
        assert stats.is_valid

    def test_top_candidates(self):
        """Test that easiest and hardest lists are capped and ordered."""
        scores = [make_score(f"easy{i:02d}", i) for i in range(15)]
        scores += [make_score(f"hard{i:02d}", 70 + i) for i in range(15)]

        ranked = RankingEngine(top_n=10).generate_ranked_list(scores)

        assert len(ranked.easiest_candidates) == 10
        assert ranked.easiest_candidates[0].project_name == "easy00"
        assert len(ranked.hardest_candidates) == 10
        assert ranked.hardest_candidates[0].final_score == 84
        assert ranked.hardest_candidates[-1].final_score == 75

    def test_empty(self):
        """Test ranking nothing."""
        ranked = RankingEngine().generate_ranked_list([])

        assert ranked.all_projects == []
        assert ranked.statistics.total_projects == 0
