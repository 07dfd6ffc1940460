"""Pytest configuration and fixtures."""

import logging

import pytest
from unittest.mock import Mock

from extraction_scorer.models.data_models import (
    DependencyEdge, FilterConfiguration, NormalizedMetric, RawProjectMetrics
)
from extraction_scorer.utils.config import Config


@pytest.fixture
def mock_config():
    """Mock configuration for testing."""
    config = Mock(spec=Config)
    config.max_workers = 4
    config.log_level = "ERROR"
    config.filter_config_path = "/nonexistent/filter-config.json"
    config.scoring_config_path = "/nonexistent/scoring-config.json"
    config.output_directory = "/tmp/extraction-scorer-test"
    return config


@pytest.fixture
def default_filter_config():
    """Built-in default filter configuration."""
    return FilterConfiguration()


@pytest.fixture
def sample_projects():
    """Raw metrics for a small monolith."""
    return [
        RawProjectMetrics(
            project_name="Acme.Orders", coupling=12, complexity=40, tech_debt=80, external_api_count=3
        ),
        RawProjectMetrics(
            project_name="Acme.Billing", coupling=4, complexity=10, tech_debt=20, external_api_count=0
        ),
        RawProjectMetrics(
            project_name="Acme.Legacy", coupling=20, complexity=90, tech_debt=95, external_api_count=7
        ),
        RawProjectMetrics(
            project_name="Acme.Reporting", coupling=None, complexity=40, tech_debt=80, external_api_count=1
        ),
    ]


@pytest.fixture
def sample_dependencies():
    """Dependency edges including framework references."""
    return [
        DependencyEdge(source="Acme.Orders", target="Acme.Billing"),
        DependencyEdge(source="Acme.Orders", target="Microsoft.Extensions.Logging"),
        DependencyEdge(source="Acme.Reporting", target="Acme.Orders"),
        DependencyEdge(source="Acme.Billing", target="System.Text.Json"),
        DependencyEdge(source="Acme.Legacy", target="Acme.Orders"),
    ]


@pytest.fixture
def unavailable():
    """Unavailable normalized metric."""
    return NormalizedMetric.unavailable()


@pytest.fixture
def metrics_csv(tmp_path):
    """Metrics CSV file with a blank coupling cell and a project lacking both mandatory metrics."""
    path = tmp_path / "metrics.csv"
    path.write_text(
        "project_name,coupling,complexity,tech_debt,external_apis\n"
        "Acme.Orders,12,40,80,3\n"
        "Acme.Billing,,40,80,0\n"
        "Acme.Ghost,5,,N/A,2\n",
        encoding="utf-8"
    )
    return path


@pytest.fixture
def dependencies_csv(tmp_path):
    """Dependency edge CSV file."""
    path = tmp_path / "deps.csv"
    path.write_text(
        "source,target\n"
        "Acme.Orders,Acme.Billing\n"
        "Acme.Orders,Microsoft.Extensions.Logging\n"
        "Acme.Ghost,Acme.Orders\n",
        encoding="utf-8"
    )
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Setup test environment."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")  # Reduce log noise in tests
    monkeypatch.setenv("MAX_WORKERS", "4")
    monkeypatch.setenv("FILTER_CONFIG_PATH", "/nonexistent/filter-config.json")
    monkeypatch.setenv("SCORING_CONFIG_PATH", "/nonexistent/scoring-config.json")
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "extraction_scorer.log"))


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("extraction_scorer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
