"""Exception types raised by the extraction scorer."""

from typing import Optional


class ExtractionScorerError(Exception):
    """Base class for all extraction scorer errors."""


class MetricsInsufficientError(ExtractionScorerError):
    """Raised when a project has no mandatory metric available to score."""

    def __init__(self, project_name: str, message: Optional[str] = None):
        self.project_name = project_name
        if message is None:
            message = (
                f"Project '{project_name}' has neither a complexity nor a "
                "tech debt metric available"
            )
        super().__init__(message)


class MalformedPatternError(ExtractionScorerError, ValueError):
    """Raised when an unvalidated pattern with a mid-string wildcard reaches the matcher."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(
            f"Pattern '{pattern}' has a wildcard before its final character; "
            "validate filter configuration before matching"
        )


class ConfigurationError(ExtractionScorerError):
    """Raised when a configuration file or scoring weights are invalid."""


class MetricsInputError(ExtractionScorerError):
    """Raised when a metrics input file cannot be read."""
