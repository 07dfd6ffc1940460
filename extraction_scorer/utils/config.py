"""Configuration management."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
from dotenv import load_dotenv
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..models.data_models import FilterConfiguration, ScoringWeights
from .logging import get_logger

logger = get_logger("config")


class Config:
    """Configuration manager."""

    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration.

        Args:
            env_file: Path to .env file
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self):
        """Load configuration from environment variables."""
        # Logging Configuration
        self._config["log_level"] = os.getenv("LOG_LEVEL", "INFO")
        self._config["log_file"] = os.getenv("LOG_FILE", "./logs/extraction_scorer.log")

        # Analysis Configuration
        self._config["max_workers"] = int(os.getenv("MAX_WORKERS", "4"))
        self._config["filter_config_path"] = os.getenv(
            "FILTER_CONFIG_PATH", "filter-config.json"
        )
        self._config["scoring_config_path"] = os.getenv(
            "SCORING_CONFIG_PATH", "scoring-config.json"
        )

        # Output Configuration
        self._config["output_directory"] = os.getenv("OUTPUT_DIRECTORY", "./output")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self._config[key] = value

    @property
    def log_level(self) -> str:
        """Get log level."""
        return self._config["log_level"]

    @property
    def log_file(self) -> str:
        """Get log file path."""
        return self._config["log_file"]

    @property
    def max_workers(self) -> int:
        """Get maximum number of workers."""
        return self._config["max_workers"]

    @property
    def filter_config_path(self) -> str:
        """Get filter configuration file path."""
        return str(Path(self._config["filter_config_path"]).expanduser())

    @property
    def scoring_config_path(self) -> str:
        """Get scoring configuration file path."""
        return str(Path(self._config["scoring_config_path"]).expanduser())

    @property
    def output_directory(self) -> str:
        """Get report output directory."""
        return str(Path(self._config["output_directory"]).expanduser())

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self._config.copy()


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"JSON syntax error in {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e


def load_filter_configuration(path: Union[str, Path]) -> FilterConfiguration:
    """Load blocklist and allowlist patterns from a JSON file.

    The patterns may sit under a ``FrameworkFilters`` section or at the top
    level. A missing file yields the built-in defaults.

    Args:
        path: Path to filter-config.json

    Returns:
        Filter configuration

    Raises:
        ConfigurationError: if the file is not valid JSON or has the wrong shape
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"Filter configuration {path} not found, using default patterns")
        return FilterConfiguration()

    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("FrameworkFilters", data)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Filter configuration in {path} must be a JSON object")

    try:
        config = FilterConfiguration.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid filter configuration in {path}: {e}") from e

    logger.info(
        f"Loaded filter configuration from {path}: "
        f"{len(config.block_list)} blocklist, {len(config.allow_list)} allowlist patterns"
    )
    return config


def load_scoring_weights(path: Union[str, Path]) -> ScoringWeights:
    """Load scoring weights from the ``ScoringWeights`` section of a JSON file.

    Args:
        path: Path to scoring-config.json

    Returns:
        Validated scoring weights; defaults when the file or section is missing

    Raises:
        ConfigurationError: if the file is malformed or the weights are invalid
    """
    path = Path(path)
    section = None
    if path.exists():
        data = _read_json(path)
        if isinstance(data, dict):
            section = data.get("ScoringWeights")

    if section is None:
        weights = ScoringWeights()
        source = "defaults"
    else:
        try:
            weights = ScoringWeights.model_validate(section)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid scoring weights in {path}: {e}") from e
        source = str(path)

    is_valid, error = weights.is_valid()
    if not is_valid:
        raise ConfigurationError(
            f"Invalid scoring weights configuration. {error} "
            f"Update {path.name} to use valid weights that sum to 1.0."
        )

    logger.info(
        f"Using scoring weights from {source}: Coupling={weights.coupling}, "
        f"Complexity={weights.complexity}, TechDebt={weights.tech_debt}"
    )
    return weights
