"""Utility modules."""

from .config import Config, load_filter_configuration, load_scoring_weights
from .logging import setup_logging, setup_logging_from_config, get_logger
from .validation import validate_filter_configuration

__all__ = [
    "Config",
    "load_filter_configuration",
    "load_scoring_weights",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "validate_filter_configuration",
]
