"""Logging configuration."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Optional

LOGGER_NAME = "extraction_scorer"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Rotation of the log file: 10MB, 5 backups
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """Set up the ``extraction_scorer`` logger.

    Calling it again replaces the handlers of a previous call.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of a rotating log file; no file logging when empty
        log_format: Custom log format (optional)
        console_output: Whether to output to console

    Returns:
        Configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format or DEFAULT_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def setup_logging_from_config(config: Any, debug: bool = False) -> logging.Logger:
    """Set up logging from a ``Config``: its level and its ``LOG_FILE``.

    Args:
        config: Configuration providing ``log_level`` and ``log_file``
        debug: Force DEBUG level regardless of the configured level
    """
    log_level = "DEBUG" if debug else config.log_level
    logger = setup_logging(log_level=log_level, log_file=config.log_file, console_output=True)
    logger.debug(f"Logging at {log_level} to console and {config.log_file or 'no file'}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
