"""
Centralized logging configuration for the aura map builder.

Log levels:
    DEBUG: Individual record fetches, cache reuse
    INFO: Category progress, counts of newly cached items/spells
    WARNING: Fetch failures, missing spell references, items without auras
    ERROR: Store failures, skipped categories

Usage:
    from logging_config import setup_logging

    logger = setup_logging("pipeline")
    logger.info("Processing started")
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    name: Optional[str] = None,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Module loggers (``logging.getLogger(__name__)``) propagate to the root
    logger, so the entry point calls this once with ``name=None``.

    Args:
        name: Logger name, None for the root logger
        level: Logging level (default: INFO)
        log_file: Optional path to append logs to
        console_output: Whether to output to stdout (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_run_logger(cache_dir: Path, level: int = logging.INFO) -> logging.Logger:
    """
    Configure the root logger for a pipeline run.

    Logs go to stdout and are appended to ``<cache_dir>/pipeline.log`` so a
    run's fetch failures can be inspected after the fact.

    Args:
        cache_dir: Cache root directory
        level: Logging level (default: INFO)

    Returns:
        Configured root logger
    """
    return setup_logging(None, level=level, log_file=cache_dir / "pipeline.log", console_output=True)
