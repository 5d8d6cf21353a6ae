"""
Centralized logging configuration.

Provides structured logging with:
- Rich console output (INFO or DEBUG based on environment)
- File output (always DEBUG for troubleshooting, optional)

Usage:
    from idscan.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Processing started")
    logger.debug("Detailed debug info")  # Only shown when DEBUG=1
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import get_config
from .utils.timing import format_duration


def setup_logger(
    name: str = "idscan",
    log_dir: Optional[Path] = None,
    debug: Optional[bool] = None,
    log_to_file: Optional[bool] = None,
) -> logging.Logger:
    """
    Setup and configure a logger.

    Args:
        name: Logger name (typically __name__)
        log_dir: Directory for log files (default from config)
        debug: Enable debug mode (default from environment/config)
        log_to_file: Whether to write logs to file (default from config)

    Returns:
        Configured logger instance
    """
    config = get_config()

    if debug is None:
        debug = config.debug
    if log_dir is None:
        log_dir = config.logs_dir
    if log_to_file is None:
        log_to_file = config.log_to_file

    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)  # Capture all, filter at handler level
    logger.propagate = False

    console_handler = RichHandler(
        rich_tracebacks=True, show_time=True, show_level=True, show_path=False
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{datetime.now():%Y%m%d_%H%M%S}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

        logger.debug(f"Log file: {log_file}")

    return logger


# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str = "idscan") -> logging.Logger:
    """
    Get a logger instance.

    Creates and caches logger instances so handlers are attached once.

    Example:
        logger = get_logger(__name__)
        logger.info("Starting batch")
    """
    if name not in _loggers:
        root_name = name.split(".", 1)[0]
        if root_name == "idscan" and name != root_name:
            # Package modules share the handlers of the package logger
            get_logger(root_name)
            _loggers[name] = logging.getLogger(name)
        else:
            _loggers[name] = setup_logger(name)
    return _loggers[name]


def set_debug(enabled: bool, name: str = "idscan") -> None:
    """Switch the console verbosity of an already configured logger."""
    for handler in logging.getLogger(name).handlers:
        if isinstance(handler, RichHandler):
            handler.setLevel(logging.DEBUG if enabled else logging.INFO)


def log_timing(logger: logging.Logger, operation: str, duration_sec: float) -> None:
    """Sub-second timings go to DEBUG, longer ones to INFO."""
    level = logging.DEBUG if duration_sec < 1 else logging.INFO
    logger.log(level, f"{operation}: {format_duration(duration_sec)}")


def log_progress(logger: logging.Logger, current: int, total: int, item: str = "item") -> None:
    """Log progress information."""
    percent = (current / total * 100) if total > 0 else 0
    logger.info(f"Progress: {current}/{total} ({percent:.1f}%) - {item}")
