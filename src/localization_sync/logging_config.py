# SPDX-License-Identifier: MIT
"""Logging configuration for the localization sync layer.

This module provides a dual-logger system:
1. Detail Logger: Captures store/cache round trips and key computations to file only
2. Status Logger: Outputs user-facing progress/status to console (stderr) and file
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Logger names
DETAIL_LOGGER_NAME = "localization_sync.detail"
STATUS_LOGGER_NAME = "localization_sync.status"

LOG_FILE_NAME = "localization-sync.log"


class FlushingStreamHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler that flushes after every record."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        # Only flush if the stream is not closed
        if self.stream and not self.stream.closed:
            self.flush()


def setup_logging(log_dir: Path | None = None) -> tuple[logging.Logger, logging.Logger]:
    """Configure dual logging system with detail and status loggers.

    Detail Logger:
        - Captures all DEBUG and above messages
        - Writes to file only
        - Used for store queries, cache round trips and key derivation

    Status Logger:
        - Outputs user-facing progress and status information
        - Writes to both stderr (console) and file
        - Used for warm-up progress, warnings and errors

    Args:
        log_dir: Directory for log file. If None, uses .localization-sync/ in the
            current directory

    Returns:
        Tuple of (detail_logger, status_logger)
    """
    if log_dir is None:
        log_dir = Path.cwd() / ".localization-sync"

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    # Mode 'w' overwrites the file each time
    file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    detail_logger = logging.getLogger(DETAIL_LOGGER_NAME)
    detail_logger.setLevel(logging.DEBUG)
    _close_handlers(detail_logger)
    detail_logger.addHandler(file_handler)
    detail_logger.propagate = False

    status_logger = logging.getLogger(STATUS_LOGGER_NAME)
    status_logger.setLevel(logging.INFO)
    _close_handlers(status_logger)

    console_handler = FlushingStreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s %(message)s", datefmt="%H:%M:%S")
    )

    status_logger.addHandler(console_handler)
    status_logger.addHandler(file_handler)
    status_logger.propagate = False

    detail_logger.info(f"Logging initialized. Log file: {log_file}")

    return detail_logger, status_logger


def _close_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        handler.close()
    logger.handlers.clear()


def get_detail_logger() -> logging.Logger:
    """Get the detail logger for verbose technical logging.

    Returns:
        The detail logger instance
    """
    return logging.getLogger(DETAIL_LOGGER_NAME)


def get_status_logger() -> logging.Logger:
    """Get the status logger for user-facing progress and status.

    Returns:
        The status logger instance
    """
    return logging.getLogger(STATUS_LOGGER_NAME)
