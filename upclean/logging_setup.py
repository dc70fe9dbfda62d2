#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration for upclean.

Two loggers are used: ``upclean`` for diagnostics and ``upclean.actions``
for the append-only action log that records every queued action, the
decision taken for it and its outcome.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from upclean.constants import LOG_DATEFMT, LOG_FORMAT

logger = logging.getLogger("upclean")
action_log = logging.getLogger("upclean.actions")


class BestEffortFileHandler(logging.FileHandler):
    """Append-only file handler whose write failures are dropped silently."""

    def handleError(self, record: logging.LogRecord) -> None:
        return


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging system.

    Args:
        verbose: If True, show DEBUG records on the console and in the log file.
        log_file: Optional path of the action log. If None, only console logging.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handlers.append(console_handler)

    # File handler (optional)
    file_error = None
    if log_file:
        try:
            file_handler = BestEffortFileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
            file_handler.setLevel(level)
            handlers.append(file_handler)
        except (OSError, TypeError, ValueError) as e:
            file_error = e

    # Configure root logger
    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True
    )

    logger.setLevel(level)

    if file_error is not None:
        logger.warning(f"Failed to open log file {log_file}: {file_error}")
    elif log_file:
        logger.debug(f"Logging to file: {log_file}")

    if verbose:
        logger.debug("Verbose logging enabled")
