"""Centralized logging configuration for robomap.

This module provides unified logging setup using Loguru as the canonical
logging facade. A single configure_logging() function configures the global
logger for all submodules.

Usage (in scripts/CLI):
    >>> from robomap.common.logging import configure_logging
    >>> from loguru import logger
    >>> configure_logging(verbose=args.verbose)
    >>> logger.info("Export started")

Usage (in modules):
    >>> from loguru import logger
    >>> logger.debug("Rasterized {} objects", count)
"""

from __future__ import annotations

import sys

from loguru import logger


def configure_logging(verbose: bool = False) -> None:
    """Configure the global loguru logger.

    # <https://loguru.readthedocs.io/en/stable/>

    Call this once at application startup. After this, use
    `from loguru import logger` everywhere and the configuration applies.

    Args:
        verbose: If True, enable DEBUG level; if False, use INFO level.

    Note:
        This function is idempotent, so calling it again replaces the sink.
        File:line format is used for terminal link clickability.
    """
    logger.remove()  # Remove default handler

    log_format = (
        "<level>{level: <7}</level>| "
        "<dim><cyan>{file}:{line}</cyan></dim> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=log_format,
        level="DEBUG" if verbose else "INFO",
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    logger.level("DEBUG", color="<dim><white>")
    logger.level("SUCCESS", color="<fg #00ff00><bold>")
    logger.level("WARNING", color="<fg #ffff00><bold>")
