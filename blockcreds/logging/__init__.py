"""
Logging Module
==============

Structured logging using structlog with JSON output for production
and colored console output for development.

Usage:
    from blockcreds.logging import get_logger, setup_logging

    # Setup at application start
    setup_logging()

    # Get logger for a module
    logger = get_logger(__name__)

    # Log with context
    logger.info("gate_evaluated", threshold=750, performed=False)
"""

from blockcreds.logging.logger import (
    bind_context,
    censor_sensitive,
    clear_context,
    get_logger,
    setup_logging,
)


__all__ = [
    "get_logger",
    "setup_logging",
    "bind_context",
    "clear_context",
    "censor_sensitive",
]
