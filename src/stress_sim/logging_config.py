# MIT License (see LICENSE)
"""
Logging setup for the stress_sim namespace.

Library modules only create loggers; applications and scripts call
setup_logging() once to get output.
"""
from __future__ import annotations
import logging
import sys


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'stress_sim' logger with a console handler.

    Args:
        level: Logging level (e.g. logging.DEBUG).
        log_file: Optional path; also write logs there.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("stress_sim")
    logger.setLevel(level)

    # Re-running setup replaces handlers instead of duplicating output.
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
