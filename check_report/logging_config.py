"""Logging setup for plugins built on check_report."""

import sys

from loguru import logger

PACKAGE_NAME = "check_report"


def configure_logging(debug: bool = False) -> None:
    """Enable library logging on stderr.

    Stdout is left untouched; it carries the report line only.

    Args:
        debug: Log at DEBUG instead of INFO.
    """
    logger.remove()
    if debug:
        logger.add(sys.stderr, level="DEBUG")
    else:
        logger.add(sys.stderr, level="INFO")
    logger.enable(PACKAGE_NAME)

    if debug:
        logger.debug(f"[INIT] Logging configured: debug={debug}")
