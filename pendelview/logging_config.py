"""
Logging for the simulator and its host drivers.

Everything logs under the 'pendelview' namespace. Host drivers call
setup_logging() once at start-up and log through the logger it returns.
"""
import logging
import sys
from typing import List, Optional

PACKAGE_LOGGER = "pendelview"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    return handlers


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally file) output to the package logger.

    Calling it again replaces the handlers from the previous call, so a
    Streamlit rerun does not print every record twice.

    Args:
        level: Logging level for the package and its handlers.
        log_file: Optional path; the file is truncated on each call.

    Returns:
        The 'pendelview' logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
