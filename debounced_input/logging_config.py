import logging
import os
import sys

LOG_LEVEL_ENV = "DEBOUNCED_INPUT_LOG_LEVEL"


def setup_logging(level: int | None = None) -> None:
    """Configure structured logging for the application.

    When no level is given, it is read from DEBOUNCED_INPUT_LOG_LEVEL
    (a level name such as "DEBUG"), falling back to INFO.
    """
    if level is None:
        level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
        level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger. Use as: logger = get_logger(__name__)."""
    return logging.getLogger(name)
