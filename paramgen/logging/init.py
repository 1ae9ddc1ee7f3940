from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Run logging for paramgen.

Every line the CLI emits carries a label so a wrapper script can tell the
outcome of a run apart from the manifest lines:

    INFO Converting 3 row(s) into ./out
    ERROR write: could not write output 2 (item-2.json): ...
    SUMMARY rows=3 prefix=item- output_dir=./out elapsed_sec=0.01 throughput_rps=300

Loggers created with ``logging.getLogger(__name__)`` inside the package are
children of ``paramgen`` and reach the same handler.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "paramgen"
SUMMARY_LEVEL = 25  # between INFO and WARNING

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """``LABEL message``; unknown levels fall back to their registered name."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        SUMMARY_LEVEL: "SUMMARY",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(*, debug: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Attach the labeled handler to the ``paramgen`` logger.

    Args:
        debug: log at DEBUG instead of INFO
        stream: destination, defaults to the current ``sys.stdout``

    Returns:
        The configured logger. Later calls return it unchanged until
        ``reset_logging()``.
    """
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    for old in logger.handlers[:]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(LabeledFormatter())
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False  # no second copy via the root logger

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def log_summary(message: str) -> None:
    """Emit ``message`` under the SUMMARY label."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() rebuilds it (tests)."""
    global _logger
    _logger = None
