"""Console and file logging for tsdocgen runs.

Progress lines (``-- generating docs for ...``, ``~~ generated ...``) are
printed to stdout as-is; warnings and errors go to stderr with a
``[tsdocgen]`` prefix so failures stand out when the run is piped.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "tsdocgen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the tsdocgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class _BelowLevel(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


class _ProgressFormatter(logging.Formatter):
    """Bare message for INFO, level-tagged for DEBUG."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()
        return f"[tsdocgen] {record.levelname} {record.getMessage()}"


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route tsdocgen records to stdout/stderr and, optionally, a log file."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    progress_handler = logging.StreamHandler(sys.stdout)
    progress_handler.setLevel(level)
    progress_handler.addFilter(_BelowLevel(logging.WARNING))
    progress_handler.setFormatter(_ProgressFormatter())
    logger.addHandler(progress_handler)

    error_handler = logging.StreamHandler(sys.stderr)
    error_handler.setLevel(logging.WARNING)
    error_handler.setFormatter(logging.Formatter("[tsdocgen] %(levelname)s %(message)s"))
    logger.addHandler(error_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # Append so consecutive runs of a docs build share one log.
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
