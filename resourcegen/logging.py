"""Logging setup shared by the generate and migrate commands.

Every component logs under the ``resourcegen`` hierarchy. The console shows
INFO and up (the ``Updated:`` / ``Skipped:`` migration lines among them), or
DEBUG with ``--verbose``. A ``--log-file`` keeps a full DEBUG transcript of the
run regardless of console verbosity.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER_NAME = "resourcegen"
CONSOLE_FORMAT = "[resourcegen] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``resourcegen.<name>``, or the package logger itself."""
    full_name = f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach console and optional file handlers to the package logger.

    Handlers from an earlier call are closed and replaced. The log file is
    truncated per run and its parent directory created as needed.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = logging.DEBUG if verbose else logging.INFO
    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    logger_level = console_level
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        transcript = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        transcript.setLevel(logging.DEBUG)
        transcript.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(transcript)
        logger_level = logging.DEBUG

    logger.setLevel(logger_level)
    logger.propagate = False
    return logger


__all__ = ["ROOT_LOGGER_NAME", "configure_logging", "get_logger"]
