"""Logging for SiteKeeper.

stdout belongs to the command output: the verify report and, with
``--debug``, the rendered pages of a build. Log records therefore go to
stderr, plus an optional rotating file given with ``--log-file``::

    from site_keeper.logger import logger
    logger.info("Wrote monitor file %s", path)
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteKeeper"

_LevelT = Union[int, str]


def _console_handler() -> logging.StreamHandler:
    # resolved on every call so a reconfigured sys.stderr is picked up
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def _file_handler(file: Path | str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure(*, level: _LevelT = "INFO", log_file: str | Path | None = None) -> logging.Logger:
    """Replace the handlers of the SiteKeeper logger and set its *level*.

    Records stay on this logger; they never reach the root logger, so the
    output of a host application is left alone.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in lg.handlers:
        handler.close()
    lg.handlers.clear()

    lg.addHandler(_console_handler())
    if log_file is not None:
        lg.addHandler(_file_handler(log_file))

    lg.propagate = False
    return lg


def init_logging(level: _LevelT = "INFO", log_file: str | Path | None = None) -> logging.Logger:
    """Entry point for the CLI group: ``--log-level``/``--debug`` and ``--log-file``."""
    return configure(level=level, log_file=log_file)


logger: logging.Logger = init_logging()

__all__ = ["LOGGER_NAME", "configure", "init_logging", "logger"]
