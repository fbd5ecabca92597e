# === FILE: crawn/logger.py ===
"""Project-wide logging configuration for **crawn**.

Highlights
----------
* Unified format for console and optional file output (with rotation).
* Single, importable instance :data:`logger` – simply::

      from crawn.logger import logger
      logger.warning("Failed to fetch URL: %s", url)
* Re-configurable at runtime via :func:`configure` / :func:`init_logging`.
* Level names follow the crawler's vocabulary: ``INFO`` for requests (verbose
  mode only), ``WARN`` for recoverable failures, ``FATAL`` for aborts.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

# --------------------------------------------------------------------------- #
# Constants & basic types                                                     #
# --------------------------------------------------------------------------- #

_DEFAULT_FORMAT: Final[str] = "%(asctime)s [%(levelname)s]: %(message)s"
_LOGGER_NAME: Final[str] = "crawn"

_LevelT = Union[int, str]

logging.addLevelName(logging.WARNING, "WARN")
logging.addLevelName(logging.CRITICAL, "FATAL")


# --------------------------------------------------------------------------- #
# Helper builders                                                             #
# --------------------------------------------------------------------------- #


def _stream_handler(fmt: str) -> logging.StreamHandler:
    # stdout stays free for the one-line crawl summary
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def configure(
    *,
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the global project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a logfile. *None* → console-only output.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        *True* – remove existing handlers; *False* – just append new one(s).
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    lg.addHandler(_stream_handler(log_format))

    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))

    lg.propagate = False
    return lg


def init_logging(
    verbose: bool = False,
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Configure the logger for a crawl run: INFO when *verbose*, WARN otherwise."""
    level = logging.INFO if verbose else logging.WARNING
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


# --------------------------------------------------------------------------- #
# Ready-to-use instance                                                       #
# --------------------------------------------------------------------------- #

logger: logging.Logger = configure()

__all__ = ["logger", "configure", "init_logging"]
