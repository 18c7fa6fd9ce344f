"""
Thin wrapper around Python's ``logging`` module with numroutines-specific
log levels.

Usage
-----
>>> from numroutines.logger import get_logger
>>> log = get_logger(__name__)
>>> log.info("standard message")
>>> log.debug2("inner-loop detail")     # custom level

The level used by :func:`setup` can be supplied through the
``NUMROUTINES_LOG_LEVEL`` environment variable, either as a level name
(``DEBUG``, ``INFO``, ``DEBUG2``...) or as one of the integer verbosity
levels 0-6 in :data:`VERBOSITY_LEVEL_MAP`.
"""

import logging
import os
import sys

ROOT_NAME = "numroutines"
ENV_LEVEL = "NUMROUTINES_LOG_LEVEL"

# ── Custom levels (below DEBUG=10) ──────────────────────────────────────
DEBUG2 = 9
DEBUG3 = 8

logging.addLevelName(DEBUG2, "DEBUG2")
logging.addLevelName(DEBUG3, "DEBUG3")


class _RoutinesLogger(logging.Logger):
    """Logger subclass that adds ``debug2`` and ``debug3`` convenience methods."""

    def debug2(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG2):
            self._log(DEBUG2, msg, args, **kwargs)

    def debug3(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG3):
            self._log(DEBUG3, msg, args, **kwargs)


logging.setLoggerClass(_RoutinesLogger)

# ── Integer verbosity levels ────────────────────────────────────────────
VERBOSITY_LEVEL_MAP = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
    4: logging.DEBUG,
    5: DEBUG2,
    6: DEBUG3,
}


def get_logger(name: str | None = None) -> _RoutinesLogger:
    """Return a logger under the ``numroutines`` hierarchy.

    Module loggers (``numroutines.spline`` etc.) inherit from the
    ``numroutines`` root logger, so a single ``set_level()`` call
    controls everything.
    """
    return logging.getLogger(name or ROOT_NAME)


def _resolve_level(level: int | str) -> int | str:
    if isinstance(level, int) and level in VERBOSITY_LEVEL_MAP:
        return VERBOSITY_LEVEL_MAP[level]
    if isinstance(level, str):
        text = level.strip().upper()
        if text.isdigit():
            return _resolve_level(int(text))
        return text
    return level


def set_level(level: int | str = logging.INFO) -> None:
    """Set the log level for *all* numroutines loggers at once.

    Accepts Python level ints/names (including ``"DEBUG2"``/``"DEBUG3"``)
    or the integer verbosity levels 0-6.
    """
    logging.getLogger(ROOT_NAME).setLevel(_resolve_level(level))


def setup(level: int | str | None = None, stream=None) -> None:
    """One-time setup: attach a stderr handler with the numroutines format.

    When *level* is omitted it is read from ``NUMROUTINES_LOG_LEVEL``
    (default ``INFO``). Extra calls are no-ops once a handler is attached.
    An unknown level raises ``ValueError`` and attaches nothing.
    """
    root = logging.getLogger(ROOT_NAME)
    if root.handlers:
        return
    if level is None:
        level = os.environ.get(ENV_LEVEL, "INFO")
    set_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-7s: %(name)s: %(message)s"))
    root.addHandler(handler)
