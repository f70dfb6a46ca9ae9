"""Logging helpers for numopt.

Every logger lives under the ``numopt`` namespace, writes to stderr through a
single handler owned by this module, and does not propagate. Solvers emit
DEBUG/INFO records only; failures are raised, never just logged.

>>> from numopt.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.debug("Evaluating objective")
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_PACKAGE = "numopt"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_level = logging.WARNING
_formatter = logging.Formatter(_DEFAULT_FORMAT)
_stream: Optional[IO[str]] = None

# logger name -> handler installed by this module
_owned: dict[str, logging.Handler] = {}


def _qualify(name: Optional[str]) -> str:
    if not name or name == _PACKAGE:
        return _PACKAGE
    if name.startswith(_PACKAGE + "."):
        return name
    return f"{_PACKAGE}.{name}"


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _make_handler() -> logging.Handler:
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(_formatter)
    return handler


def _install(logger: logging.Logger) -> None:
    previous = _owned.get(logger.name)
    if previous is not None:
        logger.removeHandler(previous)
    handler = _make_handler()
    logger.addHandler(handler)
    logger.setLevel(_level)
    _owned[logger.name] = handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the numopt logger for ``name``, creating it on first use.

    Names outside the package are prefixed with ``numopt.``; ``None`` gives
    the package logger. Repeated calls return the same logger with the same
    single handler.
    """
    logger = logging.getLogger(_qualify(name))
    if logger.name not in _owned:
        _install(logger)
        logger.propagate = False
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every numopt logger and of loggers created later.

    ``level`` may be a ``logging`` constant or its name; unknown names mean
    WARNING.
    """
    global _level
    _level = _coerce_level(level)
    for logger_name, handler in _owned.items():
        logging.getLogger(logger_name).setLevel(_level)
        handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Point every numopt logger at ``stream`` with the given level and format.

    Only handlers installed by :func:`get_logger` are replaced. Loggers
    created afterwards pick up the same settings.
    """
    global _level, _formatter, _stream
    _level = _coerce_level(level)
    _formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)
    _stream = stream
    for logger_name in list(_owned):
        _install(logging.getLogger(logger_name))


__all__ = ["configure_logging", "get_logger", "set_log_level"]
