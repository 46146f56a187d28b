"""Logging for builder-export.

All package loggers live under the ``builder_export`` namespace, so
``get_logger("mapper")`` is ``builder_export.mapper``. Only the CLI calls
`setup_logging`; library callers keep control of their own handlers.
"""

import logging
import sys
from typing import Optional

__all__ = ["LOGGER_NAMESPACE", "get_logger", "setup_logging"]

LOGGER_NAMESPACE = "builder_export"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO, stream=sys.stderr) -> logging.Handler:
    """Attach a stream handler to the package logger.

    Calling it again replaces the previous handler instead of stacking a
    second one.

    Args:
        level: Numeric level or a level name such as "debug". Unknown names
            fall back to INFO.
        stream: Output stream.

    Returns:
        The installed handler.
    """
    root = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(root.handlers):
        if getattr(handler, "_builder_export", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._builder_export = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a package logger.

    Args:
        name: Area name, e.g. "segment". None gives the package logger.

    Returns:
        Logger instance.
    """
    if not name:
        return logging.getLogger(LOGGER_NAMESPACE)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
