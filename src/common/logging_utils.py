"""Centralized logging setup and structured DEBUG helpers.

Every module logs through ``logging.getLogger(__name__)``; this module only
installs handlers on the root logger and provides small helpers for the
``extra=`` context attached to DEBUG traces.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_MARKER = "_deplicense_handler"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.DEFAULT_LOG_LEVEL)
    value = getattr(logging, str(name).upper(), None)
    if not isinstance(value, int):
        return getattr(logging, Constants.DEFAULT_LOG_LEVEL)
    return value


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Install the stderr handler (and optional file handler) on the root logger.

    Safe to call more than once: handlers installed by a previous call are
    replaced, foreign handlers are left alone.

    Args:
        level: Level name; falls back to DEPLICENSE_LOG_LEVEL, then WARNING.
        log_file: Optional path of a log file to append to.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    setattr(stream_handler, _HANDLER_MARKER, True)
    root.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        setattr(file_handler, _HANDLER_MARKER, True)
        root.addHandler(file_handler)

    root.setLevel(_resolve_level(level))


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records of ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record.

    Keys with ``None`` values are dropped so records only carry what is known.
    """
    return {k: v for k, v in fields.items() if v is not None}
