"""Logging helpers shared across ReleaseGate modules.

Modules log through ``logging.getLogger(__name__)``; this module only wires up
the root handler and provides helpers for structured ``extra=`` payloads.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_PREFIX = "ctx_"


def configure_logging(level: Optional[str] = None, stream=None) -> None:
    """Configure the root logger once.

    The level is taken from ``level``, then the RELEASEGATE_LOG_LEVEL
    environment variable, then INFO.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not any(getattr(h, "_releasegate", False) for h in root.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        handler._releasegate = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level_value)


def add_file_handler(path: str) -> logging.Handler:
    """Attach a timestamped file handler to the root logger."""
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logging.getLogger().addHandler(file_handler)
    return file_handler


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records.

    Keys are prefixed so they never collide with LogRecord attributes;
    None values are dropped.
    """
    return {f"{_CONTEXT_PREFIX}{k}": v for k, v in fields.items() if v is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when debug records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)
