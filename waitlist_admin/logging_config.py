from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "WAITLIST_ADMIN_LOG_FORMAT"
LOG_LEVEL_ENV = "WAITLIST_ADMIN_LOG_LEVEL"

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s"
JSON_RENAMES = {"levelname": "level", "name": "logger"}


def build_formatter(mode: str) -> logging.Formatter:
    if mode == "plain":
        return logging.Formatter(PLAIN_FORMAT)
    return jsonlogger.JsonFormatter(JSON_FIELDS, rename_fields=JSON_RENAMES)


def _level_from_env() -> int:
    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    level: Optional[int] = None,
    force_format: Optional[str] = None,
) -> logging.Logger:
    """
    Send every dashboard log record through a single stream handler.

    Output is one JSON object per line unless ``force_format`` or
    WAITLIST_ADMIN_LOG_FORMAT asks for "plain". Without an explicit ``level``
    the root level comes from WAITLIST_ADMIN_LOG_LEVEL (INFO when unset).
    """
    mode = (force_format or os.getenv(LOG_FORMAT_ENV) or "json").lower()
    if level is None:
        level = _level_from_env()

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(mode))
    root.handlers[:] = [handler]

    # per-request access lines from the dev server
    logging.getLogger("werkzeug").setLevel(max(level, logging.WARNING))
    return root
