"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module owns
the root configuration plus the small helpers used to attach structured
context to DEBUG traces without leaking secrets.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger.

    The level is taken from ``level`` when given, else from the
    NUGETCFG_LOG_LEVEL environment variable, else INFO. Calling this more
    than once replaces the previous configuration.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, None)
    if not isinstance(level_value, int):
        level_value = logging.INFO
    logging.basicConfig(format=Constants.LOG_FORMAT, level=level_value, force=True)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records.

    Keys with a None value are dropped so call sites can pass optional
    fields unconditionally.
    """
    return {key: value for key, value in kwargs.items() if value is not None}


def safe_url(url: Optional[str]) -> str:
    """Return ``url`` without userinfo, query string or fragment, for logging."""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
        netloc = parts.netloc.rpartition("@")[2]
    except ValueError:
        return "<unparseable url>"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))
