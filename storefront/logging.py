"""
Logging setup for the storefront.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

Product ids, bundle identifiers and product names reach the cart from the
browser, so anything user-controlled goes through ``sanitize_id_for_logging``
or ``sanitize_string_for_logging`` before it is interpolated into a message.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Loggers of the Supabase client stack; request-level chatter at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "postgrest", "supabase")

# \n, \r, \t are shown escaped; NUL is dropped (CWE-117)
_LOG_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def configure_logging(level: str | None = None, simple: bool | None = None) -> bool:
    """
    Attach a stdout handler to the root logger unless one is already installed.

    Args:
        level: Level name; defaults to LOG_LEVEL env or INFO
        simple: Short format without timestamps; defaults to LOG_FORMAT=simple

    Returns:
        True if a handler was installed, False if the host had configured logging
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    if simple is None:
        simple = os.environ.get("LOG_FORMAT", "").lower() == "simple"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if simple else LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return True


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _clip(value: object, max_length: int, marker: str = "") -> str:
    text = str(value).translate(_LOG_ESCAPES)
    if len(text) <= max_length:
        return text
    return text[:max_length] + marker


def sanitize_id_for_logging(id_value: str | None) -> str:
    """Escaped first 8 characters of an id, or "N/A"."""
    if not id_value:
        return "N/A"
    return _clip(id_value, 8)


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escaped free-form text cut to ``max_length`` with a trailing "...", or "N/A"."""
    if not value:
        return "N/A"
    return _clip(value, max_length, marker="...")


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
