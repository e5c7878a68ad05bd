"""Runtime settings for the Darwin CLI.

The scoring engine itself is configured only through its explicit arguments;
these settings cover the command-line entry point.

Environment Variables:
    DARWIN_DEFAULT_STAGE: Stage key used when --stage is omitted (default: "seed")
    DARWIN_LOG_LEVEL: Logging level name for the CLI (default: "WARNING")
"""

from __future__ import annotations

import logging
import os

DARWIN_DEFAULT_STAGE_ENV = "DARWIN_DEFAULT_STAGE"
DARWIN_LOG_LEVEL_ENV = "DARWIN_LOG_LEVEL"

DEFAULT_STAGE = "seed"
DEFAULT_LOG_LEVEL = "WARNING"


def _get_env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default).strip()


def get_default_stage() -> str:
    """Return the stage key the CLI falls back to."""
    return _get_env_str(DARWIN_DEFAULT_STAGE_ENV) or DEFAULT_STAGE


def get_log_level() -> int:
    """Return the CLI logging level; unknown names fall back to WARNING."""
    name = _get_env_str(DARWIN_LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.WARNING
