"""campus_graph runtime configuration helpers."""

from __future__ import annotations

import logging
import os

DEFAULT_WEIGHT = 1
LABEL_PREFIX = "V"
COMPONENT_LABEL_PREFIX = "C"

_PROGRESS_ENV = "CAMPUS_GRAPH_PROGRESS"
_LOG_LEVEL_ENV = "CAMPUS_GRAPH_LOG_LEVEL"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"", "0", "false", "no"}:
        return False
    if raw in {"1", "true", "yes"}:
        return True
    return default


def progress_enabled() -> bool:
    """Whether long per-source loops should draw a tqdm bar."""
    return _env_bool(_PROGRESS_ENV)


def log_level() -> int:
    name = (os.getenv(_LOG_LEVEL_ENV) or "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
