"""Application settings constants."""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if raw.isdigit():
        return int(raw)
    return default


# YouTube Data API v3 key; unset or placeholder values disable live search.
YOUTUBE_API_KEY = os.environ.get("YOUTUBE_API_KEY", "").strip()

# Upper bound accepted by search.list is 50.
SEARCH_MAX_RESULTS = min(50, max(1, _env_int("CHARTVIEW_SEARCH_MAX_RESULTS", 25)))

# Sent as Referer so browser-restricted API keys are accepted.
SEARCH_REFERER = os.environ.get("CHARTVIEW_REFERER", "").strip() or None

CACHE_ENABLED = _env_flag("CHARTVIEW_CACHE_ENABLED", True)
DB_PATH = Path(
    os.environ.get("CHARTVIEW_DB_PATH", PROJECT_ROOT / "data" / "chartview.sqlite3")
).resolve()

LOG_LEVEL = os.environ.get("CHARTVIEW_LOG_LEVEL", "INFO").strip().upper() or "INFO"
LOG_DIR = os.environ.get("CHARTVIEW_LOG_DIR", "").strip() or None
