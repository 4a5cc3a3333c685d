"""In-memory cache for app settings."""

from __future__ import annotations

import os
import threading
from typing import Any

from utils.file_utils import load_json
from utils.log_utils import tprint

DEFAULT_SETTINGS_PATH = "config/app_settings.json"

_lock = threading.RLock()
_settings_cache: dict[str, Any] = {}
_loaded = False


def settings_path() -> str:
    return os.getenv("RING_SETTINGS_PATH", DEFAULT_SETTINGS_PATH)


def refresh_settings() -> dict[str, Any]:
    """Reload settings from disk and replace the cache."""
    global _loaded
    data = load_json(settings_path())
    if not isinstance(data, dict):
        data = {}
    with _lock:
        _settings_cache.clear()
        _settings_cache.update(data)
        _loaded = True
        return dict(_settings_cache)


def get_settings() -> dict[str, Any]:
    """Return a copy of the cached settings."""
    with _lock:
        if not _loaded:
            refresh_settings()
        return dict(_settings_cache)


def override_settings(values: dict[str, Any]) -> None:
    """Merge values into the cache without touching the file on disk."""
    global _loaded
    with _lock:
        if not _loaded:
            refresh_settings()
        _settings_cache.update(values)
        _loaded = True


def get_float(key: str, default: float) -> float:
    raw = get_settings().get(key, default)
    try:
        return float(raw)
    except (TypeError, ValueError):
        tprint(f"[SETTINGS][WARN] {key}={raw!r} is not numeric; using {default}")
        return default


def get_str(key: str, default: str) -> str:
    raw = get_settings().get(key)
    if raw is None:
        return default
    return str(raw).strip() or default


def is_deep_logging() -> bool:
    """Return True when log_level requests deep tracing."""
    level = str(get_settings().get("log_level", "")).upper()
    return level in {"DEEP"}


def deep_log(message: str) -> None:
    """Emit a [DEEP] trace line only when deep logging is enabled."""
    if is_deep_logging():
        tprint(message)
