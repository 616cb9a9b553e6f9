"""JSON file storage for the last scan's results."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from cleanser.models.scan_result import ScanResults
from cleanser.utils import xdg_cache_home

log = logging.getLogger(__name__)

SCAN_CACHE_FILE = xdg_cache_home() / "cleanser" / "last-scan.json"

# Cached results older than this are ignored (seconds).
DEFAULT_MAX_AGE = 3600


def _ensure_cache_dir() -> None:
    """Create the cache directory if it doesn't exist."""
    SCAN_CACHE_FILE.parent.mkdir(parents=True, exist_ok=True)


def _load_raw() -> dict[str, Any] | None:
    """Load the cache file, returning None when missing or unreadable."""
    if not SCAN_CACHE_FILE.exists():
        return None
    try:
        with open(SCAN_CACHE_FILE) as f:
            data = json.load(f)
        int(data["timestamp"])
    except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError):
        log.warning("Ignoring unreadable scan cache: %s", SCAN_CACHE_FILE)
        return None
    if not isinstance(data.get("results"), dict):
        log.warning("Ignoring malformed scan cache: %s", SCAN_CACHE_FILE)
        return None
    return data


def save_scan_results(results: ScanResults) -> None:
    """Write *results* to disk together with the current time."""
    payload = {"timestamp": int(time.time()), "results": results.to_dict()}
    try:
        _ensure_cache_dir()
        with open(SCAN_CACHE_FILE, "w") as f:
            json.dump(payload, f, indent=2)
    except OSError:
        log.exception("Failed to save scan cache: %s", SCAN_CACHE_FILE)


def get_cache_age() -> int | None:
    """Age of the cached scan in seconds, or None if there is none."""
    data = _load_raw()
    if data is None:
        return None
    return max(0, int(time.time()) - int(data["timestamp"]))


def load_scan_results(max_age: int | None = None) -> ScanResults | None:
    """Return cached results if they are no older than *max_age* seconds."""
    data = _load_raw()
    if data is None:
        return None

    limit = DEFAULT_MAX_AGE if max_age is None else max_age
    age = max(0, int(time.time()) - int(data["timestamp"]))
    if age > limit:
        log.info("Scan cache is stale (%d s old, limit %d s)", age, limit)
        return None

    try:
        return ScanResults.from_dict(data["results"])
    except (AttributeError, KeyError, TypeError, ValueError):
        log.warning("Ignoring malformed scan cache: %s", SCAN_CACHE_FILE)
        return None


def clear_cache() -> bool:
    """Delete the cache file. Returns True if a file was removed."""
    try:
        SCAN_CACHE_FILE.unlink()
    except FileNotFoundError:
        return False
    log.info("Removed scan cache: %s", SCAN_CACHE_FILE)
    return True
