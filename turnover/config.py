"""
Centralized configuration for the turnover tracker.

Module constants are overridable via environment variables where marked.
Sync tuning can also be set in config/sync.yaml:

    sync:
      min_request_interval: 2.0   # seconds between Sheets API calls
      cache_ttl: 30               # seconds a list() result stays cached
      max_rows: 1000              # last sheet row addressed by the data range

Usage:
    from turnover.config import load_sync_settings

    settings = load_sync_settings()
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from turnover import paths

logger = logging.getLogger(__name__)

# ============================================================
# Sheets API pacing / caching
# ============================================================

MIN_REQUEST_INTERVAL: float = float(os.environ.get("TURNOVER_MIN_REQUEST_INTERVAL", "2.0"))
"""Minimum seconds between the starts of two Sheets API calls."""

CACHE_TTL: float = float(os.environ.get("TURNOVER_CACHE_TTL", "30"))
"""Seconds a listed collection is served from cache."""

MAX_ROWS: int = 1000
"""Last sheet row covered by the data range (row 1 is the header)."""

SHEETS_SCOPES: list[str] = ["https://www.googleapis.com/auth/spreadsheets"]

# ============================================================
# Logging
# ============================================================

LOG_LEVEL: str = os.environ.get("TURNOVER_LOG_LEVEL", "INFO")


@dataclass
class SyncSettings:
    """Tuning for the Sheets sync layer."""

    min_request_interval: float = MIN_REQUEST_INTERVAL
    cache_ttl: float = CACHE_TTL
    max_rows: int = MAX_ROWS


def load_sync_settings(path: str | Path | None = None) -> SyncSettings:
    """
    Load sync settings from YAML, falling back to defaults.

    A missing file yields the defaults. An unreadable or malformed file is
    logged and yields the defaults. Invalid values are logged and skipped.
    """
    config_path = Path(path) if path else paths.sync_settings_file()
    settings = SyncSettings()
    if not config_path.exists():
        return settings

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load {config_path}, using defaults: {e}")
        return settings

    section = data.get("sync") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        logger.warning(f"{config_path} has no 'sync' mapping, using defaults")
        return settings

    for name in ("min_request_interval", "cache_ttl"):
        if name not in section:
            continue
        value = section[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            logger.warning(f"Invalid {name} in {config_path}: {value!r}")
            continue
        setattr(settings, name, float(value))

    if "max_rows" in section:
        value = section["max_rows"]
        if isinstance(value, bool) or not isinstance(value, int) or value < 2:
            logger.warning(f"Invalid max_rows in {config_path}: {value!r}")
        else:
            settings.max_rows = value

    return settings
