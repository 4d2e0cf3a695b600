from __future__ import annotations

import os
from pathlib import Path

APP_ENV_HOME = "TURNOVER_HOME"
APP_ENV_DATA_FILE = "TURNOVER_DATA_FILE"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains turnover/, cli/, config/, tests/.
    """
    return Path(__file__).parent.parent.resolve()


def app_home() -> Path:
    """
    User-writable home for the tracker.
    Override with TURNOVER_HOME.
    """
    if os.environ.get(APP_ENV_HOME):
        return Path(os.environ[APP_ENV_HOME]).expanduser().resolve()
    return (Path.home() / ".turnover_tracker").resolve()


def config_dir() -> Path:
    d = app_home() / "config"
    d.mkdir(parents=True, exist_ok=True)
    return d


def data_dir() -> Path:
    d = app_home() / "data"
    d.mkdir(parents=True, exist_ok=True)
    return d


def companies_file() -> Path:
    """
    Local JSON file holding the company collection.

    Resolution order:
    1. TURNOVER_DATA_FILE env var (explicit override)
    2. <app home>/data/companies.json (default)
    """
    if os.environ.get(APP_ENV_DATA_FILE):
        return Path(os.environ[APP_ENV_DATA_FILE]).expanduser().resolve()
    return data_dir() / "companies.json"


def packaged_seed_file() -> Path:
    """Seed collection copied into the data dir on first run, if shipped."""
    return project_root() / "data" / "companies.json"


def sync_settings_file() -> Path:
    return project_root() / "config" / "sync.yaml"
