#!/usr/bin/env python3
"""
Turnover Tracker - Sheets Configuration Store

Persists what the Sheets client needs to connect:
- the service-account key document (service_account.json)
- the target spreadsheet id and when it was configured (sheets.json)

Both live in the app's config directory. "Not configured" is a normal
state, reported by is_configured()/load() rather than raised.
"""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from turnover import paths

logger = logging.getLogger(__name__)

CREDENTIALS_FILENAME = "service_account.json"
SETTINGS_FILENAME = "sheets.json"

_REQUIRED_KEYS = ("type", "client_email", "private_key")


@dataclass
class SheetsConfig:
    """Stored connection settings."""

    credentials: dict
    spreadsheet_id: str
    configured_at: str = ""


def parse_credentials(credentials_content: str) -> dict:
    """
    Parse and sanity-check a service-account key document.

    Raises:
        ValueError if the content is not JSON or not a service-account key.
    """
    try:
        info = json.loads(credentials_content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Credentials are not valid JSON: {e}") from e
    if not isinstance(info, dict):
        raise ValueError("Credentials must be a JSON object")
    missing = [key for key in _REQUIRED_KEYS if not info.get(key)]
    if missing:
        raise ValueError(f"Credentials missing fields: {', '.join(missing)}")
    if info["type"] != "service_account":
        raise ValueError(f"Expected a service_account key, got type {info['type']!r}")
    return info


class SheetsConfigStore:
    """File-backed Sheets configuration."""

    def __init__(self, config_dir: str | Path | None = None):
        self.config_dir = Path(config_dir) if config_dir else paths.config_dir()
        self.credentials_file = self.config_dir / CREDENTIALS_FILENAME
        self.settings_file = self.config_dir / SETTINGS_FILENAME

    def is_configured(self) -> bool:
        return self.load() is not None

    def load(self) -> SheetsConfig | None:
        """Stored configuration, or None when absent or unreadable."""
        if not self.credentials_file.exists() or not self.settings_file.exists():
            return None
        try:
            credentials = json.loads(self.credentials_file.read_text())
            settings = json.loads(self.settings_file.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable Sheets config in {self.config_dir}: {e}")
            return None
        spreadsheet_id = settings.get("spreadsheet_id") if isinstance(settings, dict) else None
        if not spreadsheet_id or not isinstance(credentials, dict):
            return None
        return SheetsConfig(
            credentials=credentials,
            spreadsheet_id=spreadsheet_id,
            configured_at=settings.get("configured_at", ""),
        )

    def save(self, credentials_content: str, spreadsheet_id: str) -> SheetsConfig:
        """
        Validate and persist a new configuration.

        Raises:
            ValueError if the credentials or spreadsheet id are invalid.
        """
        spreadsheet_id = (spreadsheet_id or "").strip()
        if not spreadsheet_id:
            raise ValueError("Spreadsheet id is required")
        credentials = parse_credentials(credentials_content)

        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = SheetsConfig(
            credentials=credentials,
            spreadsheet_id=spreadsheet_id,
            configured_at=datetime.now(UTC).isoformat(),
        )
        self.credentials_file.write_text(json.dumps(credentials, indent=2))
        self.credentials_file.chmod(0o600)
        self.settings_file.write_text(
            json.dumps(
                {"spreadsheet_id": spreadsheet_id, "configured_at": config.configured_at},
                indent=2,
            )
        )
        logger.info(f"Sheets configured for spreadsheet {spreadsheet_id}")
        return config

    def reset(self) -> None:
        """Forget the stored configuration."""
        for path in (self.credentials_file, self.settings_file):
            path.unlink(missing_ok=True)
        logger.info("Sheets configuration reset")
