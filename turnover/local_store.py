"""
Local JSON file holding the company collection.

Used when Sheets is not configured, and as the fallback when it is
unreachable.
"""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStore:
    """Whole-collection read/overwrite of one JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def ensure_exists(self, seed_path: str | Path | None = None) -> None:
        """
        Create the file on first run.

        Copies seed_path when it exists, otherwise writes an empty list.
        """
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if seed_path is not None and Path(seed_path).exists():
            shutil.copyfile(seed_path, self.path)
            logger.info(f"Seeded {self.path} from {seed_path}")
        else:
            self.path.write_text("[]", encoding="utf-8")
            logger.info(f"Created empty {self.path}")

    def read(self) -> list[dict]:
        """The stored collection, or [] when the file does not exist."""
        if not self.path.exists():
            return []
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{self.path} must contain a JSON list")
        return data

    def write(self, companies: list[dict]) -> None:
        """Overwrite the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".companies-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(companies, f, indent=2)
            os.replace(tmp, self.path)
        except OSError:
            Path(tmp).unlink(missing_ok=True)
            raise
