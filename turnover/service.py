"""
Tracker service: the caller layer in front of the Sheets client.

Decides where the collection lives (Sheets when configured and reachable,
the local JSON file otherwise), applies record-level edits on top of the
whole-collection load/save, and reports every outcome as an
OperationResult instead of raising.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

from turnover import paths
from turnover.config import load_sync_settings
from turnover.errors import ConfigurationMissing, QueueFailure, TransportUnavailable
from turnover.local_store import LocalStore
from turnover.models import MILESTONE_NAMES, Company, default_milestones, next_company_id
from turnover.sheets import SheetsClient
from turnover.sheets_config import SheetsConfigStore

logger = logging.getLogger(__name__)

SOURCE_SHEETS = "sheets"
SOURCE_LOCAL = "local"

_READ_ERRORS = (OSError, ValueError)


@dataclass
class OperationResult:
    """Outcome of a service operation."""

    success: bool
    message: str = ""
    data: Any = None
    source: str = ""

    def to_dict(self) -> dict:
        """Convert to dict."""
        data = self.data
        if isinstance(data, Company):
            data = data.to_dict()
        elif isinstance(data, list):
            data = [d.to_dict() if isinstance(d, Company) else d for d in data]
        return {
            "success": self.success,
            "message": self.message,
            "data": data,
            "source": self.source,
        }


class TrackerService:
    """Company records over Sheets with local-file fallback."""

    def __init__(
        self,
        local_store: LocalStore,
        config_store: SheetsConfigStore,
        client_factory: Callable[[], SheetsClient] | None = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Args:
            local_store: JSON file used when Sheets is not in use
            config_store: Persisted Sheets connection settings
            client_factory: Builds a fresh SheetsClient (after configure/reset)
            today: Date source for created/completed dates
        """
        self.local_store = local_store
        self.config_store = config_store
        self._client_factory = client_factory or (lambda: SheetsClient(load_sync_settings()))
        self._today = today
        self.client = self._client_factory()

    # ------------------------------------------------------------------
    # Setup / configuration
    # ------------------------------------------------------------------

    def startup(self) -> OperationResult:
        """Prepare the local file and connect to Sheets if configured."""
        try:
            self.local_store.ensure_exists(paths.packaged_seed_file())
        except OSError as e:
            return OperationResult(False, f"Could not prepare local data file: {e}")

        config = self.config_store.load()
        if config is None:
            return OperationResult(True, "Using local storage", source=SOURCE_LOCAL)
        if self.client.is_ready:
            return OperationResult(True, "Connected to Google Sheets", source=SOURCE_SHEETS)
        if self.client.initialize(config.credentials, config.spreadsheet_id):
            return OperationResult(True, "Connected to Google Sheets", source=SOURCE_SHEETS)
        return OperationResult(
            False, "Google Sheets is configured but unreachable; using local storage", source=SOURCE_LOCAL
        )

    def is_sheets_configured(self) -> bool:
        return self.config_store.is_configured()

    def configure_sheets(self, credentials_content: str, spreadsheet_id: str) -> OperationResult:
        try:
            config = self.config_store.save(credentials_content, spreadsheet_id)
        except ValueError as e:
            return OperationResult(False, str(e))
        except OSError as e:
            return OperationResult(False, f"Could not store configuration: {e}")

        self.client = self._client_factory()
        if not self.client.initialize(config.credentials, config.spreadsheet_id):
            return OperationResult(
                False, "Configuration saved, but the spreadsheet could not be reached", source=SOURCE_LOCAL
            )
        return OperationResult(True, "Google Sheets configured", source=SOURCE_SHEETS)

    def reset_sheets_config(self) -> OperationResult:
        try:
            self.config_store.reset()
        except OSError as e:
            return OperationResult(False, f"Could not reset configuration: {e}")
        self.client = self._client_factory()
        return OperationResult(True, "Google Sheets configuration removed", source=SOURCE_LOCAL)

    # ------------------------------------------------------------------
    # Whole-collection load / save
    # ------------------------------------------------------------------

    def _load_local(self, message: str = "") -> OperationResult:
        try:
            companies = [Company.from_dict(d) for d in self.local_store.read()]
        except _READ_ERRORS as e:
            logger.error(f"Reading {self.local_store.path} failed: {e}")
            return OperationResult(False, f"Could not read local data: {e}", source=SOURCE_LOCAL)
        return OperationResult(True, message, data=companies, source=SOURCE_LOCAL)

    def _save_local(self, companies: list[Company], message: str = "") -> OperationResult:
        try:
            self.local_store.write([c.to_dict() for c in companies])
        except OSError as e:
            logger.error(f"Writing {self.local_store.path} failed: {e}")
            return OperationResult(False, f"Could not write local data: {e}", source=SOURCE_LOCAL)
        return OperationResult(True, message, data=companies, source=SOURCE_LOCAL)

    def load_companies(self) -> OperationResult:
        if not self.client.is_ready:
            return self._load_local()
        try:
            companies = self.client.list_companies()
        except (TransportUnavailable, ConfigurationMissing) as e:
            logger.warning(f"Sheets load failed, falling back to local file: {e}")
            return self._load_local(f"Google Sheets unavailable, showing local data: {e}")
        return OperationResult(True, data=companies, source=SOURCE_SHEETS)

    def save_companies(self, companies: list[Company]) -> OperationResult:
        if not self.client.is_ready:
            return self._save_local(companies)
        try:
            self.client.replace_all(companies)
        except (QueueFailure, ConfigurationMissing) as e:
            logger.warning(f"Sheets save failed, writing local file instead: {e}")
            return self._save_local(companies, f"Google Sheets unavailable, saved locally: {e}")
        return OperationResult(True, data=companies, source=SOURCE_SHEETS)

    def _save_edit(self, loaded: OperationResult, companies: list[Company]) -> OperationResult:
        """
        Save an edited collection back where it was loaded from.

        A collection read from the local fallback only ever goes back to the
        local file, even when the client is connected: replace_all would
        overwrite the sheet with whatever the local copy holds.
        """
        if loaded.source == SOURCE_LOCAL:
            return self._save_local(companies, loaded.message)
        return self.save_companies(companies)

    # ------------------------------------------------------------------
    # Record-level edits
    # ------------------------------------------------------------------

    def add_company(self, company: Company) -> OperationResult:
        """Append a company with the next id, today's date and a full checklist."""
        loaded = self.load_companies()
        if not loaded.success:
            return loaded
        companies: list[Company] = loaded.data

        company.id = next_company_id(companies)
        if not company.created_date:
            company.created_date = self._today().isoformat()
        if not company.milestones:
            company.milestones = default_milestones()
        companies.append(company)

        saved = self._save_edit(loaded, companies)
        if not saved.success:
            return saved
        return OperationResult(True, f"Added company {company.id}", data=company, source=saved.source)

    def update_company(self, company: Company) -> OperationResult:
        loaded = self.load_companies()
        if not loaded.success:
            return loaded
        companies: list[Company] = loaded.data

        for index, existing in enumerate(companies):
            if existing.id == company.id:
                companies[index] = company
                break
        else:
            return OperationResult(False, f"No company with id {company.id}")

        saved = self._save_edit(loaded, companies)
        if not saved.success:
            return saved
        return OperationResult(True, f"Updated company {company.id}", data=company, source=saved.source)

    def delete_company(self, company_id: int) -> OperationResult:
        loaded = self.load_companies()
        if not loaded.success:
            return loaded
        companies: list[Company] = loaded.data

        remaining = [c for c in companies if c.id != company_id]
        if len(remaining) == len(companies):
            return OperationResult(False, f"No company with id {company_id}")

        saved = self._save_edit(loaded, remaining)
        if not saved.success:
            return saved
        return OperationResult(True, f"Deleted company {company_id}", source=saved.source)

    def set_milestone(
        self,
        company_id: int,
        milestone_name: str,
        completed: bool = True,
        completed_date: str | None = None,
    ) -> OperationResult:
        """
        Mark one milestone (un)completed.

        Completing without a date stamps today; un-completing clears the date.
        """
        if milestone_name not in MILESTONE_NAMES:
            return OperationResult(False, f"Unknown milestone {milestone_name!r}")

        loaded = self.load_companies()
        if not loaded.success:
            return loaded
        company = next((c for c in loaded.data if c.id == company_id), None)
        if company is None:
            return OperationResult(False, f"No company with id {company_id}")

        milestone = company.milestone(milestone_name)
        if milestone is None:
            # Records loaded from an older local file may lack some names
            company.milestones = _with_missing_milestones(company.milestones)
            milestone = company.milestone(milestone_name)

        milestone.completed = completed
        if completed:
            milestone.completed_date = completed_date or self._today().isoformat()
        else:
            milestone.completed_date = ""

        saved = self._save_edit(loaded, loaded.data)
        if not saved.success:
            return saved
        state = "completed" if completed else "reopened"
        return OperationResult(True, f"{milestone_name} {state}", data=company, source=saved.source)

    # ------------------------------------------------------------------
    # Cache / maintenance
    # ------------------------------------------------------------------

    def force_refresh(self) -> OperationResult:
        self.client.cache.invalidate()
        return self.load_companies()

    def cache_status(self) -> OperationResult:
        return OperationResult(True, data=self.client.cache.status().to_dict())

    def clear_cache(self) -> OperationResult:
        self.client.cache.invalidate()
        return OperationResult(True, "Cache cleared")

    def clear_all_data(self) -> OperationResult:
        """Erase the active backend: the whole sheet, or the local file."""
        if not self.client.is_ready:
            return self._save_local([], "Local data cleared")
        try:
            self.client.clear_all()
        except (TransportUnavailable, ConfigurationMissing) as e:
            return OperationResult(False, f"Could not clear spreadsheet: {e}", source=SOURCE_SHEETS)
        self.client.cache.invalidate()
        return OperationResult(True, "All data cleared from spreadsheet", source=SOURCE_SHEETS)


def _with_missing_milestones(milestones):
    by_name = {m.name: m for m in milestones}
    return [by_name.get(m.name, m) for m in default_milestones()]


def build_service() -> TrackerService:
    """Service wired to the app's default file locations."""
    return TrackerService(
        local_store=LocalStore(paths.companies_file()),
        config_store=SheetsConfigStore(paths.config_dir()),
    )
