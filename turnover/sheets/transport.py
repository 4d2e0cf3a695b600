"""
Range-addressed tabular store transport.

TabularStore is the capability the sync client needs; GoogleSheetsStore
implements it on the Sheets v4 values API with a service account.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import google.auth.exceptions
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from turnover.config import SHEETS_SCOPES
from turnover.errors import TransportUnavailable

logger = logging.getLogger(__name__)

# Errors a Sheets call can fail with when the store is unreachable or rejects us
_TRANSPORT_ERRORS = (HttpError, google.auth.exceptions.GoogleAuthError, OSError)


class TabularStore(ABC):
    """Abstract cell-grid store addressed by A1 ranges."""

    @abstractmethod
    def read_range(self, range_spec: str) -> list[list[Any]]:
        """Rows inside the range; absent trailing rows are not returned."""

    @abstractmethod
    def write_range(self, range_spec: str, rows: list[list[Any]]) -> None:
        """Overwrite the range with rows, row-major, left-aligned."""

    @abstractmethod
    def clear_range(self, range_spec: str) -> None:
        """Blank every cell in the range, keeping formatting."""

    @abstractmethod
    def describe_store(self) -> dict:
        """Store metadata; used once to confirm reachability."""


class GoogleSheetsStore(TabularStore):
    """TabularStore backed by one Google Sheets spreadsheet."""

    def __init__(self, service: Any, spreadsheet_id: str):
        """
        Args:
            service: Sheets v4 discovery resource (googleapiclient)
            spreadsheet_id: Target spreadsheet
        """
        self.service = service
        self.spreadsheet_id = spreadsheet_id

    @classmethod
    def from_service_account_info(cls, info: dict, spreadsheet_id: str) -> "GoogleSheetsStore":
        """Build a store from a parsed service-account key document."""
        try:
            creds = service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
        except (ValueError, KeyError) as e:
            raise TransportUnavailable(f"Invalid service account credentials: {e}") from e
        try:
            service = build("sheets", "v4", credentials=creds, cache_discovery=False)
        except _TRANSPORT_ERRORS as e:
            raise TransportUnavailable(f"Could not build Sheets service: {e}") from e
        return cls(service, spreadsheet_id)

    def _values(self):
        return self.service.spreadsheets().values()

    def _execute(self, what: str, request) -> dict:
        try:
            return request.execute() or {}
        except _TRANSPORT_ERRORS as e:
            logger.warning(f"Sheets {what} failed: {e}")
            raise TransportUnavailable(f"Sheets {what} failed: {e}") from e

    def read_range(self, range_spec: str) -> list[list[Any]]:
        response = self._execute(
            f"read {range_spec}",
            self._values().get(spreadsheetId=self.spreadsheet_id, range=range_spec),
        )
        return response.get("values", [])

    def write_range(self, range_spec: str, rows: list[list[Any]]) -> None:
        self._execute(
            f"write {range_spec}",
            self._values().update(
                spreadsheetId=self.spreadsheet_id,
                range=range_spec,
                valueInputOption="RAW",
                body={"values": rows},
            ),
        )

    def clear_range(self, range_spec: str) -> None:
        self._execute(
            f"clear {range_spec}",
            self._values().clear(spreadsheetId=self.spreadsheet_id, range=range_spec, body={}),
        )

    def describe_store(self) -> dict:
        return self._execute(
            "describe",
            self.service.spreadsheets().get(spreadsheetId=self.spreadsheet_id),
        )
