"""
Tests for the local JSON company file.
"""

import json

import pytest

from turnover.local_store import LocalStore


class TestLocalStore:
    """Tests for read/write/ensure_exists."""

    def test_read_missing_file(self, tmp_path):
        """Test that a missing file reads as an empty collection."""
        assert LocalStore(tmp_path / "companies.json").read() == []

    def test_write_then_read(self, tmp_path):
        """Test overwrite and read back."""
        store = LocalStore(tmp_path / "data" / "companies.json")
        store.write([{"id": 1, "address": "12 Elm St"}])
        store.write([{"id": 2, "address": "4 Oak Ave"}])

        assert store.read() == [{"id": 2, "address": "4 Oak Ave"}]
        assert not list(store.path.parent.glob(".companies-*"))

    def test_written_file_is_pretty_json(self, tmp_path):
        """Test that the file stays human-editable."""
        store = LocalStore(tmp_path / "companies.json")
        store.write([{"id": 1}])
        assert store.path.read_text() == json.dumps([{"id": 1}], indent=2)

    def test_non_list_file_rejected(self, tmp_path):
        """Test that a file holding something other than a list is an error."""
        path = tmp_path / "companies.json"
        path.write_text('{"id": 1}')
        with pytest.raises(ValueError):
            LocalStore(path).read()

    def test_ensure_exists_creates_empty(self, tmp_path):
        """Test first-run creation without a seed."""
        store = LocalStore(tmp_path / "data" / "companies.json")
        store.ensure_exists(tmp_path / "no-seed.json")
        assert store.path.read_text() == "[]"

    def test_ensure_exists_copies_seed(self, tmp_path):
        """Test first-run creation from a packaged seed file."""
        seed = tmp_path / "seed.json"
        seed.write_text('[{"id": 7}]')
        store = LocalStore(tmp_path / "data" / "companies.json")

        store.ensure_exists(seed)

        assert store.read() == [{"id": 7}]

    def test_ensure_exists_keeps_existing(self, tmp_path):
        """Test that an existing file is never overwritten."""
        store = LocalStore(tmp_path / "companies.json")
        store.write([{"id": 3}])
        store.ensure_exists()
        assert store.read() == [{"id": 3}]
