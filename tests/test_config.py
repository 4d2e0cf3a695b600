"""
Tests for sync settings loading and app paths.
"""

import pytest
import yaml

from turnover import paths
from turnover.config import SyncSettings, load_sync_settings
from turnover.service import build_service


class TestLoadSyncSettings:
    """Tests for load_sync_settings()."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test that an absent file yields default settings."""
        settings = load_sync_settings(tmp_path / "nope.yaml")
        assert settings == SyncSettings()
        assert settings.min_request_interval == 2.0
        assert settings.cache_ttl == 30.0
        assert settings.max_rows == 1000

    def test_shipped_file_loads(self):
        """Test that the repository's config/sync.yaml parses."""
        assert isinstance(load_sync_settings(), SyncSettings)

    def test_overrides(self, tmp_path):
        """Test that valid keys replace the defaults."""
        path = tmp_path / "sync.yaml"
        path.write_text(yaml.safe_dump({"sync": {"min_request_interval": 1, "cache_ttl": 5.5, "max_rows": 200}}))

        settings = load_sync_settings(path)

        assert settings == SyncSettings(min_request_interval=1.0, cache_ttl=5.5, max_rows=200)

    @pytest.mark.parametrize(
        "section",
        [
            {"min_request_interval": -1},
            {"min_request_interval": "fast"},
            {"cache_ttl": True},
            {"max_rows": 1},
            {"max_rows": 10.5},
        ],
    )
    def test_invalid_values_skipped(self, tmp_path, section, caplog):
        """Test that invalid values are warned about and ignored."""
        path = tmp_path / "sync.yaml"
        path.write_text(yaml.safe_dump({"sync": section}))

        assert load_sync_settings(path) == SyncSettings()
        assert "Invalid" in caplog.text

    def test_missing_sync_key(self, tmp_path, caplog):
        """Test that a file without a sync mapping falls back to defaults."""
        path = tmp_path / "sync.yaml"
        path.write_text("other: 1\n")

        assert load_sync_settings(path) == SyncSettings()
        assert "no 'sync' mapping" in caplog.text

    def test_invalid_yaml_gives_defaults(self, tmp_path, caplog):
        """Test that broken YAML is logged and does not stop startup."""
        path = tmp_path / "sync.yaml"
        path.write_text("sync: [unclosed\n")

        assert load_sync_settings(path) == SyncSettings()
        assert "Could not load" in caplog.text

    def test_unreadable_path_gives_defaults(self, tmp_path, caplog):
        """Test that a path that cannot be opened as a file falls back too."""
        path = tmp_path / "sync.yaml"
        path.mkdir()

        assert load_sync_settings(path) == SyncSettings()
        assert "Could not load" in caplog.text

    def test_build_service_with_broken_settings(self, tmp_path, monkeypatch):
        """Test that the default service still builds over a malformed settings file."""
        path = tmp_path / "sync.yaml"
        path.write_text("sync: [unclosed\n")
        monkeypatch.setattr(paths, "sync_settings_file", lambda: path)

        service = build_service()

        assert service.client.settings == SyncSettings()


class TestPaths:
    """Tests for app path resolution."""

    def test_home_from_env(self, isolated_home):
        """Test that TURNOVER_HOME relocates data and config."""
        assert paths.app_home() == isolated_home.resolve()
        assert paths.companies_file() == isolated_home.resolve() / "data" / "companies.json"
        assert paths.config_dir().is_dir()

    def test_data_file_override(self, tmp_path, monkeypatch):
        """Test the explicit data file override."""
        target = tmp_path / "elsewhere.json"
        monkeypatch.setenv("TURNOVER_DATA_FILE", str(target))
        assert paths.companies_file() == target.resolve()
