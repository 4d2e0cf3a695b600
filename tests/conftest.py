"""
Test configuration - ensures repo root is in sys.path + determinism guards.

This allows tests to import from top-level packages (turnover, cli).
Enforces determinism by isolating the app home per test and blocking any
attempt to build a live Google Sheets service.
"""

import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import turnover.*, cli.*, tests.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tests.fixtures import FakeClock, FakeTabularStore  # noqa: E402
from turnover.cache import ReadCache  # noqa: E402
from turnover.sheets import MinIntervalRateLimiter, SheetsClient  # noqa: E402


# =============================================================================
# DETERMINISM GUARDS
# =============================================================================


def _live_build(*args, **kwargs):
    raise RuntimeError(
        "DETERMINISM VIOLATION: test attempted to build a live Google Sheets service.\n"
        "Use FakeTabularStore from tests/fixtures, or patch "
        "turnover.sheets.transport.build with a MagicMock."
    )


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the app home at a temp dir and block live Sheets access."""
    home = tmp_path / "home"
    monkeypatch.setenv("TURNOVER_HOME", str(home))
    monkeypatch.delenv("TURNOVER_DATA_FILE", raising=False)
    monkeypatch.setattr("turnover.sheets.transport.build", _live_build)
    return home


# =============================================================================
# SHEETS FIXTURES
# =============================================================================


def run_inline(target):
    """Coalescer spawn that drains on the calling thread."""
    target()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_store(clock):
    return FakeTabularStore(clock=clock)


@pytest.fixture
def make_client(clock, fake_store):
    """Factory for clients wired to the fake store and clock."""

    def _make(spawn=run_inline, min_interval=2.0, ttl=30.0, store=None):
        target = store or fake_store
        return SheetsClient(
            rate_limiter=MinIntervalRateLimiter(min_interval, clock=clock, sleep=clock.sleep),
            cache=ReadCache(ttl, clock=clock),
            store_factory=lambda credentials, spreadsheet_id: target,
            coalescer_spawn=spawn,
        )

    return _make


@pytest.fixture
def client(make_client):
    """Initialized client on the fake store."""
    c = make_client()
    assert c.initialize({"type": "service_account"}, "sheet-123")
    return c
