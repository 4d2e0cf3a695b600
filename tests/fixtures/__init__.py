"""
Test fixtures for deterministic testing.

This module provides:
- FakeTabularStore: in-memory cell grid recording every transport call
- FakeClock: manually advanced clock whose sleep() moves time forward
- sample_company: a populated company record
- SERVICE_ACCOUNT: a service-account key document
"""

from .fake_store import FakeClock, FakeTabularStore, parse_range
from .samples import SERVICE_ACCOUNT, sample_company

__all__ = ["SERVICE_ACCOUNT", "FakeClock", "FakeTabularStore", "parse_range", "sample_company"]
