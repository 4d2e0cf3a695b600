"""
Observability helpers.

Provides:
- configure_logging: root logger setup (JSON or human-readable)
- JSONFormatter / HumanFormatter
- LEVELS: accepted log level names
"""

from .logging import LEVELS, HumanFormatter, JSONFormatter, configure_logging

__all__ = [
    "LEVELS",
    "configure_logging",
    "HumanFormatter",
    "JSONFormatter",
]
