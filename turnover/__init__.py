# Turnover Tracker - Core Library
"""
Exports for the CLI and other consumers.
"""

from .errors import ConfigurationMissing, QueueFailure, TrackerError, TransportUnavailable
from .models import MILESTONE_NAMES, Company, Milestone, default_milestones
from .service import OperationResult, TrackerService, build_service

__all__ = [
    "MILESTONE_NAMES",
    "Company",
    "Milestone",
    "default_milestones",
    "TrackerError",
    "TransportUnavailable",
    "QueueFailure",
    "ConfigurationMissing",
    "OperationResult",
    "TrackerService",
    "build_service",
]
