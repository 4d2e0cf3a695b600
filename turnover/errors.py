"""
Error taxonomy for the sync layer.

Malformed cells are not represented here: the row codec recovers them
locally and decodes to defaults.
"""


class TrackerError(Exception):
    """Base class for tracker errors."""


class TransportUnavailable(TrackerError):
    """A tabular store call failed or the store could not be reached."""


class QueueFailure(TrackerError):
    """The coalesced write failed; raised to every caller in the drain cycle."""


class ConfigurationMissing(TrackerError):
    """Credentials or spreadsheet id were not provided."""
