"""Exceptions raised by surveysync.

Missing or unexpected survey markup never raises; these cover
configuration and I/O problems only.
"""


class SurveySyncError(Exception):
    """Base class for surveysync errors."""


class MarkersFileError(SurveySyncError):
    """A markers YAML file could not be read or is not a mapping."""
