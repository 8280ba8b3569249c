from __future__ import annotations


class GraphHiveError(Exception):
    """Base class for every error raised by graphhive."""


class ConfigurationError(GraphHiveError, ValueError):
    """A required configuration key, column or value is missing or malformed."""


class MetastoreError(GraphHiveError):
    """The table catalog could not answer a lookup."""


class ProfileInitError(GraphHiveError, RuntimeError):
    """An input/output profile could not be registered."""
