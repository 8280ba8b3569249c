from .conf import ClassConfOption, Configuration, IntConfOption, StrConfOption
from .errors import ConfigurationError, GraphHiveError, MetastoreError, ProfileInitError

__all__ = [
    "ClassConfOption",
    "Configuration",
    "IntConfOption",
    "StrConfOption",
    "ConfigurationError",
    "GraphHiveError",
    "MetastoreError",
    "ProfileInitError",
]
