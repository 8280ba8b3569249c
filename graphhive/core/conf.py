"""
Hadoop-style job configuration.

Values are always strings. List-valued keys (tmpjars, tmpfiles, ...) are
stored comma separated, the same way the Hadoop job client reads them.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from .errors import ConfigurationError
from .reflection import class_path, load_class

RESOURCE_PATH_KEY = "graphhive.resource.path"


class Configuration:
    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, str] = {}
        if values:
            self.update(values)

    # ------------------------------------------------------------------
    # Plain key/value access
    # ------------------------------------------------------------------
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if not key:
            raise ConfigurationError("Configuration key must be non-empty")
        if value is None:
            raise ConfigurationError(f"Configuration value for {key!r} must not be None")
        self._values[key] = str(value)

    def unset(self, key: str) -> None:
        self._values.pop(key, None)

    def update(self, values: Mapping[str, Any]) -> None:
        for k, v in values.items():
            self.set(str(k), v)

    def get_int(self, key: str, default: int = 0) -> int:
        raw = self.get(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw.strip())
        except ValueError as e:
            raise ConfigurationError(f"Configuration key {key!r} is not an integer: {raw!r}") from e

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def to_dict(self) -> Dict[str, str]:
        return {k: self._values[k] for k in sorted(self._values)}

    def copy(self) -> "Configuration":
        return Configuration(self._values)

    # ------------------------------------------------------------------
    # String collections
    # ------------------------------------------------------------------
    def get_strings(self, key: str) -> List[str]:
        raw = self.get(key)
        if not raw:
            return []
        return [s for s in raw.split(",") if s]

    # Hadoop name
    get_string_collection = get_strings

    def set_strings(self, key: str, *values: str) -> None:
        self.set(key, ",".join(values))

    # ------------------------------------------------------------------
    # Classes
    # ------------------------------------------------------------------
    def get_class(self, key: str, default: Optional[type] = None) -> Optional[type]:
        raw = self.get(key)
        if raw is None or not raw.strip():
            return default
        return load_class(raw)

    def set_class(self, key: str, klass: type) -> None:
        self.set(key, class_path(klass))

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------
    def resource_dirs(self) -> List[Path]:
        dirs = [Path(p) for p in (self.get(RESOURCE_PATH_KEY) or "").split(os.pathsep) if p.strip()]
        dirs.append(Path.cwd())
        return dirs

    def get_resource(self, name: str) -> Optional[Path]:
        """First file called `name` on the resource path, or None."""
        for d in self.resource_dirs():
            candidate = d / name
            if candidate.is_file():
                return candidate.resolve()
        return None

    def __repr__(self) -> str:
        return f"Configuration({len(self._values)} keys)"


# ----------------------------------------------------------------------
# Typed options
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class StrConfOption:
    key: str
    default: Optional[str] = None
    description: str = ""

    def get(self, conf: Configuration) -> Optional[str]:
        return conf.get(self.key, self.default)

    def set(self, conf: Configuration, value: str) -> None:
        conf.set(self.key, value)

    def is_default_value(self, conf: Configuration) -> bool:
        return self.key not in conf


@dataclass(frozen=True)
class IntConfOption:
    key: str
    default: int = 0
    description: str = ""

    def get(self, conf: Configuration) -> int:
        return conf.get_int(self.key, self.default)

    def set(self, conf: Configuration, value: int) -> None:
        conf.set(self.key, int(value))


@dataclass(frozen=True)
class ClassConfOption:
    key: str
    base_class: Optional[type] = None
    default: Optional[type] = None
    description: str = ""

    def get(self, conf: Configuration) -> Optional[type]:
        klass = conf.get_class(self.key, self.default)
        if klass is not None and self.base_class is not None and not issubclass(klass, self.base_class):
            raise ConfigurationError(
                f"{self.key} = {klass.__name__} is not a subclass of {self.base_class.__name__}"
            )
        return klass

    def set(self, conf: Configuration, klass: type) -> None:
        if self.base_class is not None and not issubclass(klass, self.base_class):
            raise ConfigurationError(
                f"Cannot set {self.key}: {klass.__name__} is not a subclass of {self.base_class.__name__}"
            )
        conf.set_class(self.key, klass)


def options_table(options: Iterable[Any]) -> List[Dict[str, Any]]:
    """Key/default/description rows, used by the CLI --list-options output."""
    rows: List[Dict[str, Any]] = []
    for opt in options:
        default = opt.default
        if isinstance(default, type):
            default = class_path(default)
        rows.append({"key": opt.key, "default": default, "description": opt.description})
    return rows
