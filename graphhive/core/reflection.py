from __future__ import annotations

import importlib
import os
from typing import Any, List, Optional, Type

from .errors import ConfigurationError

# Comma separated module prefixes classes may be loaded from; "*" allows any module.
CLASS_PREFIXES_ENV = "GRAPHHIVE_CLASS_PREFIXES"
DEFAULT_CLASS_PREFIXES = "graphhive"


def class_path(klass: type) -> str:
    """Dotted path that load_class() understands."""
    return f"{klass.__module__}.{klass.__qualname__}"


def allowed_prefixes() -> List[str]:
    raw = os.getenv(CLASS_PREFIXES_ENV) or DEFAULT_CLASS_PREFIXES
    return [p.strip().rstrip(".") for p in raw.split(",") if p.strip()]


def is_allowed_module(module_name: str, prefixes: Optional[List[str]] = None) -> bool:
    """Prefixes match whole dotted segments: "graphhive" allows "graphhive.input", not "graphhive_x"."""
    for p in prefixes if prefixes is not None else allowed_prefixes():
        if p == "*" or module_name == p or module_name.startswith(p + "."):
            return True
    return False


def load_class(path: str) -> type:
    """
    Load a class from "pkg.module.ClassName" or "pkg.module:ClassName".

    The module must sit under one of the allowed prefixes
    ($GRAPHHIVE_CLASS_PREFIXES); it is not imported otherwise.
    """
    raw = (path or "").strip()
    if not raw:
        raise ConfigurationError("Empty class path")

    if ":" in raw:
        module_name, _, attr = raw.partition(":")
    else:
        module_name, _, attr = raw.rpartition(".")

    if not module_name or not attr:
        raise ConfigurationError(f"Invalid class path {raw!r} (expected 'module.ClassName')")

    if not is_allowed_module(module_name):
        raise ConfigurationError(
            f"Module {module_name!r} is not under an allowed prefix {allowed_prefixes()} (set {CLASS_PREFIXES_ENV})"
        )

    try:
        mod = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module {module_name!r} for class {raw!r}: {e}") from e

    obj: Any = mod
    for part in attr.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise ConfigurationError(f"Class {attr!r} not found in module {module_name!r}")

    if not isinstance(obj, type):
        raise ConfigurationError(f"{raw!r} does not name a class")
    return obj


def new_instance(klass: Type[Any], conf: Optional[Any] = None) -> Any:
    """
    Instantiate klass with no arguments and hand it the configuration
    when it exposes set_conf().
    """
    obj = klass()
    if conf is not None:
        set_conf = getattr(obj, "set_conf", None)
        if callable(set_conf):
            set_conf(conf)
    return obj
