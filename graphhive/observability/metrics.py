from __future__ import annotations

from collections import Counter
from typing import Dict, Optional

from prometheus_client import Counter as PromCounter

# Requests counters (HTTP-level)
_REQUESTS = Counter()

# Named counters (custom)
_NAMED = Counter()

_PROM_REQUESTS = PromCounter(
    "graphhive_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

_PROM_PROFILES = PromCounter(
    "graphhive_profiles_initialized_total",
    "Hive input/output profiles registered",
    ["direction"],
)


def reset_metrics() -> None:
    """
    Test helper: clears the in-process counters.
    Prometheus counters are monotonic and are left alone.
    """
    _REQUESTS.clear()
    _NAMED.clear()


def inc_http(method: str, path: str, status: Optional[int] = None) -> None:
    m = (method or "UNKNOWN").upper()
    p = path or "/"
    s = status if status is not None else "unknown"

    _REQUESTS["requests_total"] += 1
    _REQUESTS[f"requests_{m}"] += 1
    _REQUESTS[f"path_{p}|{s}"] += 1
    _PROM_REQUESTS.labels(method=m, path=p, status=str(s)).inc()


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def inc_profile(direction: str) -> None:
    inc_named(f"profiles_{direction}")
    _PROM_PROFILES.labels(direction=direction).inc()


def snapshot_requests() -> Dict[str, int]:
    return dict(_REQUESTS)


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
