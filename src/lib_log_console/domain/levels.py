"""Severity scale shared by every log kind.

Purpose
-------
Describe the open-ended integer severity scale (lower is more severe) and the
normalisation rule that turns numbers, kind names, or ``None`` into a concrete
severity.

Contents
--------
* :data:`SILENT` / :data:`VERBOSE` sentinels.
* :data:`LogLevels` conventional severities per kind name.
* :func:`normalize_level` resolution helper.

System Role
-----------
Consulted by the dispatch engine when filtering records and by the facade when
its threshold is assigned.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, Mapping, Union

Severity = Union[int, float]
"""Severity values are integers, plus the two infinite sentinels."""

SILENT: Severity = -math.inf
VERBOSE: Severity = math.inf
DEFAULT_LEVEL: Severity = 3

LogLevels: Mapping[str, Severity] = MappingProxyType(
    {
        "silent": SILENT,
        "fatal": 0,
        "error": 0,
        "warn": 1,
        "log": 2,
        "info": 3,
        "success": 3,
        "fail": 3,
        "ready": 3,
        "start": 3,
        "box": 3,
        "debug": 4,
        "trace": 5,
        "verbose": VERBOSE,
    }
)
#: Conventional severity per kind name; 0 is the most severe finite value.


def is_severity(value: Any) -> bool:
    """Return ``True`` when ``value`` is a usable numeric severity."""

    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_level(value: Any, kinds: Mapping[str, Any] | None = None, default: Severity = DEFAULT_LEVEL) -> Severity:
    """Resolve ``value`` to a severity.

    Numbers pass through untouched (no clamping), kind names resolve to the
    kind's configured level, everything else falls back to ``default``.

    Examples
    --------
    >>> from lib_log_console.domain.kinds import DEFAULT_KINDS
    >>> normalize_level(None)
    3
    >>> normalize_level(42)
    42
    >>> normalize_level("warn", DEFAULT_KINDS)
    1
    >>> normalize_level("nope", DEFAULT_KINDS, default=2)
    2
    """

    if value is None:
        return default
    if is_severity(value):
        return value
    if isinstance(value, str) and kinds:
        kind = kinds.get(value)
        level = getattr(kind, "level", None) if kind is not None else None
        if level is None and isinstance(kind, Mapping):
            level = kind.get("level")
        if level is not None:
            return level
    return default


__all__ = ["DEFAULT_LEVEL", "LogLevels", "SILENT", "Severity", "VERBOSE", "is_severity", "normalize_level"]
