"""Log record construction and fingerprinting.

Purpose
-------
Turn raw call arguments plus kind defaults into the canonical
:class:`LogRecord` consumed by renderers.

Contents
--------
* :func:`is_log_record` structural heuristic for pre-built records.
* :class:`LogRecord` normalized record.
* :func:`build_record` construction rule (message/additional aliases).
* :func:`fingerprint` duplicate-detection key.

System Role
-----------
Domain layer; the dispatch engine calls :func:`build_record` once per
dispatch and :func:`fingerprint` while throttling.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from .levels import Severity, normalize_level

_CORE_FIELDS = frozenset({"level", "kind", "tag", "args", "timestamp", "message", "additional"})


def is_log_record(value: Any) -> bool:
    """Return ``True`` when ``value`` looks like a pre-built partial record.

    This is a heuristic, not a guarantee: a mapping with a truthy ``message``
    or ``args`` entry qualifies unless it also carries a ``stack`` key, in
    which case it is an error-like object and stays a literal argument.

    Examples
    --------
    >>> is_log_record({"message": "hi"})
    True
    >>> is_log_record({"message": "hi", "stack": "..."})
    False
    >>> is_log_record("hi")
    False
    """

    if not isinstance(value, Mapping):
        return False
    if not value.get("message") and not value.get("args"):
        return False
    return "stack" not in value


@dataclass(slots=True)
class LogRecord:
    """Normalized log event handed to every renderer.

    Attributes
    ----------
    level:
        Resolved severity (lower is more severe).
    kind:
        Lower-cased kind name, ``"log"`` when none was given.
    tag:
        Tag string, possibly empty.
    args:
        Ordered positional values.
    timestamp:
        Timezone-aware UTC time of dispatch.
    extras:
        Additional fields for renderers (``title``, ``style``, ``icon``,
        ``badge``...).
    """

    level: Severity
    kind: str
    tag: str
    args: list[Any]
    timestamp: datetime
    extras: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Return an extra field, or ``default`` when absent."""

        return self.extras.get(key, default)

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)


def _coerce_timestamp(value: Any, fallback: datetime | None) -> datetime:
    """Return an aware UTC timestamp; naive values are taken as local time.

    Examples
    --------
    >>> _coerce_timestamp("yesterday", datetime(2025, 1, 1, tzinfo=timezone.utc)).isoformat()
    '2025-01-01T00:00:00+00:00'
    >>> _coerce_timestamp(datetime(2025, 1, 1, 12, tzinfo=timezone.utc), None).tzinfo is timezone.utc
    True
    """

    if isinstance(value, datetime):
        return value.astimezone(timezone.utc)
    if fallback is not None:
        return fallback.astimezone(timezone.utc)
    return datetime.now(timezone.utc)


def build_record(
    defaults: Mapping[str, Any],
    args: Sequence[Any],
    *,
    raw: bool = False,
    timestamp: datetime | None = None,
    kinds: Mapping[str, Any] | None = None,
) -> LogRecord:
    """Build a :class:`LogRecord` from kind ``defaults`` and call ``args``.

    Unless ``raw`` is set, a single argument passing :func:`is_log_record` is
    merged over the defaults instead of becoming a positional value.
    ``message`` is moved to the front of ``args`` and ``additional`` is
    appended as one newline-led argument.
    """

    payload: dict[str, Any] = {"args": []}
    payload.update(defaults)
    if not raw and len(args) == 1 and is_log_record(args[0]):
        payload.update(args[0])
    else:
        payload["args"] = list(args)

    positional = list(payload.get("args") or [])
    message = payload.pop("message", None)
    if message:
        positional.insert(0, message)
    additional = payload.pop("additional", None)
    if additional:
        lines = additional.split("\n") if isinstance(additional, str) else [str(line) for line in additional]
        positional.append("\n" + "\n".join(lines))

    kind = payload.get("kind")
    kind = kind.lower() if isinstance(kind, str) else "log"
    tag = payload.get("tag")
    stamp = _coerce_timestamp(payload.get("timestamp"), timestamp)
    level = normalize_level(payload.get("level"), kinds)
    extras = {key: value for key, value in payload.items() if key not in _CORE_FIELDS}
    return LogRecord(
        level=level,
        kind=kind,
        tag=tag if isinstance(tag, str) else "",
        args=positional,
        timestamp=stamp,
        extras=extras,
    )


def fingerprint(record: LogRecord) -> str | None:
    """Serialize ``(kind, tag, args)`` for duplicate detection.

    Returns ``None`` when the arguments cannot be serialized (for example a
    cyclic structure), meaning the record must be treated as distinct.
    """

    try:
        return json.dumps([record.kind, record.tag, record.args], default=repr, sort_keys=True)
    except (TypeError, ValueError, RecursionError):
        return None


__all__ = ["LogRecord", "build_record", "fingerprint", "is_log_record"]
