"""Log kinds: named categories carrying a default severity and attributes."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .levels import LogLevels, Severity


@dataclass(slots=True, frozen=True)
class LogKind:
    """Default attributes applied to every record of one kind.

    Attributes
    ----------
    level:
        Default severity; ``None`` lets the facade default apply.
    tag, icon, badge:
        Optional presentation defaults forwarded to renderers.
    attributes:
        Any further fields copied verbatim into the record extras.
    """

    level: Severity | None = None
    tag: str | None = None
    icon: str | None = None
    badge: bool | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def to_defaults(self) -> dict[str, Any]:
        """Return the non-empty fields as a record-defaults mapping."""

        data: dict[str, Any] = dict(self.attributes)
        for key in ("level", "tag", "icon", "badge"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "LogKind":
        known = {key: payload[key] for key in ("level", "tag", "icon", "badge") if key in payload}
        rest = {key: value for key, value in payload.items() if key not in known}
        return cls(attributes=rest, **known)


DEFAULT_KINDS: Mapping[str, LogKind] = MappingProxyType({name: LogKind(level=level) for name, level in LogLevels.items()})
#: Built-in kind table; replaceable wholesale through configuration.


def coerce_kinds(kinds: Mapping[str, LogKind | Mapping[str, Any]] | None) -> Mapping[str, LogKind]:
    """Normalise a user supplied kind table into :class:`LogKind` values.

    Kind names are lower-cased; ``None`` yields :data:`DEFAULT_KINDS`.
    """

    if kinds is None:
        return DEFAULT_KINDS
    table: dict[str, LogKind] = {}
    for name, spec in kinds.items():
        if not isinstance(name, str) or not name:
            raise ValueError(f"Log kind names must be non-empty strings, got {name!r}")
        table[name.lower()] = spec if isinstance(spec, LogKind) else LogKind.from_mapping(spec)
    return MappingProxyType(table)


__all__ = ["DEFAULT_KINDS", "LogKind", "coerce_kinds"]
