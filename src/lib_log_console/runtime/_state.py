"""Process-wide default console and access helpers."""

from __future__ import annotations

from collections.abc import Callable
from threading import RLock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._facade import LogConsole


_STATE: "LogConsole | None" = None
_STATE_LOCK = RLock()


def set_console(console: "LogConsole") -> None:
    """Install ``console`` as the shared default."""

    with _STATE_LOCK:
        global _STATE
        _STATE = console


def clear_console() -> None:
    """Forget the shared default; the next access builds a fresh one."""

    with _STATE_LOCK:
        global _STATE
        _STATE = None


def current_console(factory: Callable[[], "LogConsole"]) -> "LogConsole":
    """Return the shared default, building it with ``factory`` on first use."""

    with _STATE_LOCK:
        global _STATE
        if _STATE is None:
            _STATE = factory()
        return _STATE


def has_console() -> bool:
    """Return ``True`` when a shared default exists."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = ["clear_console", "current_console", "has_console", "set_console"]
