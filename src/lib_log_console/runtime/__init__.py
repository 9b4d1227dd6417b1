"""Runtime entry points: console construction and the shared default console.

Purpose
-------
Expose the stable surface (:func:`create_console`, :func:`get_console`,
:func:`set_console`, :func:`reset_console`) host applications use instead of
wiring the inner layers themselves.

Contents
--------
* :func:`create_console` - resolve settings from arguments and environment
  and build a :class:`LogConsole`.
* :func:`get_console` - lazily built process-wide default.
* :func:`set_console` / :func:`reset_console` - replace or drop the default.
"""

from __future__ import annotations

from typing import Any

from ._facade import CallSite, LogConsole
from ._settings import ConsoleSettings, build_console_settings, resolve_default_level
from ._state import clear_console, current_console, has_console
from ._state import set_console as _install_console


def create_console(**options: Any) -> LogConsole:
    """Build a console from keyword options and ``LOG_CONSOLE_*`` variables.

    Accepts every keyword of :func:`build_console_settings`.

    Examples
    --------
    >>> log = create_console(level="debug", fancy=False, environ={})
    >>> log.level
    4
    """

    return LogConsole(build_console_settings(**options))


def get_console() -> LogConsole:
    """Return the shared default console, creating it on first use."""

    return current_console(create_console)


def set_console(console: LogConsole) -> LogConsole:
    """Install ``console`` as the shared default and return it."""

    _install_console(console)
    return console


def reset_console() -> None:
    """Drop the shared default so the next :func:`get_console` rebuilds it."""

    clear_console()


def summary_info() -> str:
    """Return the metadata banner printed by the CLI ``info`` command.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """

    from lib_log_console import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = [
    "CallSite",
    "ConsoleSettings",
    "LogConsole",
    "build_console_settings",
    "create_console",
    "get_console",
    "has_console",
    "reset_console",
    "resolve_default_level",
    "set_console",
    "summary_info",
]
