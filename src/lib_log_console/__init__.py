"""Structured console logging with pluggable renderers.

Typical use::

    from lib_log_console import get_console

    log = get_console()
    log.info("Server started on port", 8080)
    log.with_tag("db").warn("Slow query", {"ms": 1200})
    log.box("Deployed!")

The shared default console reads ``LOG_CONSOLE_*`` variables on first use;
:func:`create_console` builds independent instances.
"""

from __future__ import annotations

from .adapters import CANCEL, ClickPrompt, DecoratedRenderer, InterceptionHandle, PlainRenderer
from .adapters.text import BoxStyle, box, colorize, colors, format_tree, strip_ansi
from .domain import (
    SILENT,
    VERBOSE,
    FormatOptions,
    LogConsoleError,
    LogKind,
    LogLevels,
    LogRecord,
    PromptCancelledError,
    PromptUnavailableError,
    UnknownKindError,
)
from .runtime import (
    CallSite,
    ConsoleSettings,
    LogConsole,
    create_console,
    get_console,
    reset_console,
    set_console,
    summary_info,
)

__all__ = [
    "BoxStyle",
    "CANCEL",
    "CallSite",
    "ClickPrompt",
    "ConsoleSettings",
    "DecoratedRenderer",
    "FormatOptions",
    "InterceptionHandle",
    "LogConsole",
    "LogConsoleError",
    "LogKind",
    "LogLevels",
    "LogRecord",
    "PlainRenderer",
    "PromptCancelledError",
    "PromptUnavailableError",
    "SILENT",
    "UnknownKindError",
    "VERBOSE",
    "box",
    "colorize",
    "colors",
    "create_console",
    "format_tree",
    "get_console",
    "reset_console",
    "set_console",
    "strip_ansi",
    "summary_info",
]
