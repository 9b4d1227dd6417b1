"""Domain entities and value objects used by the console logger."""

from __future__ import annotations

from .errors import LogConsoleError, PromptCancelledError, PromptUnavailableError, UnknownKindError
from .formatting import FormatOptions, RenderContext
from .kinds import DEFAULT_KINDS, LogKind, coerce_kinds
from .levels import SILENT, VERBOSE, LogLevels, Severity, normalize_level
from .records import LogRecord, build_record, fingerprint, is_log_record

__all__ = [
    "DEFAULT_KINDS",
    "FormatOptions",
    "LogConsoleError",
    "LogKind",
    "LogLevels",
    "LogRecord",
    "PromptCancelledError",
    "PromptUnavailableError",
    "RenderContext",
    "SILENT",
    "Severity",
    "UnknownKindError",
    "VERBOSE",
    "build_record",
    "coerce_kinds",
    "fingerprint",
    "is_log_record",
    "normalize_level",
]
