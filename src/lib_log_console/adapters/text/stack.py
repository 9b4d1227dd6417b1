"""Stack trace extraction and cleanup for error-like arguments."""

from __future__ import annotations

import os
import traceback
from typing import Any


def is_error_like(value: Any) -> bool:
    """Return ``True`` for exceptions and objects exposing a string ``stack``."""

    if isinstance(value, BaseException):
        return True
    return isinstance(getattr(value, "stack", None), str)


def error_message(err: Any) -> str:
    """Return the one-line message rendered in front of the stack."""

    message = getattr(err, "message", None)
    if isinstance(message, str):
        return message
    if isinstance(err, BaseException):
        return "".join(traceback.format_exception_only(type(err), err)).strip()
    return repr(err)


def error_cause(err: Any) -> Any:
    """Return the parent error of ``err``, if any."""

    if isinstance(err, BaseException):
        if err.__cause__ is not None:
            return err.__cause__
        if err.__context__ is not None and not err.__suppress_context__:
            return err.__context__
    return getattr(err, "cause", None)


def error_stack(err: Any) -> str:
    """Return a stack string whose first line is the error header.

    Exceptions yield their header followed by the traceback frames; other
    error-like objects yield their ``stack`` attribute verbatim.
    """

    stack = getattr(err, "stack", None)
    if isinstance(stack, str):
        return stack
    if isinstance(err, BaseException):
        frames = "".join(traceback.format_tb(err.__traceback__)) if err.__traceback__ else ""
        return f"{type(err).__name__}: {err}\n{frames}".rstrip("\n")
    return ""


def capture_stack(header: str, skip: int = 1) -> str:
    """Return ``header`` followed by the caller's current stack frames."""

    frames = traceback.format_stack()[: -(skip + 1)] if skip >= 0 else traceback.format_stack()
    return f"{header}\n{''.join(frames)}".rstrip("\n")


def parse_stack(stack: str, cwd: str | None = None) -> list[str]:
    """Split ``stack`` into clean frame lines.

    The first line (the error header) is dropped, every remaining line is
    trimmed and loses any ``file://`` scheme and current-directory prefix.

    Examples
    --------
    >>> parse_stack("Error: boom\\n    at run (file:///work/app.js:1:2)", cwd="/work")
    ['at run (app.js:1:2)']
    """

    base = (cwd if cwd is not None else os.getcwd()) + os.sep
    lines = []
    for line in stack.split("\n")[1:]:
        cleaned = line.strip().replace("file://", "", 1).replace(base, "", 1)
        if cleaned:
            lines.append(cleaned)
    return lines


__all__ = ["capture_stack", "error_cause", "error_message", "error_stack", "is_error_like", "parse_stack"]
