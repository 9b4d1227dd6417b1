"""Stream helpers shared by renderers and stream interception."""

from __future__ import annotations

from typing import Any, TextIO

from rich.console import Console

ORIGINAL_WRITE_ATTR = "_lib_log_console_write"
#: Attribute holding a stream's own ``write`` while an interception is installed.


def write_stream(data: str, stream: TextIO) -> Any:
    """Write ``data`` to ``stream``, bypassing an installed interception."""

    write = getattr(stream, ORIGINAL_WRITE_ATTR, None) or stream.write
    return write(data)


def stream_columns(stream: TextIO | None) -> int:
    """Return the terminal width behind ``stream``, or ``0`` when it is not a terminal."""

    if stream is None:
        return 0
    isatty = getattr(stream, "isatty", None)
    try:
        interactive = bool(isatty()) if callable(isatty) else False
    except ValueError:
        # closed stream
        return 0
    if not interactive:
        return 0
    return Console(file=stream).width


__all__ = ["ORIGINAL_WRITE_ATTR", "stream_columns", "write_stream"]
