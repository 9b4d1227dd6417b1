"""Plain renderer producing ``[kind] [tag] message`` lines.

Purpose
-------
Render records without colours or glyphs, suitable for CI logs, pipes, and
tests. Error-like arguments expand into their message plus a cleaned stack
and their chain of causes.

Contents
--------
* :class:`PlainRenderer` - :class:`RendererPort` implementation; its
  ``format_*`` methods are the extension points reused by the decorated
  renderer.
"""

from __future__ import annotations

import sys
from typing import Any, Sequence, TextIO

from rich.pretty import pretty_repr

from lib_log_console.adapters.streams import stream_columns, write_stream
from lib_log_console.adapters.text.colors import is_color_supported
from lib_log_console.adapters.text.stack import error_cause, error_message, error_stack, is_error_like, parse_stack
from lib_log_console.application.ports.renderer import RendererPort
from lib_log_console.domain.formatting import FormatOptions, RenderContext
from lib_log_console.domain.records import LogRecord


def bracket(text: str) -> str:
    return f"[{text}]" if text else ""


def join_nonempty(parts: Sequence[str]) -> str:
    return " ".join(part for part in parts if part)


class PlainRenderer(RendererPort):
    """Render records as unadorned text.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> record = LogRecord(level=3, kind="info", tag="db", args=["connected"], timestamp=datetime(2025, 1, 1, tzinfo=timezone.utc))
    >>> PlainRenderer().format_record(record, FormatOptions(columns=0))
    '[info] [db] connected'
    """

    def render(self, record: LogRecord, context: RenderContext) -> None:
        """Format ``record`` and write it plus a newline to the target stream.

        Severities below 2 (fatal, error, warn) go to stderr.
        """

        stream = self.target_stream(record, context)
        options = self.resolve_options(context, stream)
        write_stream(self.format_record(record, options) + "\n", stream)

    @staticmethod
    def target_stream(record: LogRecord, context: RenderContext) -> TextIO:
        if record.level < 2:
            return context.stderr or sys.stderr
        return context.stdout or sys.stdout

    @staticmethod
    def resolve_options(context: RenderContext, stream: TextIO) -> FormatOptions:
        """Fill in terminal width and colour support left open in the options."""

        options = context.options
        if options.columns is None:
            options = options.replace(columns=stream_columns(context.stdout or sys.stdout))
        if options.colors is None:
            options = options.replace(colors=is_color_supported(stream=stream))
        return options

    def format_record(self, record: LogRecord, options: FormatOptions) -> str:
        message = self.format_args(record.args, options)
        if record.kind == "box":
            lines = [bracket(record.tag), record.get("title") or "", *message.split("\n")]
            return "\n" + "\n".join(f" > {line}" for line in lines if line) + "\n"
        return join_nonempty([bracket(record.kind), bracket(record.tag), message])

    def format_args(self, args: Sequence[Any], options: FormatOptions) -> str:
        return " ".join(self.format_error(arg, options) if is_error_like(arg) else self.format_value(arg, options) for arg in args)

    @staticmethod
    def format_value(value: Any, options: FormatOptions) -> str:
        if isinstance(value, str):
            return value
        if options.compact:
            return pretty_repr(value, max_width=sys.maxsize)
        return pretty_repr(value, max_width=options.columns or 80)

    def format_error(self, err: Any, options: FormatOptions, _seen: frozenset[int] = frozenset()) -> str:
        """Render ``err`` as its message, its stack, and its causes.

        Causes are indented one level deeper per generation and prefixed with
        ``[cause]:``.
        """

        level = options.error_level
        prefix = f"{'  ' * level}[cause]: " if level > 0 else ""
        stack = self.format_stack(error_stack(err), options)
        text = prefix + error_message(err) + ("\n" + stack if stack else "")
        seen = _seen | {id(err)}
        cause = error_cause(err)
        if cause is not None and id(cause) not in seen:
            text += "\n\n" + self.format_error(cause, options.replace(error_level=level + 1), seen)
        return text

    def format_stack(self, stack: str, options: FormatOptions) -> str:
        lines = parse_stack(stack)
        if not lines:
            return ""
        indent = "  " * (options.error_level + 1)
        return indent + f"\n{indent}".join(lines)

    @staticmethod
    def format_date(record: LogRecord, options: FormatOptions) -> str:
        return record.timestamp.astimezone().strftime("%H:%M:%S") if options.date else ""


__all__ = ["PlainRenderer", "bracket", "join_nonempty"]
