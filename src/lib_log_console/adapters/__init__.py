"""Adapter implementations for the console logger ports."""

from __future__ import annotations

from .intercept import InterceptionHandle, intercept_console, intercept_stream
from .prompt import CANCEL, CANCEL_POLICIES, ClickPrompt
from .renderers import DecoratedRenderer, PlainRenderer
from .scheduler import AsyncioScheduler, SystemClock, ThreadingScheduler
from .streams import stream_columns, write_stream

__all__ = [
    "AsyncioScheduler",
    "CANCEL",
    "CANCEL_POLICIES",
    "ClickPrompt",
    "DecoratedRenderer",
    "InterceptionHandle",
    "PlainRenderer",
    "SystemClock",
    "ThreadingScheduler",
    "intercept_console",
    "intercept_stream",
    "stream_columns",
    "write_stream",
]
