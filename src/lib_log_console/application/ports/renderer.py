"""Renderer port describing how records reach an output stream.

Purpose
-------
Define the single operation the dispatch engine needs from a renderer so that
plain, decorated, or host-provided renderers plug in interchangeably.

Contents
--------
* :class:`RendererPort` - runtime-checkable protocol with ``render``.
* :class:`StreamPort` - the line-oriented ``write`` a renderer writes into.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_console.domain.formatting import RenderContext
from lib_log_console.domain.records import LogRecord


@runtime_checkable
class RendererPort(Protocol):
    """Turn one record into text and write it out."""

    def render(self, record: LogRecord, context: RenderContext) -> None:
        """Render ``record`` using ``context``; must not raise for well-formed records."""


@runtime_checkable
class StreamPort(Protocol):
    """Anything accepting pre-formatted text."""

    def write(self, text: str) -> object: ...


__all__ = ["RendererPort", "StreamPort"]
