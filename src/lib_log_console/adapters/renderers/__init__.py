"""Built-in renderers."""

from __future__ import annotations

from .decorated import DecoratedRenderer
from .plain import PlainRenderer

__all__ = ["DecoratedRenderer", "PlainRenderer"]
