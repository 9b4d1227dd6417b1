"""Options and context passed to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, TextIO


@dataclass(slots=True, frozen=True)
class FormatOptions:
    """Presentation switches shared by all renderers.

    Attributes
    ----------
    columns:
        Terminal width; ``None`` asks the renderer to detect it from the
        output stream, ``0`` disables width-aware layout.
    date:
        Render the record time.
    colors:
        Emit ANSI colours; ``None`` detects support from the environment.
    compact:
        Render non-string arguments on a single line.
    error_level:
        Current nesting depth while rendering error causes.
    """

    columns: int | None = None
    date: bool = True
    colors: bool | None = None
    compact: bool | int = True
    error_level: int = 0

    def replace(self, **changes: Any) -> "FormatOptions":
        return replace(self, **changes)


@dataclass(slots=True, frozen=True)
class RenderContext:
    """Everything a renderer needs besides the record itself."""

    options: FormatOptions = field(default_factory=FormatOptions)
    stdout: TextIO | None = None
    stderr: TextIO | None = None


__all__ = ["FormatOptions", "RenderContext"]
