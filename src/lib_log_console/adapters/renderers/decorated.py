"""Decorated renderer: colours, glyphs, badges, boxes, and column layout.

Purpose
-------
Layer presentation on top of :class:`PlainRenderer` for interactive
terminals: a colour per kind (falling back to a colour per severity), an
icon glyph or a solid badge, right-aligned tag and time on wide terminals,
bordered boxes for the ``box`` kind, captured stacks for ``trace``, and a
light inline markup pass (backticks and ``_underscores_``).

Contents
--------
* :data:`KIND_COLORS`, :data:`LEVEL_COLORS`, :data:`KIND_ICONS` tables.
* :func:`is_unicode_supported` terminal heuristic.
* :class:`DecoratedRenderer`.

System Role
-----------
Default renderer outside CI and test runs. Every colour goes through a
palette created from ``FormatOptions.colors`` so disabling colours yields
escape-free output with the same layout.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Mapping

from lib_log_console.adapters.text.box import box
from lib_log_console.adapters.text.colors import Palette, create_colors
from lib_log_console.adapters.text.stack import capture_stack, parse_stack
from lib_log_console.adapters.text.strings import string_width
from lib_log_console.domain.formatting import FormatOptions
from lib_log_console.domain.records import LogRecord

from .plain import PlainRenderer, join_nonempty

KIND_COLORS: Mapping[str, str] = {
    "info": "cyan",
    "fail": "red",
    "success": "green",
    "ready": "green",
    "start": "magenta",
}

LEVEL_COLORS: Mapping[int, str] = {
    0: "red",
    1: "yellow",
}

KIND_ICONS: Mapping[str, tuple[str, str]] = {
    "error": ("✖", "×"),
    "fatal": ("✖", "×"),
    "ready": ("✔", "√"),
    "warn": ("⚠", "‼"),
    "info": ("ℹ", "i"),
    "success": ("✔", "√"),
    "debug": ("⚙", "D"),
    "trace": ("→", "→"),
    "fail": ("✖", "×"),
    "start": ("◐", "o"),
    "log": ("", ""),
}
#: ``kind -> (unicode glyph, ASCII fallback)``.

_BACKTICK = re.compile(r"`([^`]+)`")
_UNDERSCORE = re.compile(r"\s+_([^_]+)_\s+")
_FRAME_FILE = re.compile(r'^File "(.+?)"')


def is_unicode_supported(environ: Mapping[str, str] | None = None, platform: str | None = None) -> bool:
    """Guess whether the terminal renders Unicode glyphs."""

    env = os.environ if environ is None else environ
    system = sys.platform if platform is None else platform
    if system != "win32":
        return env.get("TERM") != "linux"
    return bool(
        env.get("WT_SESSION")
        or env.get("TERMINUS_SUBLIME")
        or env.get("ConEmuTask") == "{cmd::Cmder}"
        or env.get("TERM_PROGRAM") in {"Terminus-Sublime", "vscode"}
        or env.get("TERM") in {"xterm-256color", "alacritty"}
        or env.get("TERMINAL_EMULATOR") == "JetBrains-JediTerm"
    )


def character_format(text: str, palette: Palette) -> str:
    """Apply inline markup: `code` turns cyan, _word_ is underlined."""

    text = _BACKTICK.sub(lambda match: palette.cyan(match.group(1)), text)
    return _UNDERSCORE.sub(lambda match: f" {palette.underline(match.group(1))} ", text)


def _background(color: str) -> str:
    return f"bg{color[0].upper()}{color[1:]}"


class DecoratedRenderer(PlainRenderer):
    """Render records with colours and glyphs.

    Parameters
    ----------
    unicode:
        Use Unicode glyphs; ``None`` detects support from the environment.
    """

    def __init__(self, *, unicode: bool | None = None) -> None:
        self._unicode = is_unicode_supported() if unicode is None else unicode
        self._icons = {kind: glyph if self._unicode else fallback for kind, (glyph, fallback) in KIND_ICONS.items()}

    def format_stack(self, stack: str, options: FormatOptions) -> str:
        lines = parse_stack(stack)
        if not lines:
            return ""
        palette = create_colors(options.colors)
        indent = "  " * (options.error_level + 1)
        painted = [
            "  " + _FRAME_FILE.sub(lambda match: f'{palette.gray("File")} "{palette.cyan(match.group(1))}"', line)
            for line in lines
        ]
        return f"\n{indent}" + f"\n{indent}".join(painted)

    def format_type(self, record: LogRecord, is_badge: bool, palette: Palette) -> str:
        color = KIND_COLORS.get(record.kind) or LEVEL_COLORS.get(record.level) or "gray"  # type: ignore[call-overload]
        if is_badge:
            return palette.get(_background(color), "bgWhite")(palette.black(f" {record.kind.upper()} "))
        icon = self._icons.get(record.kind)
        glyph = icon if icon is not None else (record.get("icon") or record.kind)
        return palette.get(color, "white")(glyph) if glyph else ""

    def format_record(self, record: LogRecord, options: FormatOptions) -> str:
        palette = create_colors(options.colors)
        message, *additional = self.format_args(record.args, options).split("\n")
        rest = "\n" + "\n".join(additional) if additional else ""

        if record.kind == "box":
            title = record.get("title")
            return box(
                character_format(message + rest, palette),
                title=character_format(str(title), palette) if title else None,
                style=record.get("style"),
                palette=palette,
            )

        date = self.format_date(record, options)
        colored_date = palette.gray(date) if date else ""
        badge = record.get("badge")
        is_badge = bool(badge) if badge is not None else record.level < 2

        kind = self.format_type(record, is_badge, palette)
        tag = palette.gray(record.tag) if record.tag else ""
        columns = options.columns or 0

        left = join_nonempty([kind, character_format(message, palette)])
        right = join_nonempty([tag, colored_date] if columns else [tag])
        space = columns - string_width(left) - string_width(right) - 2

        if space > 0 and columns >= 80:
            line = left + " " * space + right
        else:
            line = (palette.gray(f"[{right}]") + " " if right else "") + left

        line += character_format(rest, palette)

        if record.kind == "trace":
            line += self.format_stack(capture_stack(f"Trace: {message}", skip=2), options)

        return f"\n{line}\n" if is_badge else line


__all__ = ["DecoratedRenderer", "KIND_COLORS", "KIND_ICONS", "LEVEL_COLORS", "character_format", "is_unicode_supported"]
