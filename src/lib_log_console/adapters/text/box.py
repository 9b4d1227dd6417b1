"""Bordered box drawing for multi-line text.

Purpose
-------
Render a block of text inside a border chosen from a small catalogue of
glyph sets, with padding, margins, vertical alignment, and an optional title
centered into the top border.

Contents
--------
* :class:`BoxBorderStyle` and :data:`BOX_STYLE_PRESETS`.
* :class:`BoxStyle` defaults.
* :func:`box` renderer.

System Role
-----------
Used by the decorated renderer for the ``box`` kind and exported for direct
use by applications.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, Mapping

from .colors import Palette, create_colors
from .strings import string_width


@dataclass(slots=True, frozen=True)
class BoxBorderStyle:
    """Glyphs for the corners and edges of a box."""

    tl: str
    tr: str
    bl: str
    br: str
    h: str
    v: str


BOX_STYLE_PRESETS: Mapping[str, BoxBorderStyle] = MappingProxyType(
    {
        "solid": BoxBorderStyle("┌", "┐", "└", "┘", "─", "│"),
        "double": BoxBorderStyle("╔", "╗", "╚", "╝", "═", "║"),
        "doubleSingle": BoxBorderStyle("╓", "╖", "╙", "╜", "─", "║"),
        "doubleSingleRounded": BoxBorderStyle("╭", "╮", "╰", "╯", "─", "║"),
        "singleThick": BoxBorderStyle("┏", "┓", "┗", "┛", "━", "┃"),
        "singleDouble": BoxBorderStyle("╒", "╕", "╘", "╛", "═", "│"),
        "singleDoubleRounded": BoxBorderStyle("╭", "╮", "╰", "╯", "═", "│"),
        "rounded": BoxBorderStyle("╭", "╮", "╰", "╯", "─", "│"),
    }
)


@dataclass(slots=True, frozen=True)
class BoxStyle:
    """Layout options of :func:`box`.

    Attributes
    ----------
    border_color:
        Palette colour name applied to every border glyph.
    border_style:
        Preset name or a literal :class:`BoxBorderStyle`; unknown presets
        fall back to ``solid``.
    valign:
        ``top``, ``center``, or ``bottom`` placement of the text rows.
    padding:
        Inner padding, rounded up to an even number.
    margin_left, margin_top, margin_bottom:
        Leading spaces and blank lines around the box.
    """

    border_color: str = "white"
    border_style: str | BoxBorderStyle = "rounded"
    valign: str = "center"
    padding: int = 2
    margin_left: int = 1
    margin_top: int = 1
    margin_bottom: int = 1

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "BoxStyle":
        """Build a style from keyword overrides; camelCase keys are accepted."""

        if not payload:
            return cls()
        aliases = {
            "borderColor": "border_color",
            "borderStyle": "border_style",
            "marginLeft": "margin_left",
            "marginTop": "margin_top",
            "marginBottom": "margin_bottom",
        }
        known = {item.name for item in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in payload.items():
            name = aliases.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown box style option: {key!r}")
            if name == "border_style" and isinstance(value, Mapping):
                value = BoxBorderStyle(**value)
            values[name] = value
        return cls(**values)


def _resolve_border(style: BoxStyle) -> BoxBorderStyle:
    if isinstance(style.border_style, BoxBorderStyle):
        return style.border_style
    return BOX_STYLE_PRESETS.get(style.border_style, BOX_STYLE_PRESETS["solid"])


def box(
    text: str,
    *,
    title: str | None = None,
    style: BoxStyle | Mapping[str, Any] | None = None,
    palette: Palette | None = None,
) -> str:
    """Draw ``text`` inside a border.

    The interior is as wide as the widest line plus padding on each side and
    as tall as the line count plus padding.

    Examples
    --------
    >>> from lib_log_console.adapters.text.colors import Palette
    >>> print(box("Hi", style={"margin_top": 0, "margin_bottom": 0, "margin_left": 0}, palette=Palette(enabled=False)))
    ╭──────╮
    │      │
    │  Hi  │
    │      │
    ╰──────╯
    """

    opts = style if isinstance(style, BoxStyle) else BoxStyle.from_mapping(style)
    colors = palette if palette is not None else create_colors()
    lines = text.split("\n")

    paint = colors.get(opts.border_color) if opts.border_color else None
    border = _resolve_border(opts)
    if paint is not None:
        border = BoxBorderStyle(*(paint(getattr(border, item.name)) for item in fields(BoxBorderStyle)))

    padding = opts.padding if opts.padding % 2 == 0 else opts.padding + 1
    height = len(lines) + padding
    width = max(string_width(line) for line in lines) + padding
    inner = width + padding
    indent = " " * max(opts.margin_left, 0)

    rendered: list[str] = [""] * max(opts.margin_top, 0)

    if title:
        title_width = string_width(title)
        free = max(inner - title_width, 0)
        left = free // 2
        painted_title = paint(title) if paint is not None else title
        rendered.append(f"{indent}{border.tl}{border.h * left}{painted_title}{border.h * (free - left)}{border.tr}")
    else:
        rendered.append(f"{indent}{border.tl}{border.h * inner}{border.tr}")

    if opts.valign == "top":
        offset = height - len(lines) - padding
    elif opts.valign == "bottom":
        offset = height - len(lines)
    else:
        offset = (height - len(lines)) // 2

    for row in range(height):
        if row < offset or row >= offset + len(lines):
            rendered.append(f"{indent}{border.v}{' ' * inner}{border.v}")
        else:
            line = lines[row - offset]
            gap = " " * (width - string_width(line))
            rendered.append(f"{indent}{border.v}{' ' * padding}{line}{gap}{border.v}")

    rendered.append(f"{indent}{border.bl}{border.h * inner}{border.br}")
    rendered.extend([""] * max(opts.margin_bottom, 0))
    return "\n".join(rendered)


__all__ = ["BOX_STYLE_PRESETS", "BoxBorderStyle", "BoxStyle", "box"]
