"""Stateless text rendering utilities."""

from __future__ import annotations

from .box import BOX_STYLE_PRESETS, BoxBorderStyle, BoxStyle, box
from .colors import COLOR_CODES, Palette, colorize, colors, create_colors, get_color, is_color_supported
from .stack import error_stack, is_error_like, parse_stack
from .strings import align, center_align, left_align, right_align, string_width, strip_ansi
from .tree import TreeItem, format_tree

__all__ = [
    "BOX_STYLE_PRESETS",
    "BoxBorderStyle",
    "BoxStyle",
    "COLOR_CODES",
    "Palette",
    "TreeItem",
    "align",
    "box",
    "center_align",
    "colorize",
    "colors",
    "create_colors",
    "error_stack",
    "format_tree",
    "get_color",
    "is_color_supported",
    "is_error_like",
    "left_align",
    "parse_stack",
    "right_align",
    "string_width",
    "strip_ansi",
]
