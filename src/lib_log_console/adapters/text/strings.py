"""Escape-aware string measurement and alignment helpers."""

from __future__ import annotations

import re

from rich.cells import cell_len

_ANSI_PATTERN = re.compile(
    "|".join(
        [
            r"[\u001B\u009B][\[\]()#;?]*(?:(?:(?:(?:;[-a-zA-Z\d/#&.:=?%@~_]+)*|[a-zA-Z\d]+(?:;[-a-zA-Z\d/#&.:=?%@~_]*)*)?\u0007)",
            r"(?:(?:\d{1,4}(?:;\d{0,4})*)?[\dA-PR-TZcf-nq-uy=><~]))",
        ]
    )
)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``.

    Examples
    --------
    >>> strip_ansi("\\x1b[31mred\\x1b[39m")
    'red'
    """

    return _ANSI_PATTERN.sub("", text)


def string_width(text: str) -> int:
    """Return the terminal cell width of ``text`` ignoring colour codes.

    Wide glyphs count as two cells and combining marks as zero.

    Examples
    --------
    >>> string_width("\\x1b[1mab\\x1b[22m")
    2
    >>> string_width("日本")
    4
    """

    return cell_len(strip_ansi(text))


def left_align(text: str, width: int, space: str = " ") -> str:
    """Pad ``text`` on the right up to ``width`` characters."""

    free = width - len(text)
    return text if free <= 0 else text + space * free


def right_align(text: str, width: int, space: str = " ") -> str:
    """Pad ``text`` on the left up to ``width`` characters."""

    free = width - len(text)
    return text if free <= 0 else space * free + text


def center_align(text: str, width: int, space: str = " ") -> str:
    """Center ``text``; an odd remainder goes to the right side.

    Examples
    --------
    >>> center_align("ab", 5, ".")
    '.ab..'
    """

    free = width - len(text)
    if free <= 0:
        return text
    left = free // 2
    return space * left + text + space * (free - left)


def align(alignment: str, text: str, width: int, space: str = " ") -> str:
    """Dispatch to the ``left``/``right``/``center`` helper; unknown values return ``text``."""

    if alignment == "left":
        return left_align(text, width, space)
    if alignment == "right":
        return right_align(text, width, space)
    if alignment == "center":
        return center_align(text, width, space)
    return text


__all__ = ["align", "center_align", "left_align", "right_align", "string_width", "strip_ansi"]
