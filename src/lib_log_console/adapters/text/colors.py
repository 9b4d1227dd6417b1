"""ANSI colour composition without style bleed.

Purpose
-------
Wrap text in SGR escape sequences so that nested colours compose: when the
wrapped text already contains the closing code of the outer style, that
closing code is replaced by the re-opening sequence so the outer style
survives the inner reset.

Contents
--------
* :data:`COLOR_CODES` - open/close codes per colour name.
* :class:`Palette` - attribute access to colour functions.
* :func:`is_color_supported`, :func:`create_colors`, :func:`get_color`,
  :func:`colorize`, and the module-level :data:`colors` palette.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TextIO

from rich.console import Console

ColorFunction = Callable[[Any], str]

_ESC = "\x1b["

COLOR_CODES: Mapping[str, tuple[int, int, str | None]] = {
    "reset": (0, 0, None),
    "bold": (1, 22, "\x1b[22m\x1b[1m"),
    "dim": (2, 22, "\x1b[22m\x1b[2m"),
    "italic": (3, 23, None),
    "underline": (4, 24, None),
    "inverse": (7, 27, None),
    "hidden": (8, 28, None),
    "strikethrough": (9, 29, None),
    "black": (30, 39, None),
    "red": (31, 39, None),
    "green": (32, 39, None),
    "yellow": (33, 39, None),
    "blue": (34, 39, None),
    "magenta": (35, 39, None),
    "cyan": (36, 39, None),
    "white": (37, 39, None),
    "gray": (90, 39, None),
    "bgBlack": (40, 49, None),
    "bgRed": (41, 49, None),
    "bgGreen": (42, 49, None),
    "bgYellow": (43, 49, None),
    "bgBlue": (44, 49, None),
    "bgMagenta": (45, 49, None),
    "bgCyan": (46, 49, None),
    "bgWhite": (47, 49, None),
    "blackBright": (90, 39, None),
    "redBright": (91, 39, None),
    "greenBright": (92, 39, None),
    "yellowBright": (93, 39, None),
    "blueBright": (94, 39, None),
    "magentaBright": (95, 39, None),
    "cyanBright": (96, 39, None),
    "whiteBright": (97, 39, None),
    "bgBlackBright": (100, 49, None),
    "bgRedBright": (101, 49, None),
    "bgGreenBright": (102, 49, None),
    "bgYellowBright": (103, 49, None),
    "bgBlueBright": (104, 49, None),
    "bgMagentaBright": (105, 49, None),
    "bgCyanBright": (106, 49, None),
    "bgWhiteBright": (107, 49, None),
}
#: ``name -> (open, close, replacement)``; ``None`` replacement re-opens with the open code.


def _replace_close(text: str, index: int, close: str, replace: str) -> str:
    parts: list[str] = []
    while index >= 0:
        parts.append(text[:index])
        parts.append(replace)
        text = text[index + len(close) :]
        index = text.find(close)
    parts.append(text)
    return "".join(parts)


def _make_color(open_code: int, close_code: int, replace: str | None) -> ColorFunction:
    opener = f"{_ESC}{open_code}m"
    closer = f"{_ESC}{close_code}m"
    replacement = replace if replace is not None else opener

    def _color(value: Any) -> str:
        text = "" if value is None else str(value)
        if text == "":
            return ""
        index = text.find(closer, len(opener) + 1)
        if index < 0:
            return opener + text + closer
        return opener + _replace_close(text, index, closer, replacement) + closer

    return _color


def _plain(value: Any) -> str:
    return "" if value is None else str(value)


class Palette:
    """Colour functions looked up by name, either real or pass-through.

    Examples
    --------
    >>> Palette(enabled=True).red("x")
    '\\x1b[31mx\\x1b[39m'
    >>> Palette(enabled=False).red("x")
    'x'
    """

    def __init__(self, *, enabled: bool) -> None:
        self.enabled = enabled
        if enabled:
            self._functions = {name: _make_color(*codes) for name, codes in COLOR_CODES.items()}
        else:
            self._functions = {name: _plain for name in COLOR_CODES}

    def __getattr__(self, name: str) -> ColorFunction:
        try:
            return self.__dict__["_functions"][name]
        except KeyError as exc:
            raise AttributeError(f"Unknown color: {name!r}") from exc

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def get(self, name: str | None, fallback: str = "reset") -> ColorFunction:
        """Return the colour function for ``name`` or for ``fallback``."""

        if name and name in self._functions:
            return self._functions[name]
        return self._functions[fallback]


def is_color_supported(stream: TextIO | None = None, argv: Sequence[str] | None = None) -> bool:
    """Decide whether ANSI colours should be emitted to ``stream``.

    ``--no-color`` / ``--color`` on the command line win; otherwise a rich
    :class:`~rich.console.Console` bound to the stream decides, which honours
    ``NO_COLOR``, ``FORCE_COLOR``, ``TERM=dumb``, and non-terminal streams.

    Examples
    --------
    >>> import io
    >>> is_color_supported(io.StringIO(), argv=["prog", "--color"])
    True
    >>> is_color_supported(io.StringIO(), argv=["prog", "--no-color"])
    False
    """

    args = sys.argv if argv is None else argv
    if "--no-color" in args:
        return False
    if "--color" in args:
        return True
    console = Console(file=sys.stdout if stream is None else stream)
    return console.color_system is not None and not console.no_color


def create_colors(enabled: bool | None = None) -> Palette:
    """Return a palette; ``None`` detects colour support from the environment."""

    return Palette(enabled=is_color_supported() if enabled is None else enabled)


colors = create_colors()
#: Palette following the environment at import time.


def get_color(name: str, fallback: str = "reset") -> ColorFunction:
    """Return the module palette function for ``name``."""

    return colors.get(name, fallback)


def colorize(name: str, text: Any) -> str:
    """Colour ``text`` with the module palette."""

    return get_color(name)(text)


__all__ = [
    "COLOR_CODES",
    "ColorFunction",
    "Palette",
    "colorize",
    "colors",
    "create_colors",
    "get_color",
    "is_color_supported",
]
