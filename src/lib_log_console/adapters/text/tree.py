"""Tree drawing with branch glyphs and depth-bounded truncation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union

from .colors import Palette, create_colors

TreeItem = Union[str, Mapping[str, Any]]
"""A bare label, or a mapping with ``text`` and optional ``color``/``children``."""


def format_tree(
    items: Sequence[TreeItem],
    *,
    color: str | None = None,
    prefix: str = "  ",
    max_depth: int | None = None,
    ellipsis: str = "...",
    palette: Palette | None = None,
) -> str:
    """Render ``items`` as a tree, one line per item, each ending in a newline.

    Children are indented under their parent; once ``max_depth`` levels have
    been drawn the next level is replaced by ``ellipsis``. A per-item colour
    paints that item's whole line only.

    Examples
    --------
    >>> print(format_tree(["a", {"text": "b", "children": ["c"]}]), end="")
      ├─a
      └─b
        └─c
    """

    colors = palette if palette is not None else create_colors()
    tree = "".join(_build_tree(items, prefix, max_depth, ellipsis, colors))
    if color:
        return colors.get(color)(tree)
    return tree


def _build_tree(
    items: Sequence[TreeItem],
    prefix: str,
    max_depth: int | None,
    ellipsis: str,
    colors: Palette,
) -> list[str]:
    chunks: list[str] = []
    last = len(items) - 1
    for index, item in enumerate(items):
        if max_depth is not None and max_depth <= 0:
            marker = f"{prefix}{ellipsis}\n"
            item_color = None if isinstance(item, str) else item.get("color")
            return [colors.get(item_color)(marker) if item_color else marker]

        is_last = index == last
        branch = f"{prefix}└─" if is_last else f"{prefix}├─"
        if isinstance(item, str):
            chunks.append(f"{branch}{item}\n")
            continue

        line = f"{branch}{item.get('text', '')}\n"
        item_color = item.get("color")
        chunks.append(colors.get(item_color)(line) if item_color else line)
        children = item.get("children")
        if children:
            chunks.extend(
                _build_tree(
                    children,
                    f"{prefix}{'  ' if is_last else '│  '}",
                    None if max_depth is None else max_depth - 1,
                    ellipsis,
                    colors,
                )
            )
    return chunks


__all__ = ["TreeItem", "format_tree"]
