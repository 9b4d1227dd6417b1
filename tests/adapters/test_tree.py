from __future__ import annotations

from lib_log_console.adapters.text.colors import Palette
from lib_log_console.adapters.text.tree import format_tree

PLAIN = Palette(enabled=False)


def test_flat_items_use_branch_glyphs() -> None:
    assert format_tree(["a", "b", "c"], palette=PLAIN) == "  ├─a\n  ├─b\n  └─c\n"


def test_children_are_indented_under_their_parent() -> None:
    items = [{"text": "src", "children": ["main.py", {"text": "pkg", "children": ["mod.py"]}]}, "README"]

    assert format_tree(items, palette=PLAIN) == (
        "  ├─src\n"
        "  │  ├─main.py\n"
        "  │  └─pkg\n"
        "  │    └─mod.py\n"
        "  └─README\n"
    )


def test_max_depth_replaces_deeper_levels_with_ellipsis() -> None:
    items = [{"text": "root", "children": ["hidden-a", "hidden-b"]}]

    assert format_tree(items, max_depth=1, palette=PLAIN) == "  └─root\n    ...\n"


def test_custom_prefix_and_ellipsis() -> None:
    items = [{"text": "root", "children": ["x"]}]

    assert format_tree(items, prefix="", max_depth=1, ellipsis="…", palette=PLAIN) == "└─root\n  …\n"


def test_item_color_paints_only_its_own_line() -> None:
    palette = Palette(enabled=True)
    items = [{"text": "red", "color": "red", "children": ["plain"]}]

    tree = format_tree(items, palette=palette)

    assert tree == "\x1b[31m  └─red\n\x1b[39m    └─plain\n"


def test_tree_color_wraps_the_whole_tree() -> None:
    tree = format_tree(["a"], color="cyan", palette=Palette(enabled=True))

    assert tree == "\x1b[36m  └─a\n\x1b[39m"


def test_empty_tree_is_empty() -> None:
    assert format_tree([], palette=PLAIN) == ""
