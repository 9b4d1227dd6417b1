"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

import sys
from collections.abc import Callable

name = "lib_log_console"
title = "Structured console logging with pluggable renderers, throttling and pausing"
version = "1.0.0"
homepage = "https://github.com/bitranox/lib_log_console"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_console"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Emit the metadata banner line by line through ``writer`` (stdout by default).

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_console:\\n'
    """

    write = writer if writer is not None else sys.stdout.write
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    write(f"Info for {name}:\n")
    write("\n")
    for label, value in fields:
        write(f"    {label.ljust(pad)} = {value}\n")
