"""Reversible redirection of console-like objects and streams into a logger.

Purpose
-------
Route calls that bypass the logger (a module-level ``info`` helper, a
third-party ``print`` to ``sys.stdout``...) through the dispatch engine and
put everything back exactly as it was afterwards.

Contents
--------
* :class:`InterceptionHandle` - scoped resource; releasing it restores the
  originals and is safe to repeat.
* :func:`intercept_console` - patch kind-named attributes of an object.
* :func:`intercept_stream` - patch a stream's ``write``.

System Role
-----------
Backs ``LogConsole.intercept_console``/``intercept_std`` and the
``wrap_*``/``restore_*`` helpers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TextIO

from .streams import ORIGINAL_WRITE_ATTR

LOGGER = logging.getLogger(__name__)

_MISSING = object()


class InterceptionHandle:
    """Restore patched attributes when released.

    Use as a context manager to guarantee restoration on every exit path.
    """

    def __init__(self, restorers: list[Callable[[], None]], label: str) -> None:
        self._restorers = restorers
        self._label = label
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Undo the patch; later calls do nothing."""

        if self._released:
            return
        self._released = True
        for restore in reversed(self._restorers):
            restore()
        LOGGER.debug("Released interception of %s", self._label)

    def __enter__(self) -> "InterceptionHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


def intercept_console(target: Any, call_sites: Mapping[str, Callable[..., Any]]) -> InterceptionHandle:
    """Replace every attribute of ``target`` named like a kind with its call-site.

    Only attributes that already exist on ``target`` are patched.
    """

    restorers: list[Callable[[], None]] = []
    for name, call_site in call_sites.items():
        if not hasattr(target, name):
            continue
        original = getattr(target, name)
        setattr(target, name, call_site)
        restorers.append(_attribute_restorer(target, name, original))
    LOGGER.debug("Intercepted %d console methods on %r", len(restorers), target)
    return InterceptionHandle(restorers, f"console {target!r}")


def _attribute_restorer(target: Any, name: str, original: Any) -> Callable[[], None]:
    def _restore() -> None:
        setattr(target, name, original)

    return _restore


def intercept_stream(stream: TextIO, call_site: Callable[..., Any]) -> InterceptionHandle:
    """Redirect text written to ``stream`` into ``call_site``.

    Each written chunk is stripped; whitespace-only chunks (such as the
    newline ``print`` writes separately) are dropped.
    """

    if hasattr(stream, ORIGINAL_WRITE_ATTR):
        raise ValueError(f"{stream!r} is already intercepted")
    own = stream.__dict__.get("write", _MISSING) if hasattr(stream, "__dict__") else _MISSING
    original_write = stream.write

    def _write(data: Any) -> int:
        text = str(data)
        if text.strip():
            call_site(text.strip())
        return len(text)

    setattr(stream, ORIGINAL_WRITE_ATTR, original_write)
    stream.write = _write  # type: ignore[method-assign]

    def _restore() -> None:
        if own is _MISSING:
            del stream.write
        else:
            stream.write = own  # type: ignore[method-assign]
        if hasattr(stream, ORIGINAL_WRITE_ATTR):
            delattr(stream, ORIGINAL_WRITE_ATTR)

    LOGGER.debug("Intercepted writes to %r", stream)
    return InterceptionHandle([_restore], f"stream {stream!r}")


__all__ = ["InterceptionHandle", "intercept_console", "intercept_stream"]
