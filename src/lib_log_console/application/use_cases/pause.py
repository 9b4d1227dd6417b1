"""Pause/resume coordination shared between console instances.

Purpose
-------
Hold dispatches made while logging is suspended and replay them, in
submission order, when logging resumes.

Contents
--------
* :class:`SuppressionCoordinator` - pause flag plus FIFO of deferred calls.
* :func:`default_coordinator` - the process-wide instance facades share
  unless another coordinator is injected.

System Role
-----------
The dispatch engine offers every admitted call to its coordinator before
processing it; a paused coordinator keeps the call and returns ``True``.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Any, Deque, Mapping, Protocol, Sequence

LOGGER = logging.getLogger(__name__)


class _Replayable(Protocol):
    def process(self, defaults: Mapping[str, Any], args: Sequence[Any], *, raw: bool = False) -> None: ...


@dataclass(slots=True, frozen=True)
class _DeferredDispatch:
    engine: _Replayable
    defaults: Mapping[str, Any]
    args: tuple[Any, ...]
    raw: bool


class SuppressionCoordinator:
    """Suspend and replay dispatches across every engine sharing it.

    Examples
    --------
    >>> calls = []
    >>> class Engine:
    ...     def process(self, defaults, args, *, raw=False):
    ...         calls.append(args)
    >>> coordinator = SuppressionCoordinator()
    >>> coordinator.pause()
    >>> coordinator.offer(Engine(), {}, ("a",), False)
    True
    >>> coordinator.resume()
    >>> calls
    [('a',)]
    """

    def __init__(self) -> None:
        self._paused = False
        self._queue: Deque[_DeferredDispatch] = deque()
        self._lock = RLock()

    @property
    def paused(self) -> bool:
        return self._paused

    def __len__(self) -> int:
        return len(self._queue)

    def pause(self) -> None:
        """Start holding dispatches."""

        with self._lock:
            self._paused = True

    def resume(self) -> None:
        """Stop holding dispatches and replay the held ones in FIFO order.

        Every queued dispatch runs exactly once and synchronously before this
        method returns.
        """

        with self._lock:
            self._paused = False
            pending = list(self._queue)
            self._queue.clear()
        if pending:
            LOGGER.debug("Replaying %d paused log dispatches", len(pending))
        for item in pending:
            item.engine.process(item.defaults, item.args, raw=item.raw)

    def offer(self, engine: _Replayable, defaults: Mapping[str, Any], args: Sequence[Any], raw: bool) -> bool:
        """Queue the dispatch when paused; return ``True`` if it was queued."""

        with self._lock:
            if not self._paused:
                return False
            self._queue.append(_DeferredDispatch(engine, dict(defaults), tuple(args), raw))
            return True


_SHARED = SuppressionCoordinator()


def default_coordinator() -> SuppressionCoordinator:
    """Return the process-wide coordinator used when none is injected."""

    return _SHARED


__all__ = ["SuppressionCoordinator", "default_coordinator"]
