"""Clock and timer adapters for the dispatch engine."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from datetime import datetime, timezone

from lib_log_console.application.ports.time import ClockPort, ScheduledTask, SchedulerPort


class SystemClock(ClockPort):
    """Return timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class ThreadingScheduler(SchedulerPort):
    """Run deferred callbacks on daemon :class:`threading.Timer` threads.

    Daemon timers never keep the interpreter alive; repeats still pending
    at exit are flushed by the dispatch engine's :mod:`atexit` hook.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler(SchedulerPort):
    """Schedule deferred callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay, callback)


__all__ = ["AsyncioScheduler", "SystemClock", "ThreadingScheduler"]
