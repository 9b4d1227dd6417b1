"""Use case dispatching one log call through filtering, throttling, and fan-out.

Purpose
-------
Implement the stateful core of the console logger: severity filtering,
pause handling, duplicate suppression with a deferred flush, and fan-out to
every registered renderer.

Contents
--------
* :class:`ThrottleState` - bookkeeping for the last record seen.
* :class:`DispatchEngine` - the per-instance dispatcher.
* :func:`flush_pending_engines` - exit hook surfacing absorbed repeats.

System Role
-----------
Created by the runtime facade; every kind call-site ends up in
:meth:`DispatchEngine.dispatch`.

Throttling
----------
Identical records (same kind, tag, and arguments) arriving less than
``throttle_ms`` apart are counted. The first ``throttle_min`` occurrences
render immediately; further ones are absorbed and surface once, either when a
different record arrives or when the window elapses without new activity,
annotated with ``(repeated N times)`` when ``N > 1``. Engines still holding
absorbed repeats when the interpreter exits are flushed by an
:mod:`atexit` hook.
"""

from __future__ import annotations

import atexit
import logging
import weakref
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from threading import RLock
from typing import Any

from lib_log_console.application.ports import ClockPort, RendererPort, ScheduledTask, SchedulerPort
from lib_log_console.domain.formatting import RenderContext
from lib_log_console.domain.levels import SILENT, Severity, normalize_level
from lib_log_console.domain.records import LogRecord, build_record, fingerprint

from .pause import SuppressionCoordinator

LOGGER = logging.getLogger(__name__)

_PENDING_FLUSH: "weakref.WeakSet[DispatchEngine]" = weakref.WeakSet()


@dataclass(slots=True)
class ThrottleState:
    """Mutable bookkeeping of the duplicate-suppression state machine."""

    record: LogRecord | None = None
    fingerprint: str | None = None
    count: int = 0
    timestamp: datetime | None = None
    task: ScheduledTask | None = None
    generation: int = 0


class DispatchEngine:
    """Filter, throttle, and fan out records for one console instance."""

    def __init__(
        self,
        *,
        level: Callable[[], Severity],
        kinds: Mapping[str, Any],
        renderers: Callable[[], Sequence[RendererPort]],
        context: Callable[[], RenderContext],
        coordinator: SuppressionCoordinator,
        clock: ClockPort,
        scheduler: SchedulerPort,
        throttle_ms: float = 1000,
        throttle_min: int = 5,
    ) -> None:
        if throttle_ms < 0:
            raise ValueError("throttle_ms must not be negative")
        if throttle_min < 0:
            raise ValueError("throttle_min must not be negative")
        self._level = level
        self._kinds = kinds
        self._renderers = renderers
        self._context = context
        self._coordinator = coordinator
        self._clock = clock
        self._scheduler = scheduler
        self._throttle_ms = throttle_ms
        # the first occurrence always renders
        self._throttle_min = max(throttle_min, 1)
        self._state = ThrottleState()
        self._lock = RLock()

    @property
    def state(self) -> ThrottleState:
        return self._state

    def admits(self, level: Severity) -> bool:
        """Return ``True`` when ``level`` passes the current threshold."""

        threshold = self._level()
        if threshold == SILENT or level == SILENT:
            return False
        return not level > threshold

    def dispatch(self, defaults: Mapping[str, Any], args: Sequence[Any], *, raw: bool = False) -> bool:
        """Handle one call-site invocation.

        Returns ``False`` when the record was dropped by the severity filter,
        ``True`` when it was processed or queued while paused.
        """

        level = normalize_level(defaults.get("level"), self._kinds, 0)
        if not self.admits(level):
            return False
        if self._coordinator.offer(self, defaults, args, raw):
            return True
        self.process(defaults, args, raw=raw)
        return True

    def process(self, defaults: Mapping[str, Any], args: Sequence[Any], *, raw: bool = False) -> None:
        """Build the record now and run it through the throttle."""

        record = build_record(defaults, args, raw=raw, timestamp=self._clock.now(), kinds=self._kinds)
        self._throttle(record)

    def flush(self) -> None:
        """Render any absorbed repeats immediately and cancel the pending timer."""

        with self._lock:
            self._cancel_pending()
            self._flush_repeats()

    def _throttle(self, record: LogRecord) -> None:
        with self._lock:
            state = self._state
            self._cancel_pending()
            elapsed_ms = 0.0
            if state.timestamp is not None:
                elapsed_ms = (record.timestamp - state.timestamp).total_seconds() * 1000
            state.timestamp = record.timestamp

            key = fingerprint(record)
            if key is None:
                LOGGER.debug("Record of kind %r is not serializable; duplicate check skipped", record.kind)
            duplicate = elapsed_ms < self._throttle_ms and key is not None and key == state.fingerprint
            state.fingerprint = key
            if duplicate:
                state.count += 1
                if state.count > self._throttle_min:
                    self._schedule_flush()
                    return

            self._flush_repeats()
            if not duplicate:
                state.count = 1
            state.record = record
            self._fan_out(record)

    def _flush_repeats(self) -> None:
        state = self._state
        repeated = state.count - self._throttle_min
        if state.record is None or repeated <= 0:
            return
        args = list(state.record.args)
        if repeated > 1:
            args.append(f"(repeated {repeated} times)")
        state.count = 1
        self._fan_out(state.record.replace(args=args))

    def _schedule_flush(self) -> None:
        state = self._state
        state.generation += 1
        generation = state.generation
        state.task = self._scheduler.call_later(self._throttle_ms / 1000, lambda: self._deferred_flush(generation))
        _PENDING_FLUSH.add(self)

    def _deferred_flush(self, generation: int) -> None:
        with self._lock:
            if generation != self._state.generation:
                LOGGER.debug("Skipping stale throttle flush %d", generation)
                return
            self._state.task = None
            _PENDING_FLUSH.discard(self)
            self._flush_repeats()

    def _cancel_pending(self) -> None:
        state = self._state
        state.generation += 1
        _PENDING_FLUSH.discard(self)
        if state.task is not None:
            state.task.cancel()
            state.task = None

    def _fan_out(self, record: LogRecord) -> None:
        context = self._context()
        for renderer in list(self._renderers()):
            renderer.render(record, context)


def flush_pending_engines() -> int:
    """Flush every engine still holding absorbed repeats; return how many.

    Registered with :mod:`atexit` so repeats absorbed right before the
    interpreter exits still reach the renderers. A renderer failing at exit
    has no caller left to propagate to and is logged instead.
    """

    engines = list(_PENDING_FLUSH)
    for engine in engines:
        try:
            engine.flush()
        except Exception:
            LOGGER.warning("Flushing absorbed repeats at exit failed", exc_info=True)
    return len(engines)


atexit.register(flush_pending_engines)


__all__ = ["DispatchEngine", "ThrottleState", "flush_pending_engines"]
