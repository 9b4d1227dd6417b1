"""Ports for time and deferred execution."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current timestamp."""

    def now(self) -> datetime: ...


@runtime_checkable
class ScheduledTask(Protocol):
    """Handle of a pending deferred call."""

    def cancel(self) -> None: ...


@runtime_checkable
class SchedulerPort(Protocol):
    """Run a callback once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask: ...


__all__ = ["ClockPort", "ScheduledTask", "SchedulerPort"]
