from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from lib_log_console.domain.formatting import FormatOptions, RenderContext
from lib_log_console.domain.records import LogRecord


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self) -> None:
        self.current = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, ms: float) -> None:
        self.current += timedelta(milliseconds=ms)


class ManualTask:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose callbacks run only through :meth:`fire`."""

    def __init__(self) -> None:
        self.tasks: list[ManualTask] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(delay, callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[ManualTask]:
        return [task for task in self.tasks if not task.cancelled]

    def fire(self, include_cancelled: bool = False) -> None:
        for task in list(self.tasks):
            if include_cancelled or not task.cancelled:
                task.callback()
        self.tasks.clear()


class RecordingRenderer:
    """Renderer keeping every record it receives."""

    def __init__(self) -> None:
        self.records: list[LogRecord] = []
        self.contexts: list[RenderContext] = []

    def render(self, record: LogRecord, context: RenderContext) -> None:
        self.records.append(record)
        self.contexts.append(context)

    @property
    def args(self) -> list[list[object]]:
        return [record.args for record in self.records]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def plain_options() -> FormatOptions:
    return FormatOptions(columns=0, date=False, colors=False)
