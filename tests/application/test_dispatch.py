from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest
from conftest import FakeClock, ManualScheduler, RecordingRenderer

from lib_log_console.application.use_cases import DispatchEngine, SuppressionCoordinator
from lib_log_console.domain.formatting import RenderContext
from lib_log_console.domain.kinds import DEFAULT_KINDS
from lib_log_console.domain.levels import SILENT, VERBOSE, LogLevels, Severity

INFO = {"kind": "info", "level": 3}


class _Harness:
    def __init__(self, clock: FakeClock, scheduler: ManualScheduler, *, level: Severity = 3, throttle_min: int = 5) -> None:
        self.level = level
        self.renderer = RecordingRenderer()
        self.renderers: list[Any] = [self.renderer]
        self.clock = clock
        self.scheduler = scheduler
        self.engine = DispatchEngine(
            level=lambda: self.level,
            kinds=DEFAULT_KINDS,
            renderers=lambda: self.renderers,
            context=RenderContext,
            coordinator=SuppressionCoordinator(),
            clock=clock,
            scheduler=scheduler,
            throttle_ms=1000,
            throttle_min=throttle_min,
        )

    def send(self, defaults: dict[str, Any], *args: Any, gap_ms: float = 10) -> bool:
        self.clock.advance(gap_ms)
        return self.engine.dispatch(defaults, args)

    @property
    def args(self) -> list[list[object]]:
        return self.renderer.args


@pytest.fixture
def harness(clock: FakeClock, scheduler: ManualScheduler) -> _Harness:
    return _Harness(clock, scheduler)


def _kind(name: str) -> dict[str, Any]:
    return {"kind": name, "level": LogLevels[name]}


def test_records_at_or_below_threshold_render(harness: _Harness) -> None:
    assert harness.send(_kind("error"), "e") is True
    assert harness.send(_kind("info"), "i") is True
    assert harness.send(_kind("debug"), "d") is False

    assert harness.args == [["e"], ["i"]]


def test_silent_threshold_drops_everything(harness: _Harness) -> None:
    harness.level = SILENT

    assert harness.send(_kind("fatal"), "x") is False
    assert harness.args == []


def test_silent_kind_never_renders(harness: _Harness) -> None:
    harness.level = VERBOSE

    assert harness.send(_kind("silent"), "x") is False
    assert harness.send(_kind("verbose"), "v") is True
    assert harness.args == [["v"]]


def test_threshold_change_applies_to_next_dispatch(harness: _Harness) -> None:
    harness.send(_kind("debug"), "hidden")
    harness.level = 4
    harness.send(_kind("debug"), "shown")

    assert harness.args == [["shown"]]


def test_kind_without_level_is_filtered_as_zero(harness: _Harness) -> None:
    harness.level = 0

    assert harness.send({"kind": "custom"}, "x") is True


def test_repeats_beyond_minimum_are_absorbed_then_summarised(harness: _Harness) -> None:
    for _ in range(10):
        harness.send(INFO, "same")
    assert harness.args == [["same"]] * 5

    harness.send(INFO, "different")

    assert harness.args == [["same"]] * 5 + [["same", "(repeated 5 times)"], ["different"]]


def test_single_absorbed_repeat_is_not_annotated(harness: _Harness) -> None:
    for _ in range(6):
        harness.send(INFO, "same")
    harness.send(INFO, "other")

    assert harness.args == [["same"]] * 5 + [["same"], ["other"]]


def test_deferred_flush_surfaces_absorbed_repeats(harness: _Harness, scheduler: ManualScheduler) -> None:
    for _ in range(8):
        harness.send(INFO, "same")

    assert len(scheduler.pending) == 1
    assert scheduler.pending[0].delay == pytest.approx(1.0)

    scheduler.fire()

    assert harness.args[-1] == ["same", "(repeated 3 times)"]
    assert len(harness.args) == 6


def test_each_absorbed_record_reschedules_the_flush(harness: _Harness, scheduler: ManualScheduler) -> None:
    for _ in range(7):
        harness.send(INFO, "same")

    assert len(scheduler.tasks) == 2
    assert scheduler.tasks[0].cancelled is True
    assert len(scheduler.pending) == 1


def test_stale_flush_callback_is_ignored(harness: _Harness, scheduler: ManualScheduler) -> None:
    for _ in range(7):
        harness.send(INFO, "same")
    stale = scheduler.tasks[0]
    harness.send(INFO, "other")
    rendered = list(harness.args)

    stale.callback()

    assert harness.args == rendered


def test_flush_surfaces_repeats_exactly_once(harness: _Harness, scheduler: ManualScheduler) -> None:
    for _ in range(9):
        harness.send(INFO, "same")

    harness.engine.flush()
    scheduler.fire(include_cancelled=True)
    harness.engine.flush()

    summaries = [args for args in harness.args if len(args) == 2]
    assert summaries == [["same", "(repeated 4 times)"]]


def test_records_outside_the_window_are_not_duplicates(harness: _Harness) -> None:
    for _ in range(8):
        harness.send(INFO, "same", gap_ms=1500)

    assert harness.args == [["same"]] * 8


def test_tag_and_kind_take_part_in_duplicate_detection(harness: _Harness) -> None:
    for index in range(12):
        harness.send({**INFO, "tag": f"t{index % 2}"}, "same")

    assert len(harness.args) == 12


def test_throttle_minimum_zero_still_renders_the_first_occurrence(clock: FakeClock, scheduler: ManualScheduler) -> None:
    harness = _Harness(clock, scheduler, throttle_min=0)
    for _ in range(3):
        harness.send(INFO, "same")

    assert harness.args == [["same"]]
    scheduler.fire()
    assert harness.args == [["same"], ["same", "(repeated 2 times)"]]


def test_cyclic_arguments_render_without_throttling(harness: _Harness) -> None:
    cyclic: list[object] = []
    cyclic.append(cyclic)
    for _ in range(7):
        harness.send(INFO, cyclic)

    assert len(harness.args) == 7


def test_fan_out_reaches_renderers_in_order(harness: _Harness) -> None:
    second = RecordingRenderer()
    order: list[str] = []

    class _Tracer:
        def __init__(self, name: str) -> None:
            self.name = name

        def render(self, record: Any, context: Any) -> None:
            order.append(self.name)

    harness.renderers[:] = [_Tracer("a"), second, _Tracer("b")]
    harness.send(INFO, "x")

    assert order == ["a", "b"]
    assert second.args == [["x"]]


def test_renderer_errors_propagate_to_the_caller(harness: _Harness) -> None:
    class _Broken:
        def render(self, record: Any, context: Any) -> None:
            raise RuntimeError("renderer failed")

    harness.renderers[:] = [_Broken()]

    with pytest.raises(RuntimeError, match="renderer failed"):
        harness.send(INFO, "x")


def test_renderer_receives_engine_timestamp(harness: _Harness, clock: FakeClock) -> None:
    harness.send(INFO, "x")

    assert harness.renderer.records[0].timestamp == clock.now()


def test_naive_timestamp_in_record_does_not_break_throttle(harness: _Harness) -> None:
    harness.send(INFO, "first")
    harness.send(INFO, {"message": "second", "timestamp": datetime(2025, 1, 1)})
    harness.send(INFO, "third")

    assert harness.args == [["first"], ["second"], ["third"]]
    assert all(record.timestamp.tzinfo is not None for record in harness.renderer.records)


@pytest.mark.parametrize(("throttle_ms", "throttle_min"), [(-1, 5), (1000, -1)])
def test_negative_throttle_parameters_are_rejected(
    clock: FakeClock, scheduler: ManualScheduler, throttle_ms: float, throttle_min: int
) -> None:
    with pytest.raises(ValueError, match="must not be negative"):
        DispatchEngine(
            level=lambda: 3,
            kinds=DEFAULT_KINDS,
            renderers=lambda: (),
            context=RenderContext,
            coordinator=SuppressionCoordinator(),
            clock=clock,
            scheduler=scheduler,
            throttle_ms=throttle_ms,
            throttle_min=throttle_min,
        )
