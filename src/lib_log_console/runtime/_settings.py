"""Configuration resolution for console instances.

Purpose
-------
Merge explicit keyword arguments with ``LOG_CONSOLE_*`` environment
variables into an immutable :class:`ConsoleSettings`, picking the default
severity and renderer the way the host environment suggests (debug runs log
more, test and CI runs log plainly).

Contents
--------
* :class:`ConsoleSettings` - everything a :class:`LogConsole` is built from.
* :func:`build_console_settings` - environment-aware constructor.
* :func:`resolve_default_level` - ``DEBUG``/test/default level selection.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, TextIO

from lib_log_console.adapters.prompt import ClickPrompt
from lib_log_console.adapters.renderers import DecoratedRenderer, PlainRenderer
from lib_log_console.application.ports import ClockPort, PromptPort, RendererPort, SchedulerPort
from lib_log_console.application.use_cases.pause import SuppressionCoordinator
from lib_log_console.domain.formatting import FormatOptions
from lib_log_console.domain.kinds import DEFAULT_KINDS, LogKind, coerce_kinds
from lib_log_console.domain.levels import DEFAULT_LEVEL, LogLevels, Severity, is_severity

MockFn = Callable[[str, Mapping[str, Any]], Callable[..., Any] | None]

ENV_LEVEL = "LOG_CONSOLE_LEVEL"
ENV_THROTTLE_MS = "LOG_CONSOLE_THROTTLE_MS"
ENV_THROTTLE_MIN = "LOG_CONSOLE_THROTTLE_MIN"
ENV_FANCY = "LOG_CONSOLE_FANCY"
ENV_DATE = "LOG_CONSOLE_DATE"
ENV_COLORS = "LOG_CONSOLE_COLORS"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(slots=True, frozen=True)
class ConsoleSettings:
    """Resolved configuration of one console instance.

    Attributes
    ----------
    level:
        Threshold severity (number or kind name).
    kinds:
        Kind table; replaces the built-in one wholesale.
    defaults:
        Record fields applied to every kind (e.g. ``tag``).
    renderers:
        Renderers receiving every surviving record.
    throttle_ms, throttle_min:
        Duplicate-suppression window and the repeat count tolerated in it.
    stdout, stderr:
        Output streams; ``None`` resolves ``sys.stdout``/``sys.stderr`` at
        write time.
    format_options:
        Presentation switches forwarded to renderers.
    prompt:
        Interactive prompt collaborator; ``None`` disables prompting.
    mock_fn:
        Replacement call-site factory installed at construction.
    coordinator, clock, scheduler:
        Collaborators of the dispatch engine; ``None`` selects the shared
        coordinator, the system clock, and timer threads.
    """

    level: Severity | str = DEFAULT_LEVEL
    kinds: Mapping[str, LogKind] = field(default_factory=lambda: DEFAULT_KINDS)
    defaults: Mapping[str, Any] = field(default_factory=dict)
    renderers: tuple[RendererPort, ...] = ()
    throttle_ms: float = 1000
    throttle_min: int = 5
    stdout: TextIO | None = None
    stderr: TextIO | None = None
    format_options: FormatOptions = field(default_factory=FormatOptions)
    prompt: PromptPort | None = None
    mock_fn: MockFn | None = None
    coordinator: SuppressionCoordinator | None = None
    clock: ClockPort | None = None
    scheduler: SchedulerPort | None = None

    def replace(self, **changes: Any) -> "ConsoleSettings":
        if "renderers" in changes:
            changes["renderers"] = _as_renderer_tuple(changes["renderers"])
        return replace(self, **changes)


def _as_renderer_tuple(renderers: RendererPort | Sequence[RendererPort] | None) -> tuple[RendererPort, ...]:
    if renderers is None:
        return ()
    if isinstance(renderers, RendererPort):
        return (renderers,)
    return tuple(renderers)


def _env_bool(name: str, environ: Mapping[str, str]) -> bool | None:
    """Parse a boolean environment variable; ``None`` when unset."""

    raw = environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag (1/0, true/false, yes/no, on/off), got {raw!r}")


def _env_number(name: str, environ: Mapping[str, str], cast: Callable[[str], Any]) -> Any:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def _env_level(environ: Mapping[str, str], kinds: Mapping[str, LogKind]) -> Severity | None:
    raw = environ.get(ENV_LEVEL)
    if raw is None or not raw.strip():
        return None
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    kind = kinds.get(text.lower())
    if kind is not None and kind.level is not None:
        return kind.level
    raise ValueError(f"{ENV_LEVEL} must be an integer or a log kind name, got {raw!r}")


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in _TRUTHY


def is_test_environment(environ: Mapping[str, str]) -> bool:
    return "PYTEST_CURRENT_TEST" in environ or _flag(environ, "TEST")


def is_ci_environment(environ: Mapping[str, str]) -> bool:
    return _flag(environ, "CI")


def resolve_default_level(environ: Mapping[str, str] | None = None) -> Severity:
    """Return the default threshold for the current environment.

    ``DEBUG`` selects debug (4), test runs select warn (1), everything else
    info (3).

    Examples
    --------
    >>> resolve_default_level({"DEBUG": "1"})
    4
    >>> resolve_default_level({"TEST": "true"})
    1
    >>> resolve_default_level({})
    3
    """

    env = os.environ if environ is None else environ
    if _flag(env, "DEBUG"):
        return LogLevels["debug"]
    if is_test_environment(env):
        return LogLevels["warn"]
    return LogLevels["info"]


def build_console_settings(
    *,
    level: Severity | str | None = None,
    kinds: Mapping[str, LogKind | Mapping[str, Any]] | None = None,
    defaults: Mapping[str, Any] | None = None,
    renderers: RendererPort | Sequence[RendererPort] | None = None,
    fancy: bool | None = None,
    throttle_ms: float | None = None,
    throttle_min: int | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    format_options: FormatOptions | None = None,
    prompt: PromptPort | None | bool = True,
    mock_fn: MockFn | None = None,
    coordinator: SuppressionCoordinator | None = None,
    clock: ClockPort | None = None,
    scheduler: SchedulerPort | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConsoleSettings:
    """Resolve keyword arguments and environment variables into settings.

    Explicit arguments win over ``LOG_CONSOLE_*`` variables, which win over
    environment-derived defaults. ``prompt=True`` installs
    :class:`ClickPrompt`; ``None`` or ``False`` disables prompting.

    Raises
    ------
    ValueError
        When an environment variable holds an invalid value.
    """

    env = os.environ if environ is None else environ
    kind_table = coerce_kinds(kinds)

    if level is None:
        level = _env_level(env, kind_table)
    if level is None:
        level = resolve_default_level(env)
    elif not is_severity(level) and not isinstance(level, str):
        raise ValueError(f"level must be a number or a kind name, got {level!r}")

    if throttle_ms is None:
        throttle_ms = _env_number(ENV_THROTTLE_MS, env, float)
    if throttle_min is None:
        throttle_min = _env_number(ENV_THROTTLE_MIN, env, int)

    if format_options is None:
        date = _env_bool(ENV_DATE, env)
        format_options = FormatOptions(
            date=True if date is None else date,
            colors=_env_bool(ENV_COLORS, env),
        )

    if renderers is None:
        if fancy is None:
            fancy = _env_bool(ENV_FANCY, env)
        if fancy is None:
            fancy = not (is_ci_environment(env) or is_test_environment(env))
        renderers = DecoratedRenderer() if fancy else PlainRenderer()

    if prompt is True:
        prompt_port: PromptPort | None = ClickPrompt()
    elif prompt is False:
        prompt_port = None
    else:
        prompt_port = prompt

    return ConsoleSettings(
        level=level,
        kinds=kind_table,
        defaults=dict(defaults or {}),
        renderers=_as_renderer_tuple(renderers),
        throttle_ms=1000 if throttle_ms is None else throttle_ms,
        throttle_min=5 if throttle_min is None else throttle_min,
        stdout=stdout,
        stderr=stderr,
        format_options=format_options,
        prompt=prompt_port,
        mock_fn=mock_fn,
        coordinator=coordinator,
        clock=clock,
        scheduler=scheduler,
    )


__all__ = [
    "ConsoleSettings",
    "ENV_COLORS",
    "ENV_DATE",
    "ENV_FANCY",
    "ENV_LEVEL",
    "ENV_THROTTLE_MIN",
    "ENV_THROTTLE_MS",
    "MockFn",
    "build_console_settings",
    "is_ci_environment",
    "is_test_environment",
    "resolve_default_level",
]
