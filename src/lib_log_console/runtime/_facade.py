"""The :class:`LogConsole` facade and its per-kind call-sites.

Purpose
-------
Give callers one object with a callable per configured kind
(``log.info(...)``, ``log.warn.raw(...)``) while the filtering, pausing,
throttling and rendering stay in the application layer.

Contents
--------
* :class:`CallSite` - callable bound to one kind; ``.raw`` skips structural
  record detection.
* :class:`LogConsole` - configuration, derivation (``create``,
  ``with_defaults``, ``with_tag``), renderer management, pause/resume,
  mocking, interception, and prompting.

System Role
-----------
Composition root of one console: wires a :class:`DispatchEngine` to the
renderers, clock, scheduler and suppression coordinator named by
:class:`ConsoleSettings`.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from lib_log_console.adapters.intercept import InterceptionHandle, intercept_console, intercept_stream
from lib_log_console.adapters.scheduler import SystemClock, ThreadingScheduler
from lib_log_console.application.ports import RendererPort
from lib_log_console.application.use_cases import DispatchEngine, SuppressionCoordinator, default_coordinator
from lib_log_console.domain.errors import PromptUnavailableError, UnknownKindError
from lib_log_console.domain.formatting import RenderContext
from lib_log_console.domain.kinds import LogKind, coerce_kinds
from lib_log_console.domain.levels import Severity, normalize_level

from ._settings import ConsoleSettings, MockFn

LOGGER = logging.getLogger(__name__)


class CallSite:
    """Callable entry point for one log kind.

    Calling it routes ``args`` with structural record detection; ``raw``
    treats every argument literally.
    """

    __slots__ = ("kind", "defaults", "_call", "_raw")

    def __init__(
        self,
        kind: str,
        defaults: Mapping[str, Any],
        call: Callable[..., Any],
        raw: Callable[..., Any],
    ) -> None:
        self.kind = kind
        self.defaults = defaults
        self._call = call
        self._raw = raw

    def __call__(self, *args: Any) -> Any:
        return self._call(*args)

    def raw(self, *args: Any) -> Any:
        return self._raw(*args)

    def __repr__(self) -> str:
        return f"<CallSite {self.kind!r}>"


class LogConsole:
    """Structured console logger.

    Every configured kind is reachable as an attribute returning a
    :class:`CallSite`; unknown names raise :class:`UnknownKindError`.

    Examples
    --------
    >>> import io
    >>> from lib_log_console.adapters import PlainRenderer
    >>> from lib_log_console.domain import FormatOptions
    >>> out = io.StringIO()
    >>> log = LogConsole(ConsoleSettings(level=3, renderers=(PlainRenderer(),), stdout=out,
    ...                  format_options=FormatOptions(date=False, colors=False)))
    >>> log.with_tag("db").info("connected")
    True
    >>> out.getvalue()
    '[info] [db] connected\\n'
    >>> log.debug("hidden")
    False
    """

    def __init__(self, settings: ConsoleSettings | None = None, **overrides: Any) -> None:
        settings = settings if settings is not None else ConsoleSettings()
        if overrides:
            settings = settings.replace(**overrides)
        kinds = coerce_kinds(settings.kinds)
        self._settings = settings.replace(kinds=kinds)
        self._kinds = kinds
        self._level: Severity = normalize_level(settings.level, kinds)
        self._renderers: list[RendererPort] = list(settings.renderers)
        self._coordinator: SuppressionCoordinator = settings.coordinator or default_coordinator()
        self._engine = DispatchEngine(
            level=lambda: self._level,
            kinds=kinds,
            renderers=lambda: tuple(self._renderers),
            context=self._render_context,
            coordinator=self._coordinator,
            clock=settings.clock or SystemClock(),
            scheduler=settings.scheduler or ThreadingScheduler(),
            throttle_ms=settings.throttle_ms,
            throttle_min=settings.throttle_min,
        )
        self._mock_fn: MockFn | None = None
        self._console_handles: list[InterceptionHandle] = []
        self._std_handles: list[InterceptionHandle] = []
        self._call_sites: dict[str, CallSite] = {}
        self._build_call_sites()
        if settings.mock_fn is not None:
            self.mock_types(settings.mock_fn)

    # ------------------------------------------------------------------ call-sites

    def _kind_defaults(self, name: str, kind: LogKind) -> dict[str, Any]:
        return {**self._settings.defaults, **kind.to_defaults(), "kind": name}

    def _build_call_sites(self) -> None:
        engine = self._engine
        for name, kind in self._kinds.items():
            defaults = MappingProxyType(self._kind_defaults(name, kind))
            self._call_sites[name] = CallSite(
                name,
                defaults,
                lambda *args, _d=defaults: engine.dispatch(_d, args),
                lambda *args, _d=defaults: engine.dispatch(_d, args, raw=True),
            )

    def __getattr__(self, name: str) -> CallSite:
        if name.startswith("_"):
            raise AttributeError(name)
        sites = self.__dict__.get("_call_sites")
        if sites is not None and name in sites:
            return sites[name]
        raise UnknownKindError(name)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._call_sites))

    def call_site(self, name: str) -> CallSite:
        """Return the call-site of kind ``name`` (case-insensitive)."""

        try:
            return self._call_sites[name.lower()]
        except KeyError:
            raise UnknownKindError(name) from None

    @property
    def call_sites(self) -> Mapping[str, CallSite]:
        return MappingProxyType(self._call_sites)

    # ------------------------------------------------------------------ configuration

    @property
    def settings(self) -> ConsoleSettings:
        return self._settings

    @property
    def kinds(self) -> Mapping[str, LogKind]:
        return self._kinds

    @property
    def level(self) -> Severity:
        return self._level

    @level.setter
    def level(self, value: Severity | str) -> None:
        self._level = normalize_level(value, self._kinds, self._level)

    @property
    def renderers(self) -> tuple[RendererPort, ...]:
        return tuple(self._renderers)

    @property
    def engine(self) -> DispatchEngine:
        return self._engine

    def _render_context(self) -> RenderContext:
        return RenderContext(
            options=self._settings.format_options,
            stdout=self._settings.stdout,
            stderr=self._settings.stderr,
        )

    def create(self, **overrides: Any) -> "LogConsole":
        """Return an independent console built from the current settings and ``overrides``.

        The current level and renderer list carry over unless overridden; the
        suppression coordinator is shared so pausing spans every derived
        instance.
        """

        base = self._settings.replace(
            level=self._level,
            renderers=tuple(self._renderers),
            coordinator=self._coordinator,
            mock_fn=self._mock_fn or self._settings.mock_fn,
        )
        return LogConsole(base.replace(**overrides))

    def with_defaults(self, **defaults: Any) -> "LogConsole":
        """Return a console whose records carry ``defaults`` in addition to the current ones."""

        return self.create(defaults={**self._settings.defaults, **defaults})

    def with_tag(self, tag: str) -> "LogConsole":
        """Return a console whose tag is ``tag``, appended as ``parent:tag`` when one exists."""

        current = self._settings.defaults.get("tag")
        return self.with_defaults(tag=f"{current}:{tag}" if current else tag)

    # ------------------------------------------------------------------ renderers

    def add_renderer(self, renderer: RendererPort) -> "LogConsole":
        self._renderers.append(renderer)
        return self

    def remove_renderer(self, renderer: RendererPort | None = None) -> "LogConsole":
        """Remove ``renderer``, or every renderer when called without one."""

        if renderer is None:
            self._renderers.clear()
        elif renderer in self._renderers:
            self._renderers.remove(renderer)
        return self

    def set_renderers(self, renderers: RendererPort | Sequence[RendererPort]) -> "LogConsole":
        self._renderers = [renderers] if isinstance(renderers, RendererPort) else list(renderers)
        return self

    # ------------------------------------------------------------------ pause

    def pause_logs(self) -> None:
        """Queue dispatches from every console sharing this coordinator."""

        self._coordinator.pause()

    def resume_logs(self) -> None:
        """Replay queued dispatches in arrival order and stop queueing."""

        self._coordinator.resume()

    def flush(self) -> None:
        """Render absorbed repeats now instead of waiting for the throttle timer."""

        self._engine.flush()

    # ------------------------------------------------------------------ mocking

    def mock_types(self, mock_fn: MockFn | None = None) -> None:
        """Replace call-sites with what ``mock_fn(kind, kind_defaults)`` returns.

        Kinds for which the factory returns ``None`` keep their call-site.
        Without an argument the previously installed factory is reapplied.
        """

        factory = mock_fn or self._mock_fn or self._settings.mock_fn
        if factory is None:
            return
        self._mock_fn = factory
        for name, kind in self._kinds.items():
            replacement = factory(name, kind.to_defaults())
            if replacement is None:
                continue
            defaults = MappingProxyType(self._kind_defaults(name, kind))
            self._call_sites[name] = CallSite(name, defaults, replacement, replacement)
        LOGGER.debug("Installed mock call-sites from %r", factory)

    # ------------------------------------------------------------------ interception

    def _raw_call_sites(self) -> dict[str, Callable[..., Any]]:
        return {name: site.raw for name, site in self._call_sites.items()}

    def intercept_console(self, target: Any) -> InterceptionHandle:
        """Route ``target``'s kind-named methods into this console."""

        return intercept_console(target, self._raw_call_sites())

    def intercept_std(self) -> InterceptionHandle:
        """Route text written to stdout and stderr into the ``log`` kind."""

        site = self.call_site("log").raw
        handles = [
            intercept_stream(self._settings.stdout or sys.stdout, site),
            intercept_stream(self._settings.stderr or sys.stderr, site),
        ]
        return InterceptionHandle([handle.release for handle in handles], "standard streams")

    def wrap_console(self, target: Any) -> None:
        self._console_handles.append(self.intercept_console(target))

    def restore_console(self) -> None:
        while self._console_handles:
            self._console_handles.pop().release()

    def wrap_std(self) -> None:
        if not self._std_handles:
            self._std_handles.append(self.intercept_std())

    def restore_std(self) -> None:
        while self._std_handles:
            self._std_handles.pop().release()

    def wrap_all(self, target: Any | None = None) -> None:
        if target is not None:
            self.wrap_console(target)
        self.wrap_std()

    def restore_all(self) -> None:
        self.restore_console()
        self.restore_std()

    # ------------------------------------------------------------------ prompt

    def prompt(self, message: str, **options: Any) -> Any:
        """Ask the user a question through the configured prompt collaborator.

        Raises
        ------
        PromptUnavailableError
            When the console was configured without a prompt.
        """

        if self._settings.prompt is None:
            raise PromptUnavailableError("prompt is not supported!")
        return self._settings.prompt(message, options)

    def __repr__(self) -> str:
        return f"LogConsole(level={self._level!r}, kinds={len(self._kinds)}, renderers={len(self._renderers)})"


__all__ = ["CallSite", "LogConsole"]
