"""Click-backed implementation of the interactive prompt collaborator.

Purpose
-------
Answer ``LogConsole.prompt`` calls in four modes (free text, yes/no
confirmation, single choice, multiple choice) and apply the configured
cancellation policy when the user aborts with Ctrl-C or end-of-input.

Contents
--------
* :data:`CANCEL` - marker returned by the ``"symbol"`` policy.
* :class:`ClickPrompt` - :class:`PromptPort` adapter.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import click

from lib_log_console.application.ports.prompt import PromptPort
from lib_log_console.domain.errors import PromptCancelledError

LOGGER = logging.getLogger(__name__)

CANCEL_POLICIES = frozenset({"reject", "default", "undefined", "null", "symbol"})


class _CancelMarker:
    __slots__ = ()

    def __repr__(self) -> str:
        return "CANCEL"

    def __bool__(self) -> bool:
        return False


CANCEL = _CancelMarker()
#: Returned instead of an answer when the ``"symbol"`` cancellation policy applies.


def _option_values(options: Sequence[str | Mapping[str, Any]]) -> list[tuple[str, str, str | None]]:
    values: list[tuple[str, str, str | None]] = []
    for option in options:
        if isinstance(option, str):
            values.append((option, option, None))
        else:
            value = str(option["value"])
            values.append((value, str(option.get("label", value)), option.get("hint")))
    return values


class ClickPrompt(PromptPort):
    """Ask questions on the terminal through :mod:`click`.

    Parameters
    ----------
    prompt_fn, confirm_fn, echo_fn:
        Injection points defaulting to :func:`click.prompt`,
        :func:`click.confirm`, and :func:`click.echo`.
    """

    def __init__(
        self,
        *,
        prompt_fn: Callable[..., Any] = click.prompt,
        confirm_fn: Callable[..., Any] = click.confirm,
        echo_fn: Callable[..., Any] = click.echo,
    ) -> None:
        self._prompt = prompt_fn
        self._confirm = confirm_fn
        self._echo = echo_fn

    def __call__(self, message: str, options: Mapping[str, Any]) -> Any:
        policy = options.get("cancel") or "default"
        if policy not in CANCEL_POLICIES:
            raise ValueError(f"Invalid cancel policy: {policy!r}")
        mode = options.get("type") or "text"
        handlers = {
            "text": self._ask_text,
            "confirm": self._ask_confirm,
            "select": self._ask_select,
            "multiselect": self._ask_multiselect,
        }
        handler = handlers.get(mode)
        if handler is None:
            raise ValueError(f"Invalid prompt type: {mode!r}")
        try:
            return handler(message, options)
        except click.Abort:
            LOGGER.debug("Prompt %r cancelled; applying %r policy", message, policy)
            return self._on_cancel(policy, options)

    @staticmethod
    def _on_cancel(policy: str, options: Mapping[str, Any]) -> Any:
        if policy == "reject":
            raise PromptCancelledError()
        if policy in {"undefined", "null"}:
            return None
        if policy == "symbol":
            return CANCEL
        default = options.get("default")
        return default if default is not None else options.get("initial")

    def _ask_text(self, message: str, options: Mapping[str, Any]) -> str:
        default = options.get("default")
        if default is None:
            default = options.get("initial")
        return self._prompt(message, default=default, type=str)

    def _ask_confirm(self, message: str, options: Mapping[str, Any]) -> bool:
        return bool(self._confirm(message, default=bool(options.get("initial", False))))

    def _ask_select(self, message: str, options: Mapping[str, Any]) -> str:
        choices = _option_values(options.get("options") or [])
        if not choices:
            raise ValueError("select prompts need at least one option")
        self._describe(choices)
        return self._prompt(message, default=options.get("initial"), type=click.Choice([value for value, _, _ in choices]))

    def _ask_multiselect(self, message: str, options: Mapping[str, Any]) -> list[str]:
        choices = _option_values(options.get("options") or [])
        if not choices:
            raise ValueError("multiselect prompts need at least one option")
        allowed = [value for value, _, _ in choices]
        required = bool(options.get("required", True))
        initial = options.get("initial")
        self._describe(choices)

        def _parse(raw: str) -> list[str]:
            picked = [item.strip() for item in str(raw).split(",") if item.strip()]
            unknown = [item for item in picked if item not in allowed]
            if unknown:
                raise click.BadParameter(f"unknown option(s): {', '.join(unknown)}")
            if required and not picked:
                raise click.BadParameter("select at least one option")
            return picked

        default = ",".join(initial) if initial else ("" if not required else None)
        return self._prompt(
            f"{message} (comma separated)",
            default=default,
            show_default=bool(default),
            value_proc=_parse,
        )

    def _describe(self, choices: list[tuple[str, str, str | None]]) -> None:
        for value, label, hint in choices:
            suffix = f" ({hint})" if hint else ""
            self._echo(f"  {value}: {label}{suffix}" if label != value else f"  {value}{suffix}")


__all__ = ["CANCEL", "CANCEL_POLICIES", "ClickPrompt"]
