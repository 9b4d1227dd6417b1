from __future__ import annotations

from typing import Any

import click
import pytest

from lib_log_console.adapters.prompt import CANCEL, ClickPrompt
from lib_log_console.domain.errors import PromptCancelledError


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def record(self, name: str, **payload: Any) -> None:
        self.calls.append((name, payload))


class _FakeTerminal:
    """Answers prompts from a script; ``click.Abort`` simulates Ctrl-C."""

    def __init__(self, recorder: _Recorder, answer: Any = None, abort: bool = False) -> None:
        self.recorder = recorder
        self.answer = answer
        self.abort = abort
        self.echoed: list[str] = []

    def prompt(self, text: str, **kwargs: Any) -> Any:
        self.recorder.record("prompt", text=text, **kwargs)
        if self.abort:
            raise click.Abort()
        value_proc = kwargs.get("value_proc")
        return value_proc(self.answer) if value_proc else self.answer

    def confirm(self, text: str, **kwargs: Any) -> Any:
        self.recorder.record("confirm", text=text, **kwargs)
        if self.abort:
            raise click.Abort()
        return self.answer

    def echo(self, text: str) -> None:
        self.echoed.append(text)


def _prompt(terminal: _FakeTerminal) -> ClickPrompt:
    return ClickPrompt(prompt_fn=terminal.prompt, confirm_fn=terminal.confirm, echo_fn=terminal.echo)


def test_text_prompt_passes_default() -> None:
    recorder = _Recorder()
    terminal = _FakeTerminal(recorder, answer="Ada")

    assert _prompt(terminal)("Name?", {"default": "Bob"}) == "Ada"
    assert recorder.calls == [("prompt", {"text": "Name?", "default": "Bob", "type": str})]


def test_confirm_prompt_uses_initial_as_default() -> None:
    recorder = _Recorder()
    terminal = _FakeTerminal(recorder, answer=True)

    assert _prompt(terminal)("Continue?", {"type": "confirm", "initial": True}) is True
    assert recorder.calls[0][1]["default"] is True


def test_select_prompt_lists_options_and_restricts_choices() -> None:
    recorder = _Recorder()
    terminal = _FakeTerminal(recorder, answer="b")
    options = {"type": "select", "options": ["a", {"value": "b", "label": "Bee", "hint": "second"}]}

    assert _prompt(terminal)("Pick", options) == "b"
    assert terminal.echoed == ["  a", "  b: Bee (second)"]
    choice = recorder.calls[0][1]["type"]
    assert isinstance(choice, click.Choice)
    assert list(choice.choices) == ["a", "b"]


def test_multiselect_parses_comma_separated_answers() -> None:
    terminal = _FakeTerminal(_Recorder(), answer="a, c")

    assert _prompt(terminal)("Pick", {"type": "multiselect", "options": ["a", "b", "c"]}) == ["a", "c"]


@pytest.mark.parametrize(
    ("answer", "required", "message"),
    [("a, z", True, "unknown option"), ("", True, "at least one")],
)
def test_multiselect_rejects_invalid_answers(answer: str, required: bool, message: str) -> None:
    terminal = _FakeTerminal(_Recorder(), answer=answer)

    with pytest.raises(click.BadParameter, match=message):
        _prompt(terminal)("Pick", {"type": "multiselect", "options": ["a", "b"], "required": required})


def test_optional_multiselect_accepts_nothing() -> None:
    terminal = _FakeTerminal(_Recorder(), answer="")

    assert _prompt(terminal)("Pick", {"type": "multiselect", "options": ["a"], "required": False}) == []


@pytest.mark.parametrize(
    ("options", "expected"),
    [
        ({"cancel": "default", "default": "fallback"}, "fallback"),
        ({"initial": "first"}, "first"),
        ({"cancel": "undefined"}, None),
        ({"cancel": "null", "default": "x"}, None),
    ],
)
def test_cancellation_policies_return_values(options: dict[str, Any], expected: Any) -> None:
    terminal = _FakeTerminal(_Recorder(), abort=True)

    assert _prompt(terminal)("Name?", options) == expected


def test_symbol_policy_returns_cancel_marker() -> None:
    terminal = _FakeTerminal(_Recorder(), abort=True)

    result = _prompt(terminal)("Continue?", {"type": "confirm", "cancel": "symbol"})

    assert result is CANCEL
    assert not result
    assert repr(result) == "CANCEL"


def test_reject_policy_raises() -> None:
    terminal = _FakeTerminal(_Recorder(), abort=True)

    with pytest.raises(PromptCancelledError, match="Prompt cancelled."):
        _prompt(terminal)("Name?", {"cancel": "reject"})


@pytest.mark.parametrize(
    ("options", "message"),
    [
        ({"type": "password"}, "Invalid prompt type"),
        ({"cancel": "ignore"}, "Invalid cancel policy"),
        ({"type": "select", "options": []}, "at least one option"),
    ],
)
def test_invalid_prompt_options_are_rejected(options: dict[str, Any], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        _prompt(_FakeTerminal(_Recorder(), answer="x"))("Q", options)
