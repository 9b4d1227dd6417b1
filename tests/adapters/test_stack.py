from __future__ import annotations

import os

from lib_log_console.adapters.text.stack import (
    capture_stack,
    error_cause,
    error_message,
    error_stack,
    is_error_like,
    parse_stack,
)


class _JsLikeError:
    def __init__(self, message: str, stack: str, cause: object = None) -> None:
        self.message = message
        self.stack = stack
        self.cause = cause


def _raise(exc: BaseException) -> BaseException:
    try:
        raise exc
    except BaseException as caught:  # noqa: BLE001
        return caught


def test_error_like_detection() -> None:
    assert is_error_like(ValueError("x"))
    assert is_error_like(_JsLikeError("m", "Error: m"))
    assert not is_error_like({"message": "m"})
    assert not is_error_like("Error: text")


def test_error_message_of_exceptions_includes_type() -> None:
    assert error_message(ValueError("boom")) == "ValueError: boom"
    assert error_message(_JsLikeError("custom", "")) == "custom"


def test_error_stack_starts_with_header_and_lists_frames() -> None:
    err = _raise(RuntimeError("failed"))

    stack = error_stack(err)

    assert stack.split("\n")[0] == "RuntimeError: failed"
    assert "test_stack.py" in stack


def test_error_stack_without_traceback_is_just_the_header() -> None:
    assert error_stack(KeyError("k")) == "KeyError: 'k'"


def test_explicit_cause_wins_over_context() -> None:
    root = ValueError("root")
    try:
        try:
            raise root
        except ValueError as exc:
            raise RuntimeError("outer") from exc
    except RuntimeError as outer:
        assert error_cause(outer) is root


def test_suppressed_context_is_ignored() -> None:
    try:
        try:
            raise ValueError("inner")
        except ValueError:
            raise RuntimeError("outer") from None
    except RuntimeError as outer:
        assert error_cause(outer) is None


def test_cause_attribute_of_error_like_objects() -> None:
    parent = _JsLikeError("parent", "Error: parent")

    assert error_cause(_JsLikeError("child", "Error: child", cause=parent)) is parent


def test_parse_stack_drops_header_and_cleans_paths() -> None:
    cwd = os.path.join(os.sep, "work", "project")
    stack = "\n".join(
        [
            "Error: boom",
            f'  File "{cwd}{os.sep}app.py", line 3, in main',
            "    run()",
            "",
            "    at handler (file:///srv/app.js:10:2)",
        ]
    )

    assert parse_stack(stack, cwd=cwd) == [
        'File "app.py", line 3, in main',
        "run()",
        "at handler (/srv/app.js:10:2)",
    ]


def test_parse_stack_of_header_only_is_empty() -> None:
    assert parse_stack("Error: only a header") == []


def test_capture_stack_names_the_caller() -> None:
    def helper() -> str:
        return capture_stack("Trace: here", skip=0)

    stack = helper()

    assert stack.startswith("Trace: here\n")
    assert "in helper" in stack
    assert "in capture_stack" not in stack
