"""CLI behaviour coverage for the click group and its entry point."""

from __future__ import annotations

import re
import sys
from typing import Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_console import __init__conf__
from lib_log_console import cli as cli_mod
from lib_log_console.runtime import summary_info

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, args or [], prog_name=__init__conf__.shell_command)
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"{__init__conf__.shell_command} version {__init__conf__.version}"


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_cli_demo_emits_every_kind(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CI", "1")

    exit_code, stdout, exception = run_cli(["demo", "--plain"])

    assert exception is None
    assert exit_code == 0
    for kind in ("fatal", "error", "warn", "log", "info", "success", "fail", "ready", "start", "debug", "trace", "verbose"):
        assert f"[{kind}] Example of the {kind} kind" in stdout
    assert "silent" not in stdout
    assert " > Box" in stdout
    assert "└─runtime" in stdout
    assert "RuntimeError: Something went wrong" in stdout


def test_cli_demo_respects_level() -> None:
    exit_code, stdout, _ = run_cli(["demo", "--plain", "--level", "warn"])

    assert exit_code == 0
    assert "[warn] Example of the warn kind" in stdout
    assert "[info]" not in stdout


def test_cli_demo_fancy_renders_box_border() -> None:
    exit_code, stdout, _ = run_cli(["demo", "--fancy", "--level", "info"])

    assert exit_code == 0
    plain = strip_ansi(stdout)
    assert "Records of kind box" in plain
    assert any(glyph in plain for glyph in ("╭", "┌"))


def test_cli_box_command() -> None:
    exit_code, stdout, _ = run_cli(["box", "Hello\\nWorld", "--title", "Hi", "--style", "double"])

    assert exit_code == 0
    plain = strip_ansi(stdout)
    assert "╔" in plain
    assert "Hi" in plain.split("\n")[1]
    assert "World" in plain


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["info"] if argv is None else argv)
        if result.exception is not None:
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        recorded["traceback_force_color"] = lib_cli_exit_tools.config.traceback_force_color
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": True, "traceback_force_color": True}
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "info"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "Info for lib_log_console" in captured.out
