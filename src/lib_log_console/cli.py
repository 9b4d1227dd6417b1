"""Command line interface for inspecting and demonstrating the console logger.

Purpose
-------
Offer a small ``lib_log_console`` command: print package metadata, render
every log kind with the current environment's renderer, and draw boxes from
the shell.

Contents
--------
* :func:`cli` - click group carrying the global ``--traceback`` and
  ``--use-dotenv`` switches.
* ``info``, ``demo``, ``box`` subcommands.
* :func:`main` - entry point running the group through
  :func:`lib_cli_exit_tools.run_cli` and restoring traceback preferences.
"""

from __future__ import annotations

import os
from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as log_config
from .adapters.text import BOX_STYLE_PRESETS, BoxStyle, box, create_colors, format_tree
from .runtime import create_console, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load environment variables from a nearby .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Structured console logging toolkit."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if log_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(log_config.DOTENV_ENV_VAR)):
        log_config.enable_dotenv()

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info")
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("demo")
@click.option("--fancy/--plain", default=None, help="Force the decorated or the plain renderer.")
@click.option("--level", default="verbose", show_default=True, help="Threshold as number or kind name.")
def cli_demo(fancy: bool | None, level: str) -> None:
    """Emit one record per log kind, followed by a box and a tree."""

    threshold: int | str = int(level) if level.lstrip("-").isdigit() else level
    log = create_console(level=threshold, fancy=fancy, prompt=False)
    for kind in log.kinds:
        if kind == "box":
            continue
        log.call_site(kind)(f"Example of the {kind} kind")
    log.box({"title": "Box", "message": "Records of kind box\nare drawn in a border"})
    log.log("Tree:\n" + format_tree(["domain", {"text": "adapters", "children": ["renderers", "text"]}, "runtime"]))
    log.error(RuntimeError("Something went wrong"))
    log.flush()


@cli.command("box")
@click.argument("text")
@click.option("--title", default=None, help="Title drawn into the top border.")
@click.option(
    "--style",
    "border_style",
    type=click.Choice(sorted(BOX_STYLE_PRESETS)),
    default="rounded",
    show_default=True,
)
@click.option("--color", "border_color", default="white", show_default=True, help="Border colour name.")
def cli_box(text: str, title: str | None, border_style: str, border_color: str) -> None:
    """Draw TEXT inside a border (use \\n for line breaks)."""

    style = BoxStyle(border_style=border_style, border_color=border_color)
    click.echo(box(text.replace("\\n", "\n"), title=title, style=style, palette=create_colors()))


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
