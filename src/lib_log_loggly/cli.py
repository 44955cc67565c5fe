"""Command-line interface for shipping ad-hoc events to Loggly.

Purpose
-------
Offer an operator-facing way to verify credentials and tags: ``send`` ships
one event through the same appender the library uses and waits for the
acknowledgement before exiting.

Contents
--------
* :func:`cli` – Click group with global traceback and ``.env`` toggles.
* ``info`` / ``send`` – subcommands.
* :func:`main` – entry point wrapping :func:`lib_cli_exit_tools.run_cli`.

System Role
-----------
Presentation layer only; all shipping behaviour comes from
:func:`lib_log_loggly.runtime.configure`.
"""

from __future__ import annotations

import threading
from typing import Any, Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.markup import escape

from . import __init__conf__
from . import config as log_config
from .__init__conf__ import summary_info
from .adapters.layouts import LAYOUTS
from .domain import ConfigurationError
from .runtime import configure, get_logger

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
LEVEL_CHOICES = ("trace", "debug", "info", "warn", "error", "fatal", "mark")


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before reading LOGGLY_* variables (default: ${log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Ship log events to Loggly."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if use_dotenv is None:
        use_dotenv = log_config.dotenv_requested()
    if use_dotenv:
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message", nargs=-1, required=True)
@click.option("--tag", "-t", "tags", multiple=True, help="Tag attached to this event; repeatable.")
@click.option("--level", type=click.Choice(LEVEL_CHOICES), default="info", show_default=True)
@click.option("--category", default="cli", show_default=True, help="Category recorded on the event.")
@click.option("--token", default=None, help="Customer token (default: $LOGGLY_TOKEN).")
@click.option("--subdomain", default=None, help="Account subdomain (default: $LOGGLY_SUBDOMAIN).")
@click.option("--host", default=None, help="Inputs host (default: $LOGGLY_HOST or logs-01.loggly.com).")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds for the request.")
@click.option("--layout", type=click.Choice(LAYOUTS.names()), default=None, help="Layout used to render MESSAGE.")
@click.option("--wait", type=float, default=30.0, show_default=True, help="Seconds to wait for the acknowledgement.")
def cli_send(
    message: tuple[str, ...],
    tags: tuple[str, ...],
    level: str,
    category: str,
    token: str | None,
    subdomain: str | None,
    host: str | None,
    timeout: float | None,
    layout: str | None,
    wait: float,
) -> None:
    """Send MESSAGE as one event and wait until Loggly acknowledges it."""

    console = Console(highlight=False)
    options = log_config.options_from_env()
    overrides: dict[str, Any] = {"token": token, "subdomain": subdomain, "host": host, "timeout": timeout}
    options.update({key: value for key, value in overrides.items() if value is not None})
    if layout is not None:
        options["layout"] = {"type": layout}

    failures: list[str] = []

    def record(name: str, payload: dict[str, Any]) -> None:
        if name == "send_failed":
            failures.append(str(payload.get("error")))

    try:
        appender = configure(options, diagnostic=record)
    except ConfigurationError as exc:
        raise click.UsageError(str(exc)) from exc

    args: list[Any] = list(message)
    if tags:
        args.append({"tags": list(tags)})
    get_logger(category, appender).log(level, *args)

    drained = threading.Event()
    appender.shutdown(drained.set)
    if not drained.wait(wait):
        raise click.ClickException(f"no acknowledgement from {appender.config.host} within {wait:g}s")
    if failures:
        console.print(f"[bold red]failed[/bold red] {escape(failures[0])}")
        raise SystemExit(1)
    console.print(f"[green]delivered[/green] to {appender.config.host} ({appender.config.subdomain})")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through :func:`lib_cli_exit_tools.run_cli`.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).
    restore_traceback:
        Reset the global traceback preferences afterwards so embedding hosts
        keep their own settings.

    Returns
    -------
    int
        Process exit code.
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
