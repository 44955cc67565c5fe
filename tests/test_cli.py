"""CLI behaviour coverage for the ``send`` and ``info`` commands."""

from __future__ import annotations

import re
import sys
from typing import Any, Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_loggly import __init__conf__
from lib_log_loggly import cli as cli_mod
from lib_log_loggly import runtime
from lib_log_loggly.__init__conf__ import summary_info

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


class _AnsweringTransport:
    """Transport acknowledging every send as soon as it is made."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        self.sent: list[tuple[dict[str, Any], list[str]]] = []
        self.closed = False

    def send(self, record: Any, tags: Any, callback: Callable[[BaseException | None], None]) -> None:
        self.sent.append((dict(record), list(tags)))
        callback(self.error)

    def close(self) -> None:
        self.closed = True


class _SilentTransport(_AnsweringTransport):
    def send(self, record: Any, tags: Any, callback: Callable[[BaseException | None], None]) -> None:
        self.sent.append((dict(record), list(tags)))


@pytest.fixture(autouse=True)
def _clean_loggly_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for variable in (*cli_mod.log_config.ENV_OPTIONS, cli_mod.log_config.DOTENV_ENV_VAR):
        monkeypatch.delenv(variable, raising=False)


def _install(monkeypatch: pytest.MonkeyPatch, transport: _AnsweringTransport) -> list[dict[str, Any]]:
    seen: list[dict[str, Any]] = []

    def fake_configure(options: dict[str, Any], **kwargs: Any) -> runtime.LogglyAppender:
        seen.append(dict(options))
        return runtime.configure(options, transport=transport, hostname="box", **kwargs)

    monkeypatch.setattr(cli_mod, "configure", fake_configure)
    return seen


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click command with ``CliRunner`` and capture output."""

    runner = CliRunner()
    original_argv = sys.argv
    sys.argv = [__init__conf__.shell_command]
    try:
        result = runner.invoke(
            cli_mod.cli,
            args or [],
            prog_name=__init__conf__.shell_command,
        )
    finally:
        sys.argv = original_argv
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["info"])

    assert result.exit_code == 0
    assert result.output == summary_info()
    assert re.search(r"^    name\s+= lib_log_loggly$", result.output, re.MULTILINE)


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"{__init__conf__.shell_command} version {__init__conf__.version}"


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_send_delivers_message_with_tags(monkeypatch: pytest.MonkeyPatch) -> None:
    transport = _AnsweringTransport()
    seen = _install(monkeypatch, transport)

    exit_code, stdout, _ = run_cli(
        ["send", "--token", "tok", "--subdomain", "acme", "-t", "web", "--tag", "smoke", "--level", "warn", "disk", "full"]
    )

    assert exit_code == 0
    assert "delivered to logs-01.loggly.com (acme)" in strip_ansi(stdout)
    record, tags = transport.sent[0]
    assert record["msg"] == "disk full"
    assert record["level"] == "WARN"
    assert record["category"] == "cli"
    assert tags == ["web", "smoke"]
    assert transport.closed is True
    assert seen[0]["token"] == "tok"


def test_send_reads_credentials_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    transport = _AnsweringTransport()
    seen = _install(monkeypatch, transport)
    monkeypatch.setenv("LOGGLY_TOKEN", "env-token")
    monkeypatch.setenv("LOGGLY_SUBDOMAIN", "env-sub")
    monkeypatch.setenv("LOGGLY_TAGS", "svc,prod")

    exit_code, stdout, _ = run_cli(["send", "--subdomain", "flag-sub", "hello"])

    assert exit_code == 0
    assert seen[0]["token"] == "env-token"
    assert seen[0]["subdomain"] == "flag-sub"
    assert seen[0]["tags"] == ["svc", "prod"]
    assert "(flag-sub)" in strip_ansi(stdout)


def test_send_passes_layout_choice(monkeypatch: pytest.MonkeyPatch) -> None:
    transport = _AnsweringTransport()
    seen = _install(monkeypatch, transport)

    exit_code, _stdout, _ = run_cli(["send", "--token", "t", "--subdomain", "s", "--layout", "basic", "--category", "ops", "hi"])

    assert exit_code == 0
    assert seen[0]["layout"] == {"type": "basic"}
    assert transport.sent[0][0]["msg"].endswith("[INFO] ops - hi")


def test_send_without_credentials_is_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _AnsweringTransport())

    exit_code, stdout, _ = run_cli(["send", "hello"])

    assert exit_code == 2
    assert "missing required option 'token'" in stdout


def test_send_reports_failed_delivery(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _AnsweringTransport(error=RuntimeError("boom")))

    exit_code, stdout, _ = run_cli(["send", "--token", "t", "--subdomain", "s", "hello"])

    assert exit_code == 1
    assert "failed RuntimeError('boom')" in strip_ansi(stdout)


def test_send_times_out_without_acknowledgement(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _SilentTransport())

    exit_code, stdout, _ = run_cli(["send", "--token", "t", "--subdomain", "s", "--wait", "0.01", "hello"])

    assert exit_code == 1
    assert "no acknowledgement from logs-01.loggly.com within 0.01s" in stdout


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

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

    exit_code = cli_mod.main(["--no-traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": False, "traceback_force_color": False}
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "info"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "Info for lib_log_loggly" in captured.out
