"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

name = "lib_log_loggly"
title = "Ship structured log events to Loggly and drain them on shutdown"
version = "0.1.0"
shell_command = "lib_log_loggly"


def summary_info() -> str:
    """Return the metadata banner printed by ``lib_log_loggly info``.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_log_loggly:'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    return "\n".join(lines) + "\n"


__all__ = ["summary_info", "version", "shell_command"]
