"""Environment and ``.env`` configuration sources.

Purpose
-------
Collect appender options from ``LOGGLY_*`` environment variables, optionally
seeded from the nearest ``.env`` file, so command-line tools and twelve-factor
deployments need no code to configure the appender.

Contents
--------
* :data:`ENV_OPTIONS` – environment variable to option-key mapping.
* :func:`options_from_env` – build an options mapping from the environment.
* :func:`enable_dotenv` – load the nearest ``.env`` without overriding values.
* :func:`dotenv_requested` – interpret the ``LOGGLY_USE_DOTENV`` toggle.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "LOGGLY_USE_DOTENV"

ENV_OPTIONS: Mapping[str, str] = {
    "LOGGLY_TOKEN": "token",
    "LOGGLY_SUBDOMAIN": "subdomain",
    "LOGGLY_TAGS": "tags",
    "LOGGLY_HOST": "host",
    "LOGGLY_TIMEOUT": "timeout",
    "LOGGLY_LEVEL": "level",
    "LOGGLY_APPENDER_NAME": "name",
}

_TRUTHY = {"1", "true", "yes", "on"}

_LOADED_PATH: Path | None = None


def options_from_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Return appender options found in ``environ`` (defaults to ``os.environ``).

    Empty variables are ignored; ``LOGGLY_TAGS`` is split on commas.

    Examples
    --------
    >>> options_from_env({'LOGGLY_TOKEN': 'abc', 'LOGGLY_TAGS': 'web, prod', 'LOGGLY_HOST': ''})
    {'token': 'abc', 'tags': ['web', 'prod']}
    """

    source = os.environ if environ is None else environ
    options: dict[str, Any] = {}
    for variable, key in ENV_OPTIONS.items():
        value = source.get(variable, "").strip()
        if not value:
            continue
        if key == "tags":
            options[key] = [part.strip() for part in value.split(",") if part.strip()]
        else:
            options[key] = value
    return options


def dotenv_requested(environ: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when ``LOGGLY_USE_DOTENV`` holds a truthy value."""

    source = os.environ if environ is None else environ
    return source.get(DOTENV_ENV_VAR, "").strip().lower() in _TRUTHY


def enable_dotenv(start: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file into ``os.environ``.

    The search walks from ``start`` (default: the working directory) up to
    the filesystem root. Variables already present in the environment keep
    precedence. The first successful load is remembered; later calls return
    the same path without reading the file again.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _LOADED_PATH
    if _LOADED_PATH is not None:
        return _LOADED_PATH
    path = _locate_dotenv(start)
    if path is None:
        return None
    load_dotenv(path, override=False)
    _LOADED_PATH = path
    return path


def _locate_dotenv(start: Path | None) -> Path | None:
    if start is None:
        found = find_dotenv(usecwd=True)
        return Path(found).resolve() if found else None
    directory = start.resolve()
    if directory.is_file():
        directory = directory.parent
    for candidate in (directory, *directory.parents):
        env_file = candidate / ".env"
        if env_file.is_file():
            return env_file.resolve()
    return None


def _reset_dotenv_state_for_testing() -> None:
    """Forget the remembered ``.env`` path."""

    global _LOADED_PATH
    _LOADED_PATH = None


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_OPTIONS",
    "dotenv_requested",
    "enable_dotenv",
    "options_from_env",
]
