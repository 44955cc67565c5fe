"""Immutable appender configuration.

Purpose
-------
Capture the validated options an appender is built from. Parsing and
validation of user-supplied mappings lives in
:mod:`lib_log_loggly.runtime._settings`; this module only holds the
resulting values.

Contents
--------
* :class:`LayoutSpec` - selected layout type plus its raw options.
* :class:`AppenderConfig` - credentials, default tags, layout, and transport knobs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .levels import LogLevel

DEFAULT_APPENDER_NAME = "lib_log_loggly.LogglyAppender"
DEFAULT_HOST = "logs-01.loggly.com"
DEFAULT_MAX_WORKERS = 4


@dataclass(slots=True, frozen=True)
class LayoutSpec:
    """Layout selection forwarded verbatim to the layout factory.

    ``options`` holds the complete layout mapping, ``type`` included, exactly
    as the caller supplied it.
    """

    type: str
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


@dataclass(slots=True, frozen=True)
class AppenderConfig:
    """Configuration an appender is constructed from; never mutated afterwards."""

    token: str
    subdomain: str
    tags: tuple[str, ...] = ()
    layout: LayoutSpec | None = None
    name: str = DEFAULT_APPENDER_NAME
    host: str = DEFAULT_HOST
    timeout: float | None = None
    max_workers: int = DEFAULT_MAX_WORKERS
    level: LogLevel = LogLevel.ALL

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def inputs_url(self) -> str:
        """Return the HTTP inputs endpoint for :attr:`token`.

        Examples
        --------
        >>> AppenderConfig(token='abc', subdomain='acme').inputs_url
        'https://logs-01.loggly.com/inputs/abc'
        """

        return f"https://{self.host}/inputs/{self.token}"


__all__ = [
    "AppenderConfig",
    "DEFAULT_APPENDER_NAME",
    "DEFAULT_HOST",
    "DEFAULT_MAX_WORKERS",
    "LayoutSpec",
]
