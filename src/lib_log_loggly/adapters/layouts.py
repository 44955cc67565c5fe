"""Layout registry selecting how event arguments render to text.

Purpose
-------
Implement :class:`~lib_log_loggly.application.ports.FormatterPort` variants and
resolve them by name from the ``layout`` configuration block.

Contents
--------
* :func:`message_pass_through_layout` - default layout, arguments only.
* :func:`basic_layout` - timestamp, level, and category prefix.
* ``pattern`` / ``json`` factories driven by layout options.
* :class:`LayoutRegistry` and the module-level :data:`LAYOUTS` registry.

System Role
-----------
The appender asks the registry for a formatter once, at configure time. Layout
factories receive the complete layout mapping exactly as configured so custom
layouts can read any field they need.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from lib_log_loggly.application.ports.formatter import FormatterPort
from lib_log_loggly.domain.errors import ConfigurationError, FormattingError
from lib_log_loggly.domain.events import LogEvent
from lib_log_loggly.domain.settings import LayoutSpec

from ._formatting import build_format_payload
from ._inspect import format_args

LayoutFactory = Callable[[Mapping[str, Any]], FormatterPort]

DEFAULT_LAYOUT = "messagePassThrough"


def message_pass_through_layout(event: LogEvent) -> str:
    """Render only the event arguments.

    Examples
    --------
    >>> from lib_log_loggly.domain.levels import LogLevel
    >>> message_pass_through_layout(LogEvent('app', LogLevel.TRACE, ['A', {'other': 'o', 'tags': ['x']}]))
    "A { other: 'o', tags: [ 'x' ] }"
    """

    return format_args(event.args)


def basic_layout(event: LogEvent) -> str:
    """Render ``[timestamp] [LEVEL] category - message``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_loggly.domain.levels import LogLevel
    >>> event = LogEvent('app', LogLevel.WARN, ['disk', 91], datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc))
    >>> basic_layout(event)
    '[2025-09-30T12:00:00+00:00] [WARN] app - disk 91'
    """

    return f"[{event.timestamp.isoformat()}] [{event.level.level_str}] {event.category} - {format_args(event.args)}"


def _pass_through_factory(_options: Mapping[str, Any]) -> FormatterPort:
    return message_pass_through_layout


def _basic_factory(_options: Mapping[str, Any]) -> FormatterPort:
    return basic_layout


def _pattern_factory(options: Mapping[str, Any]) -> FormatterPort:
    pattern = options.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        raise ConfigurationError("pattern layout requires a non-empty 'pattern' string")

    def render(event: LogEvent) -> str:
        try:
            return pattern.format(**build_format_payload(event))
        except (KeyError, IndexError, ValueError) as exc:
            raise FormattingError(f"pattern {pattern!r} cannot be rendered: {exc!r}") from exc

    return render


def _json_factory(options: Mapping[str, Any]) -> FormatterPort:
    indent = options.get("indent")

    def render(event: LogEvent) -> str:
        payload = build_format_payload(event)
        document = {key: payload[key] for key in ("timestamp", "level", "category", "message")}
        return json.dumps(document, indent=indent, sort_keys=True)

    return render


class LayoutRegistry:
    """Map layout type names to factories.

    Examples
    --------
    >>> registry = LayoutRegistry()
    >>> registry.register('upper', lambda options: lambda event: 'X')
    >>> registry.layout('upper', {'type': 'upper'})(None)
    'X'
    """

    def __init__(self, factories: Mapping[str, LayoutFactory] | None = None) -> None:
        self._factories: dict[str, LayoutFactory] = dict(factories or {})

    def register(self, name: str, factory: LayoutFactory) -> None:
        """Install ``factory`` under ``name``, replacing any previous entry."""
        if not name:
            raise ValueError("layout name must not be empty")
        self._factories[name] = factory

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._factories))

    def layout(self, name: str, options: Mapping[str, Any]) -> FormatterPort:
        """Build the layout ``name`` with ``options`` forwarded verbatim."""
        try:
            factory = self._factories[name]
        except KeyError as exc:
            known = ", ".join(self.names())
            raise ConfigurationError(f"unknown layout type {name!r}; expected one of: {known}") from exc
        return factory(options)

    def select(self, spec: LayoutSpec | None) -> FormatterPort:
        """Return the formatter for ``spec``; ``None`` selects the default layout."""
        if spec is None:
            return self.layout(DEFAULT_LAYOUT, {})
        return self.layout(spec.type, spec.options)


def default_registry() -> LayoutRegistry:
    """Return a fresh registry holding the built-in layouts."""

    return LayoutRegistry(
        {
            DEFAULT_LAYOUT: _pass_through_factory,
            "basic": _basic_factory,
            "pattern": _pattern_factory,
            "json": _json_factory,
        }
    )


LAYOUTS = default_registry()
"""Process-wide registry used when :func:`~lib_log_loggly.runtime.configure` receives no registry."""


def register_layout(name: str, factory: LayoutFactory) -> None:
    """Register a custom layout on :data:`LAYOUTS`."""

    LAYOUTS.register(name, factory)


__all__ = [
    "DEFAULT_LAYOUT",
    "LAYOUTS",
    "LayoutFactory",
    "LayoutRegistry",
    "basic_layout",
    "default_registry",
    "message_pass_through_layout",
    "register_layout",
]
