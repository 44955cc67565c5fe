"""Translate user-supplied option mappings into :class:`AppenderConfig`.

Recognised keys: ``token`` and ``subdomain`` (required), ``tags``, ``layout``,
``name``, ``host``, ``timeout``, ``max_workers``, ``level``. Unknown keys are
ignored so the same mapping can carry front-end specific fields such as
``type``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from lib_log_loggly.domain import AppenderConfig, ConfigurationError, LayoutSpec, LogLevel
from lib_log_loggly.domain.settings import DEFAULT_APPENDER_NAME, DEFAULT_HOST, DEFAULT_MAX_WORKERS

REQUIRED_OPTIONS = ("token", "subdomain")


def build_appender_config(options: Mapping[str, Any]) -> AppenderConfig:
    """Validate ``options`` and return the immutable configuration.

    Raises
    ------
    ConfigurationError
        When a required credential is missing or an option has the wrong shape.

    Examples
    --------
    >>> config = build_appender_config({'token': 't', 'subdomain': 's', 'tags': ['a']})
    >>> config.token, config.subdomain, config.tags, config.layout
    ('t', 's', ('a',), None)
    >>> build_appender_config({'token': 't'})
    Traceback (most recent call last):
    ...
    lib_log_loggly.domain.errors.ConfigurationError: missing required option 'subdomain'
    """

    if not isinstance(options, Mapping):
        raise ConfigurationError(f"options must be a mapping, got {type(options).__name__}")
    for key in REQUIRED_OPTIONS:
        value = options.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"missing required option {key!r}")

    return AppenderConfig(
        token=options["token"].strip(),
        subdomain=options["subdomain"].strip(),
        tags=_coerce_tags(options.get("tags")),
        layout=_coerce_layout(options.get("layout")),
        name=_coerce_text(options.get("name"), DEFAULT_APPENDER_NAME, "name"),
        host=_coerce_text(options.get("host"), DEFAULT_HOST, "host"),
        timeout=_coerce_timeout(options.get("timeout")),
        max_workers=_coerce_workers(options.get("max_workers")),
        level=_coerce_level(options.get("level")),
    )


def _coerce_tags(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return tuple(part.strip() for part in raw.split(",") if part.strip())
    if isinstance(raw, Iterable):
        tags = tuple(raw)
        if not all(isinstance(tag, str) for tag in tags):
            raise ConfigurationError("tags must be strings")
        return tags
    raise ConfigurationError(f"tags must be a list of strings, got {type(raw).__name__}")


def _coerce_layout(raw: Any) -> LayoutSpec | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ConfigurationError("layout must be a mapping with a 'type' key")
    layout_type = raw.get("type")
    if not isinstance(layout_type, str) or not layout_type:
        raise ConfigurationError("layout requires a non-empty 'type'")
    return LayoutSpec(type=layout_type, options=raw)


def _coerce_text(raw: Any, default: str, key: str) -> str:
    if raw is None:
        return default
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigurationError(f"{key} must be a non-empty string")
    return raw.strip()


def _coerce_timeout(raw: Any) -> float | None:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"timeout must be a number of seconds, got {raw!r}") from exc
    if timeout <= 0:
        raise ConfigurationError("timeout must be positive")
    return timeout


def _coerce_workers(raw: Any) -> int:
    if raw is None:
        return DEFAULT_MAX_WORKERS
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
        raise ConfigurationError(f"max_workers must be a positive integer, got {raw!r}")
    return raw


def _coerce_level(raw: Any) -> LogLevel:
    if raw is None:
        return LogLevel.ALL
    try:
        return LogLevel.coerce(raw)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


__all__ = ["REQUIRED_OPTIONS", "build_appender_config"]
