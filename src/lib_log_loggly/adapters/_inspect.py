"""Render logging-call arguments into a single line of text.

Why
---
Front-ends pass arbitrary values (strings, mappings, sequences, exceptions)
to a logging call. The pass-through layout joins them the way console
loggers do: strings verbatim, structured values in a compact inspect
notation such as ``{ user: 'ada', tags: [ 'x' ] }``.

Contents
--------
* :func:`inspect_value` - compact, single-line representation of a value.
* :func:`format_args` - printf-style substitution followed by space joining.
"""

from __future__ import annotations

import dataclasses
import json
import re
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime, time
from enum import Enum
from itertools import islice
from typing import Any

DEFAULT_DEPTH = 2
MAX_ITEMS = 100

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_DIRECTIVE = re.compile(r"%[sdifjoOc%]")


def inspect_value(value: Any, *, depth: int = DEFAULT_DEPTH) -> str:
    """Return a compact, single-line representation of ``value``.

    Containers nested deeper than ``depth`` collapse to a type marker and
    self-references render as ``[Circular]``.

    Examples
    --------
    >>> inspect_value({'other': 'o', 'tags': ['x']})
    "{ other: 'o', tags: [ 'x' ] }"
    >>> inspect_value([])
    '[]'
    >>> inspect_value({'a': {'b': {'c': {'d': 1}}}})
    '{ a: { b: { c: [Object] } } }'
    """

    return _inspect(value, depth, set())


def format_args(args: Sequence[Any]) -> str:
    """Render ``args`` into one message string.

    When the first argument is a string its ``%s %d %i %f %j %o %O %c %%``
    directives consume the following arguments; whatever is left is appended
    separated by single spaces.

    Examples
    --------
    >>> format_args(['A', 'B'])
    'A B'
    >>> format_args(['%s has %d items', 'cart', 3, {'id': 7}])
    'cart has 3 items { id: 7 }'
    >>> format_args(['100%'])
    '100%'
    """

    items = list(args)
    if not items:
        return ""
    first = items[0]
    if not isinstance(first, str):
        return " ".join(_plain(item) for item in items)
    rest = items[1:]
    if not rest:
        return first

    consumed = 0

    def substitute(match: re.Match[str]) -> str:
        nonlocal consumed
        directive = match.group(0)
        if directive == "%%":
            return "%"
        if consumed >= len(rest):
            return directive
        value = rest[consumed]
        consumed += 1
        return _apply_directive(directive[1], value)

    head = _DIRECTIVE.sub(substitute, first)
    return " ".join([head, *(_plain(item) for item in rest[consumed:])])


def _plain(value: Any) -> str:
    if isinstance(value, str):
        return value
    return inspect_value(value)


def _apply_directive(code: str, value: Any) -> str:
    if code == "s":
        return _plain(value)
    if code == "d":
        number = _to_number(value)
        return "NaN" if number is None else str(number)
    if code == "i":
        number = _to_number(value)
        return "NaN" if number is None else str(int(number))
    if code == "f":
        number = _to_number(value)
        return "NaN" if number is None else repr(float(number))
    if code == "j":
        try:
            return json.dumps(value, default=str, ensure_ascii=False)
        except ValueError:
            return "[Circular]"
    if code == "o":
        return inspect_value(value, depth=4)
    if code == "O":
        return inspect_value(value)
    # %c carries CSS for browser consoles; the argument is consumed silently.
    return ""


def _to_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        for convert in (int, float):
            try:
                return convert(text)
            except ValueError:
                continue
    return None


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("\n", "\\n").replace("\t", "\\t")
    if "'" in escaped and '"' not in escaped:
        return f'"{escaped}"'
    return "'" + escaped.replace("'", "\\'") + "'"


def _format_key(key: Any, depth: int, seen: set[int]) -> str:
    if isinstance(key, str):
        return key if _IDENTIFIER.match(key) else _quote(key)
    return _inspect(key, depth, seen)


def _inspect(value: Any, depth: int, seen: set[int]) -> str:
    if isinstance(value, str):
        return _quote(value)
    if value is None or isinstance(value, (bool, int, float, complex, bytes, bytearray)):
        return repr(value)
    if isinstance(value, Enum):
        return f"{type(value).__name__}.{value.name}"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, BaseException):
        text = str(value)
        return f"{type(value).__name__}: {text}" if text else type(value).__name__
    if isinstance(value, Mapping):
        return _container(value, "{", "}", "[Object]", depth, seen, _mapping_parts)
    if isinstance(value, (list, tuple)):
        return _container(value, "[", "]", "[Array]", depth, seen, _sequence_parts)
    if isinstance(value, (set, frozenset)):
        prefix = f"{'Set' if isinstance(value, set) else 'FrozenSet'}({len(value)}) "
        return prefix + _container(value, "{", "}", "[Set]", depth, seen, _sequence_parts)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
        name = type(value).__name__
        return f"{name} " + _container(fields, "{", "}", f"[{name}]", depth, seen, _mapping_parts, marker=id(value))
    return repr(value)


def _container(
    value: Any,
    opening: str,
    closing: str,
    collapsed: str,
    depth: int,
    seen: set[int],
    parts: Callable[[Any, int, set[int]], list[str]],
    *,
    marker: int | None = None,
) -> str:
    marker = id(value) if marker is None else marker
    if marker in seen:
        return "[Circular]"
    if not value:
        return opening + closing
    if depth < 0:
        return collapsed
    seen.add(marker)
    try:
        rendered = parts(value, depth - 1, seen)
    finally:
        seen.discard(marker)
    return f"{opening} {', '.join(rendered)} {closing}"


def _mapping_parts(value: Mapping[Any, Any], depth: int, seen: set[int]) -> list[str]:
    entries = list(islice(value.items(), MAX_ITEMS))
    rendered = [f"{_format_key(key, depth, seen)}: {_inspect(item, depth, seen)}" for key, item in entries]
    return _truncated(rendered, len(value))


def _sequence_parts(value: Any, depth: int, seen: set[int]) -> list[str]:
    items = list(value)
    rendered = [_inspect(item, depth, seen) for item in items[:MAX_ITEMS]]
    return _truncated(rendered, len(items))


def _truncated(rendered: list[str], total: int) -> list[str]:
    if total > MAX_ITEMS:
        remaining = total - MAX_ITEMS
        rendered.append(f"... {remaining} more item{'s' if remaining > 1 else ''}")
    return rendered


__all__ = ["DEFAULT_DEPTH", "format_args", "inspect_value"]
