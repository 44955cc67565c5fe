"""Tag extraction from the trailing argument of a logging call.

A call such as ``logger.info("user", name, {"tags": ["signup"]})`` carries its
Loggly tags in the last argument. The mapping is consumed only when ``tags`` is
its single key; a mapping with any additional key is treated as ordinary
message data and no tags are extracted at all.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

TAGS_KEY = "tags"


def is_tag_container(value: Any) -> bool:
    """Return ``True`` when ``value`` is a mapping whose only key is ``tags``."""
    return isinstance(value, Mapping) and len(value) == 1 and TAGS_KEY in value


def _normalise_tags(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, Iterable):
        return tuple(str(tag) for tag in raw)
    return (str(raw),)


def extract_tags(args: Sequence[Any]) -> tuple[tuple[Any, ...], tuple[str, ...]]:
    """Split ``args`` into message arguments and tags.

    Examples
    --------
    >>> extract_tags(['A', 'B', {'tags': ['x', 'y']}])
    (('A', 'B'), ('x', 'y'))
    >>> extract_tags(['A', {'other': 'o', 'tags': ['x']}])
    (('A', {'other': 'o', 'tags': ['x']}), ())
    >>> extract_tags([])
    ((), ())
    """

    items = tuple(args)
    if not items or not is_tag_container(items[-1]):
        return items, ()
    return items[:-1], _normalise_tags(items[-1][TAGS_KEY])


__all__ = ["TAGS_KEY", "extract_tags", "is_tag_container"]
