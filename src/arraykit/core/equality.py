"""Equality semantics used by search, contains, unique and diff.

Two flavours exist:

* strict: same concrete type and equal value (``1`` and ``1.0`` differ,
  so do ``1`` and ``True``);
* loose: plain ``==``.
"""

from __future__ import annotations

from typing import Any, Hashable

from .interfaces import DistinctionKey


def strict_equals(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


def loose_equals(a: Any, b: Any) -> bool:
    return a == b


def distinction_key(item: Any) -> Hashable | None:
    """Return a hashable key that collides only for strictly equal items.

    Items implementing :class:`DistinctionKey` are keyed by their own
    ``distinction_key()``. Returns ``None`` for unhashable items; callers
    fall back to a linear scan with :func:`strict_equals`.
    """
    if isinstance(item, DistinctionKey):
        return ("distinction", item.distinction_key())
    try:
        hash(item)
    except TypeError:
        return None
    return (type(item), item)


def index_of_strict(items: list[Any], item: Any) -> int:
    """Position of the first strictly equal element, or -1."""
    for i, candidate in enumerate(items):
        if strict_equals(candidate, item):
            return i
    return -1
