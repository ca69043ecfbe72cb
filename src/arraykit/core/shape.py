"""List/map shape detection.

A mapping is *list-shaped* when it is empty or its keys are exactly the
integers ``0..n-1`` in insertion order. ``OrderedList`` requires that
shape at construction, ``KeyedMap`` requires its absence (empty is
accepted by both).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .errors import InvalidListShape, MapShapeInvalid
from .interfaces import KeyedContainer

logger = logging.getLogger(__name__)


def _is_int_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def keys_are_list_shaped(keys: Iterable[Any]) -> bool:
    """True iff *keys* enumerate as 0, 1, 2, ... with nothing else."""
    for expected, key in enumerate(keys):
        if not _is_int_key(key) or key != expected:
            return False
    return True


def is_list_shape(items: Any) -> bool:
    """Check whether *items* is list-shaped.

    Mappings and keyed containers are checked key by key. Any other
    iterable is positional and therefore always list-shaped.

    Raises:
        TypeError: *items* is a string, bytes, or not iterable at all.
    """
    if isinstance(items, (str, bytes, bytearray)):
        raise TypeError(f"Expected a collection, got {type(items).__name__}")
    if isinstance(items, KeyedContainer):
        return keys_are_list_shaped(items.all())
    if isinstance(items, Mapping):
        return keys_are_list_shaped(items)
    if isinstance(items, Iterable):
        return True
    raise TypeError(f"Expected a collection, got {type(items).__name__}")


def is_map_shape(items: Any) -> bool:
    """Empty, or not list-shaped."""
    list_shaped = is_list_shape(items)
    return not list_shaped or _size(items) == 0


def as_mapping(items: Any) -> dict[Any, Any]:
    """Materialize *items* as a fresh key -> value dict.

    Positional iterables are keyed 0..n-1, mappings and keyed containers
    keep their keys.
    """
    if isinstance(items, (str, bytes, bytearray)):
        raise TypeError(f"Expected a collection, got {type(items).__name__}")
    if isinstance(items, KeyedContainer):
        return items.all()
    if isinstance(items, Mapping):
        return dict(items)
    if isinstance(items, Iterable):
        return dict(enumerate(items))
    raise TypeError(f"Expected a collection, got {type(items).__name__}")


def assert_list_shape(items: Any) -> None:
    if not is_list_shape(items):
        logger.debug("Rejected non-list-shaped input of size %d", _size(items))
        raise InvalidListShape()


def assert_map_shape(items: Any) -> None:
    if not is_map_shape(items):
        logger.debug("Rejected list-shaped input of size %d for a map", _size(items))
        raise MapShapeInvalid()


def _size(items: Any) -> int:
    if isinstance(items, KeyedContainer):
        return len(items.all())
    try:
        return len(items)
    except TypeError:
        return -1
