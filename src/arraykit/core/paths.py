"""Dotted-path access into nested containers.

``"a.b.c"`` addresses ``target["a"]["b"]["c"]``. Traversal descends
through plain mappings, lists/tuples and keyed containers (``KeyedMap``,
``OrderedList``). A segment spelled as a canonical integer (``"0"``,
``"-3"``) also matches the matching ``int`` key, so ``"items.0"`` reaches
the first element of a nested list.

Lookups are lenient: a missing path yields the default / ``False``.
Assignment is copy-on-write: every level on the path is copied, nothing
the caller holds is mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Hashable

from .interfaces import KeyedContainer
from .shape import keys_are_list_shaped

_MISSING = object()


def _canonical_int(segment: Any) -> int | None:
    if not isinstance(segment, str):
        return None
    try:
        value = int(segment)
    except ValueError:
        return None
    return value if str(value) == segment else None


def _children(node: Any) -> Mapping[Hashable, Any] | None:
    if isinstance(node, KeyedContainer):
        return node.all()
    if isinstance(node, Mapping):
        return node
    if isinstance(node, (list, tuple)):
        return dict(enumerate(node))
    return None


def _resolve(children: Mapping[Hashable, Any], segment: Hashable) -> Any:
    """Return the key in *children* that *segment* addresses, or _MISSING."""
    if segment in children:
        return segment
    as_int = _canonical_int(segment)
    if as_int is not None and as_int in children:
        return as_int
    return _MISSING


def _walk(target: Any, segments: list[str]) -> Any:
    node = target
    for segment in segments:
        children = _children(node)
        if children is None:
            return _MISSING
        key = _resolve(children, segment)
        if key is _MISSING:
            return _MISSING
        node = children[key]
    return node


def data_get(
    target: Any,
    path: Hashable | None,
    default: Any = None,
    separator: str = ".",
) -> Any:
    """Read the value at *path*, or *default* when any segment is missing.

    An exact top-level key wins over dotted traversal, so a literal
    ``"a.b"`` key is returned as-is when present.
    """
    if path is None:
        return target

    children = _children(target)
    if children is None:
        return default

    key = _resolve(children, path)
    if key is not _MISSING:
        return children[key]
    if not isinstance(path, str) or separator not in path:
        return default

    value = _walk(target, path.split(separator))
    return default if value is _MISSING else value


def data_has(target: Any, path: Hashable | None, separator: str = ".") -> bool:
    """True if *path* exists in *target*. Empty targets have no paths."""
    if path is None or path == "":
        return False

    children = _children(target)
    if not children:
        return False
    if _resolve(children, path) is not _MISSING:
        return True
    if not isinstance(path, str):
        return False

    return _walk(target, path.split(separator)) is not _MISSING


def data_set(
    target: Mapping[Hashable, Any],
    path: Hashable,
    value: Any,
    separator: str = ".",
) -> dict[Hashable, Any]:
    """Return a copy of *target* with *value* stored at *path*.

    Missing or non-container intermediate levels are replaced by new
    dicts. Nested keyed containers on the path are rebuilt through their
    constructor; nested lists stay lists while their indices remain
    contiguous.
    """
    segments: list[Hashable] = path.split(separator) if isinstance(path, str) else [path]
    return _assign(dict(target), segments, value)


def _assign(node: dict[Hashable, Any], segments: list[Hashable], value: Any) -> dict[Hashable, Any]:
    head, rest = segments[0], segments[1:]

    key = _resolve(node, head)
    if key is _MISSING:
        as_int = _canonical_int(head)
        int_keyed = bool(node) and all(isinstance(k, int) for k in node)
        key = as_int if as_int is not None and int_keyed else head

    if not rest:
        node[key] = value
    else:
        node[key] = _assign_child(node.get(key), rest, value)
    return node


def _assign_child(child: Any, segments: list[Hashable], value: Any) -> Any:
    if isinstance(child, KeyedContainer):
        return type(child)(_assign(child.all(), segments, value))
    if isinstance(child, Mapping):
        return _assign(dict(child), segments, value)
    if isinstance(child, (list, tuple)):
        updated = _assign(dict(enumerate(child)), segments, value)
        if keys_are_list_shaped(updated):
            return list(updated.values())
        return updated
    return _assign({}, segments, value)
