"""KeyedMap: a string-keyed, dot-path addressable map wrapper.

Keys may address nested levels with the configured separator
(``"a.b.c"``). Lookups are lenient: ``get`` and ``has`` never raise on a
missing path. ``map[key]`` is the strict counterpart and raises
:class:`ListKeyNotFound`.

All transforms return new maps, except :meth:`put`, which mutates the
receiver in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, Generic, Hashable, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from arraykit.core.config import get_settings
from arraykit.core.errors import ListKeyNotFound
from arraykit.core.interfaces import KeyedContainer
from arraykit.core.paths import data_get, data_has, data_set
from arraykit.core.serialization import encode, to_plain
from arraykit.core.shape import as_mapping, assert_map_shape

from .ordered_list import OrderedList

T = TypeVar("T")
U = TypeVar("U")

_MISSING: Any = object()


def _is_empty_collection(value: Any) -> bool:
    """Whether *value*, wrapped as a collection, has no items.

    ``None`` wraps to an empty collection, any other scalar (including
    ``""`` and ``0``) to a one-element collection.
    """
    if value is None:
        return True
    if isinstance(value, KeyedContainer):
        return not value.all()
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def _entries(other: KeyedMap[Any] | Mapping[Hashable, Any]) -> dict[Hashable, Any]:
    if isinstance(other, KeyedContainer):
        return other.all()
    return dict(other)


class KeyedMap(Generic[T]):
    """Map from string key to ``T``, iterated in insertion order.

    Build instances with :meth:`create` (rejects list-shaped input) or
    :meth:`empty`.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[Hashable, T] | None = None) -> None:
        self._items: dict[Hashable, T] = dict(items) if items is not None else {}

    @classmethod
    def create(cls, items: Mapping[str, T] | Iterable[Any] = ()) -> KeyedMap[T]:
        """Build a map from a mapping (or an empty sequence).

        Raises:
            MapShapeInvalid: *items* is non-empty and keyed ``0..n-1``.
            TypeError: *items* is a string or not a collection.
        """
        source = as_mapping(items)
        assert_map_shape(source)
        return cls(source)

    @classmethod
    def empty(cls) -> KeyedMap[T]:
        return cls()

    @staticmethod
    def _separator() -> str:
        return get_settings().path_separator

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, key: str | None, default: Any = None) -> Any:
        """Value at the dotted *key*, or *default*. A None key returns :meth:`all`."""
        if key is None:
            return self.all()
        return data_get(self._items, key, default, separator=self._separator())

    def __getitem__(self, key: str | None) -> Any:
        if key is None:
            return self.all()
        value = data_get(self._items, key, _MISSING, separator=self._separator())
        if value is _MISSING:
            raise ListKeyNotFound(key)
        return value

    def has(self, key: str) -> bool:
        return data_has(self._items, key, separator=self._separator())

    def has_and_not_null(self, key: str) -> bool:
        """Direct (non-dotted) key present with a non-None value."""
        return self._items.get(key) is not None

    def is_empty_by_key(self, key: str) -> bool:
        """True if *key* is absent or holds an empty collection / None."""
        if key not in self._items:
            return True
        return _is_empty_collection(self._items[key])

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any) -> KeyedMap[T]:
        """Return a copy with *value* at the dotted *key*.

        Intermediate levels are created as dicts when missing.
        """
        return type(self)(data_set(self._items, key, value, separator=self._separator()))

    def put(self, key: str, value: T) -> None:
        """Assign *key* in place. Unlike :meth:`set`, no copy is made."""
        self._items[key] = value

    def remove(self, key: str) -> KeyedMap[T]:
        items = dict(self._items)
        items.pop(key, None)
        return type(self)(items)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def transform(self, fn: Callable[[T, Hashable], U]) -> KeyedMap[U]:
        return type(self)({k: fn(v, k) for k, v in self._items.items()})

    def each(self, fn: Callable[[T, Hashable], Any]) -> KeyedMap[T]:
        """Call ``fn(value, key)`` in insertion order until it returns ``False``."""
        for key, value in list(self._items.items()):
            if fn(value, key) is False:
                break
        return type(self)(self._items)

    def filter(self, fn: Callable[[T], Any] | None = None) -> KeyedMap[T]:
        if fn is None:
            return type(self)({k: v for k, v in self._items.items() if v})
        return type(self)({k: v for k, v in self._items.items() if fn(v)})

    def search_using_function(self, fn: Callable[[T, Hashable], Any]) -> T | None:
        for key, value in self._items.items():
            if fn(value, key):
                return value
        return None

    def merge(self, other: KeyedMap[T] | Mapping[str, T]) -> KeyedMap[T]:
        """Shallow merge; values from *other* win on key collisions."""
        merged = dict(self._items)
        merged.update(_entries(other))
        return type(self)(merged)

    def intersection_by_keys(self, other: KeyedMap[Any] | Mapping[str, Any]) -> KeyedMap[T]:
        wanted = _entries(other)
        return type(self)({k: v for k, v in self._items.items() if k in wanted})

    def convert_to_list(self) -> OrderedList[T]:
        return OrderedList.create(list(self._items.values()))

    def keys(self) -> OrderedList[Hashable]:
        return OrderedList.create(list(self._items.keys()))

    def pipe(self, fn: Callable[[KeyedMap[T]], U]) -> U:
        return fn(self)

    # ------------------------------------------------------------------
    # Queries and export
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self._items

    def count(self) -> int:
        return len(self._items)

    def all(self) -> dict[Hashable, T]:
        return dict(self._items)

    def to_array(self) -> dict[Hashable, Any]:
        return {k: to_plain(v) for k, v in self._items.items()}

    def json_value(self) -> dict[str, Any]:
        return {str(k): v for k, v in self._items.items()}

    def to_json(self, indent: int | None = None) -> str:
        return encode(self.json_value(), indent=indent)

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyedMap):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"KeyedMap({self._items!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_array()
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> KeyedMap[Any]:
        if isinstance(value, KeyedMap):
            return value
        try:
            return cls.create(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
