"""OrderedList: an integer-indexed, copy-on-write list wrapper.

Items live in an insertion-ordered ``index -> value`` dict. Operations
that drop elements (``filter``, ``unique``, ``diff``, ...) keep the
surviving indices, so a list can become sparse; call :meth:`values` to
reindex it to ``0..n-1``.

Every transform returns a new list. Only three operations touch the
receiver's storage: :meth:`pop`, and the append done by :meth:`push` /
:meth:`add`. Callers sharing a list must not assume copy-on-write for
those.

Callbacks receive the item alone, so one-argument callables such as
``str`` or ``bool`` can be passed directly. Only :meth:`each` and
:meth:`convert_to_hash_map` also pass the index; iterate ``all().items()``
when a transform needs it.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Callable, Generic, Hashable, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from arraykit.core.equality import (
    distinction_key,
    index_of_strict,
    loose_equals,
    strict_equals,
)
from arraykit.core.errors import FirstElementMissing, ListKeyNotFound
from arraykit.core.interfaces import KeyedContainer
from arraykit.core.serialization import encode, to_plain
from arraykit.core.shape import as_mapping, assert_list_shape, keys_are_list_shaped

if TYPE_CHECKING:
    from .keyed_map import KeyedMap

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

_MISSING: Any = object()


def _pairs(result: Any) -> Iterable[tuple[Hashable, Any]]:
    """Normalize a grouping/keying callback result to key/value pairs."""
    if isinstance(result, KeyedContainer):
        return result.all().items()
    if isinstance(result, Mapping):
        return result.items()
    if isinstance(result, tuple) and len(result) == 2:
        return (result,)
    raise TypeError(
        "Callback must return a (key, value) pair or a mapping, "
        f"got {type(result).__name__}"
    )


def _values_of(other: Any) -> list[Any]:
    """Values of a keyed container or mapping, items of any other iterable."""
    if isinstance(other, KeyedContainer):
        return list(other.all().values())
    if isinstance(other, Mapping):
        return list(other.values())
    return list(other)


class OrderedList(Generic[T]):
    """Ordered, integer-indexed list of ``T``.

    Build instances with :meth:`create` (validates the list shape) or
    :meth:`empty`. The constructor wraps an already-keyed mapping as-is and
    exists for operations whose results are legitimately sparse.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[Hashable, T] | None = None) -> None:
        self._items: dict[Hashable, T] = dict(items) if items is not None else {}

    @classmethod
    def _wrap(cls, items: dict[Hashable, Any]) -> OrderedList[Any]:
        # Takes ownership of ``items``: callers pass a dict nobody else holds.
        instance = cls.__new__(cls)
        instance._items = items
        return instance

    @classmethod
    def _from_values(cls, values: Iterable[Any]) -> OrderedList[Any]:
        return cls._wrap(dict(enumerate(values)))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, items: Iterable[T] | Mapping[int, T] = ()) -> OrderedList[T]:
        """Build a list from a sequence, iterable or ``0..n-1`` keyed mapping.

        Raises:
            InvalidListShape: *items* is a mapping whose keys are not
                exactly ``0..n-1`` in order.
            TypeError: *items* is a string or not a collection.
        """
        source = as_mapping(items)
        assert_list_shape(source)
        return cls._wrap(source)

    @classmethod
    def empty(cls) -> OrderedList[T]:
        return cls._wrap({})

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, index: Hashable, default: Any = None) -> T | None:
        return self._items.get(index, default)

    def has(self, index: Hashable) -> bool:
        return index in self._items

    def __getitem__(self, index: Hashable) -> T:
        try:
            return self._items[index]
        except KeyError:
            raise ListKeyNotFound(index) from None

    def head(self) -> T:
        """Return the element at index 0.

        Raises:
            FirstElementMissing: index 0 is absent (empty or sparse list).
        """
        if not self.has(0):
            raise FirstElementMissing()
        return self._items[0]

    def first(self) -> T | None:
        return next(iter(self._items.values()), None)

    def last(self) -> T | None:
        return next(reversed(self._items.values()), None)

    # ------------------------------------------------------------------
    # Appending and assignment
    # ------------------------------------------------------------------

    def _next_index(self) -> int:
        indices = [
            k for k in self._items
            if isinstance(k, int) and not isinstance(k, bool)
        ]
        return max(indices) + 1 if indices else 0

    def push(self, item: T) -> OrderedList[T]:
        """Append *item* in place and return a copy of the appended list."""
        self._items[self._next_index()] = item
        return self._wrap(dict(self._items))

    def add(self, item: T) -> OrderedList[T]:
        """Alias of :meth:`push`; mutates the receiver as well."""
        return self.push(item)

    def put(self, item: T, index: Hashable) -> OrderedList[T]:
        items = dict(self._items)
        items[index] = item
        return self._wrap(items)

    def pop(self) -> T | None:
        """Remove and return the last element in place (``None`` if empty)."""
        if not self._items:
            return None
        return self._items.pop(next(reversed(self._items)))

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def filter(self, predicate: Callable[[T], Any] | None = None) -> OrderedList[T]:
        """Keep items where ``predicate(item)`` is truthy (the item itself if None).

        The predicate does not receive the index. Indices are kept, see
        :meth:`values`.
        """
        if predicate is None:
            return self._wrap({k: v for k, v in self._items.items() if v})
        return self._wrap({k: v for k, v in self._items.items() if predicate(v)})

    def values(self) -> OrderedList[T]:
        """Return a copy reindexed to ``0..n-1``."""
        return self._from_values(self._items.values())

    def keys(self) -> OrderedList[Hashable]:
        return self._from_values(self._items.keys())

    def sort_by_function(
        self,
        key_fn: Callable[[T], Any],
        descending: bool = False,
    ) -> OrderedList[T]:
        """Stable sort by ``key_fn(item)``; indices travel with their items."""
        ordered = sorted(
            self._items.items(),
            key=lambda pair: key_fn(pair[1]),
            reverse=descending,
        )
        return self._wrap(dict(ordered))

    def transform(self, fn: Callable[[T], U]) -> OrderedList[U]:
        """Apply ``fn(item)`` to every item; indices are kept."""
        return self._wrap({k: fn(v) for k, v in self._items.items()})

    def transform_flat(self, fn: Callable[[T], Any]) -> OrderedList[Any]:
        """Map every item with ``fn(item)``, then flatten the results one level.

        Results that are neither sequences nor keyed containers/mappings
        are dropped.
        """
        flat: list[Any] = []
        dropped = 0
        for item in self._items.values():
            result = fn(item)
            if isinstance(result, KeyedContainer):
                flat.extend(result.all().values())
            elif isinstance(result, Mapping):
                flat.extend(result.values())
            elif isinstance(result, (list, tuple)):
                flat.extend(result)
            else:
                dropped += 1
        if dropped:
            logger.debug("transform_flat dropped %d non-collection results", dropped)
        return self._from_values(flat)

    def collapse(self) -> OrderedList[Any]:
        """Flatten nested OrderedList elements; anything else is dropped."""
        flat: list[Any] = []
        dropped = 0
        for item in self._items.values():
            if isinstance(item, OrderedList):
                flat.extend(item._items.values())
            else:
                dropped += 1
        if dropped:
            logger.debug("collapse dropped %d non-list elements", dropped)
        return self._from_values(flat)

    def chunk(self, size: int) -> OrderedList[OrderedList[T]]:
        """Split into consecutive lists of *size*; the last may be shorter."""
        if size <= 0:
            return self._wrap({})

        values = list(self._items.values())
        return self._from_values(
            self._from_values(values[start:start + size])
            for start in range(0, len(values), size)
        )

    def tap(self, fn: Callable[[OrderedList[T]], Any]) -> OrderedList[T]:
        """Call *fn* with a snapshot copy; changes to it are not seen here."""
        fn(self._wrap(dict(self._items)))
        return self._wrap(dict(self._items))

    def each(self, fn: Callable[[T, Hashable], Any]) -> OrderedList[T]:
        """Call ``fn(item, index)`` in order until it returns ``False``."""
        for index, item in list(self._items.items()):
            if fn(item, index) is False:
                break
        return self._wrap(dict(self._items))

    def splice(
        self,
        offset: int,
        length: int | None = None,
        replacement: Any = (),
    ) -> OrderedList[T]:
        """Return a reindexed copy with a slice removed and *replacement* inserted.

        Negative *offset* / *length* count from the end. A *replacement*
        that is not a sequence or OrderedList is inserted as one element.
        """
        values = list(self._items.values())
        size = len(values)

        start = offset if offset >= 0 else max(size + offset, 0)
        start = min(start, size)
        if length is None:
            stop = size
        elif length < 0:
            stop = max(size + length, start)
        else:
            stop = min(start + length, size)

        if isinstance(replacement, OrderedList):
            inserted = list(replacement._items.values())
        elif isinstance(replacement, (list, tuple)):
            inserted = list(replacement)
        else:
            inserted = [replacement]

        return self._from_values(values[:start] + inserted + values[stop:])

    def map_to_groups(self, fn: Callable[[T], Any]) -> OrderedList[OrderedList[Any]]:
        """Group values by the single key/value pair ``fn(item)`` returns."""
        groups: dict[Hashable, list[Any]] = {}
        for item in self._items.values():
            for key, value in _pairs(fn(item)):
                groups.setdefault(key, []).append(value)
        return self._wrap({key: self._from_values(vs) for key, vs in groups.items()})

    def _unique_items(self, marker_fn: Callable[[T], Any]) -> dict[Hashable, T]:
        seen: set[Hashable] = set()
        seen_unhashable: list[Any] = []
        kept: dict[Hashable, T] = {}
        for index, item in self._items.items():
            marker = marker_fn(item)
            key = distinction_key(marker)
            if key is None:
                if index_of_strict(seen_unhashable, marker) >= 0:
                    continue
                seen_unhashable.append(marker)
            else:
                if key in seen:
                    continue
                seen.add(key)
            kept[index] = item
        return kept

    def unique(self) -> OrderedList[T]:
        """Drop strict duplicates, keeping first occurrences and their indices."""
        return self._wrap(self._unique_items(lambda item: item))

    def unique_by_expression(self, fn: Callable[[T], Any]) -> OrderedList[T]:
        return self._wrap(self._unique_items(fn))

    def flip(self) -> OrderedList[Hashable]:
        return self._wrap({v: k for k, v in self._items.items()})

    def concat(self, other: OrderedList[T] | Iterable[T]) -> OrderedList[T]:
        return self._from_values([*self._items.values(), *_values_of(other)])

    def reverse(self) -> OrderedList[T]:
        return self._wrap(dict(reversed(self._items.items())))

    def diff(self, other: OrderedList[Any] | Iterable[Any]) -> OrderedList[T]:
        """Items with no loosely equal counterpart in *other*; indices kept."""
        excluded = _values_of(other)
        return self._wrap({
            k: v for k, v in self._items.items()
            if not any(loose_equals(v, e) for e in excluded)
        })

    def group_by_callback(self, fn: Callable[[T], Hashable]) -> KeyedMap[OrderedList[T]]:
        from .keyed_map import KeyedMap

        buckets: dict[Hashable, list[T]] = {}
        for item in self._items.values():
            buckets.setdefault(fn(item), []).append(item)
        return KeyedMap({key: self._from_values(vs) for key, vs in buckets.items()})

    def convert_to_hash_map(self, fn: Callable[[T, Hashable], Any]) -> KeyedMap[Any]:
        """Build a KeyedMap from the pairs ``fn(item, index)`` returns.

        Raises:
            MapShapeInvalid: the collected keys are exactly ``0..n-1``.
        """
        from .keyed_map import KeyedMap

        pairs: dict[Hashable, Any] = {}
        for index, item in self._items.items():
            for key, value in _pairs(fn(item, index)):
                pairs[key] = value
        return KeyedMap.create(pairs)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search(self, item: Any) -> T | None:
        """Return the first element strictly equal to *item*, else None."""
        for candidate in self._items.values():
            if strict_equals(candidate, item):
                return candidate
        return None

    def search_using_function(self, predicate: Callable[[T], Any]) -> T | None:
        """First item with a truthy ``predicate(item)``, else None."""
        for candidate in self._items.values():
            if predicate(candidate):
                return candidate
        return None

    def contains(self, item: Any) -> bool:
        return any(loose_equals(v, item) for v in self._items.values())

    def contains_using_function(self, predicate: Callable[[T], Any]) -> bool:
        return any(predicate(v) for v in self._items.values())

    def in_array(self, item: Any) -> bool:
        return any(strict_equals(v, item) for v in self._items.values())

    def count(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def reduce(self, fn: Callable[[Any, T], Any], initial: Any = _MISSING) -> Any:
        """Left fold. Without *initial* the first element seeds the fold."""
        if initial is _MISSING:
            if not self._items:
                return None
            return functools.reduce(fn, self._items.values())
        return functools.reduce(fn, self._items.values(), initial)

    def pipe(self, fn: Callable[[OrderedList[T]], U]) -> U:
        return fn(self)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def all(self) -> dict[Hashable, T]:
        return dict(self._items)

    def to_array(self) -> list[Any] | dict[Hashable, Any]:
        """Plain list while indices are ``0..n-1``, else an index -> value dict.

        Nested containers are converted recursively.
        """
        if keys_are_list_shaped(self._items):
            return [to_plain(v) for v in self._items.values()]
        return {k: to_plain(v) for k, v in self._items.items()}

    def json_value(self) -> list[Any] | dict[str, Any]:
        if keys_are_list_shaped(self._items):
            return list(self._items.values())
        return {str(k): v for k, v in self._items.items()}

    def to_json(self, indent: int | None = None) -> str:
        return encode(self.json_value(), indent=indent)

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedList):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())

    def __repr__(self) -> str:
        if keys_are_list_shaped(self._items):
            return f"OrderedList({list(self._items.values())!r})"
        return f"OrderedList({self._items!r})"

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
    def _validate(cls, value: Any) -> OrderedList[Any]:
        if isinstance(value, OrderedList):
            return value
        try:
            return cls.create(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc
