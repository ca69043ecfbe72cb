"""Protocol interfaces shared by the containers and their helpers.

Helpers in ``arraykit.core`` never import the container classes directly;
they talk to them through these protocols so the import graph stays
one-directional.
"""

from __future__ import annotations

from typing import Any, Hashable, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Uniqueness
# ---------------------------------------------------------------------------

@runtime_checkable
class DistinctionKey(Protocol):
    """Items that decide for themselves what makes them unique.

    ``OrderedList.unique()`` compares such items by the returned key
    instead of by value. A key may combine several attributes to get
    multi-column uniqueness.
    """

    def distinction_key(self) -> str: ...


# ---------------------------------------------------------------------------
# Keyed containers
# ---------------------------------------------------------------------------

@runtime_checkable
class KeyedContainer(Protocol):
    """A container backed by an insertion-ordered key -> value mapping.

    ``all()`` must return a fresh shallow copy, and the class must accept
    such a mapping as its only constructor argument. Dotted-path helpers
    rely on both to descend into and rebuild nested containers.
    """

    def all(self) -> dict[Hashable, Any]: ...

    def to_array(self) -> Any: ...


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

@runtime_checkable
class JsonEncodable(Protocol):
    """Objects that know their one-level JSON form.

    ``json_value()`` returns a list or dict whose members may themselves
    be ``JsonEncodable``; the encoder recurses through them.
    """

    def json_value(self) -> list[Any] | dict[str, Any]: ...
