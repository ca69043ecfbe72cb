"""arraykit: copy-on-write list and map wrappers with shape invariants."""

from .containers import KeyedMap, OrderedList
from .core.errors import (
    ArrayKitError,
    ConfigError,
    ElementLookupError,
    FirstElementMissing,
    InvalidListShape,
    ListKeyNotFound,
    MapShapeInvalid,
    ShapeError,
)
from .core.interfaces import DistinctionKey
from .core.shape import is_list_shape, is_map_shape

__all__ = [
    # Containers
    "OrderedList",
    "KeyedMap",
    # Errors
    "ArrayKitError",
    "ConfigError",
    "ShapeError",
    "InvalidListShape",
    "MapShapeInvalid",
    "ElementLookupError",
    "ListKeyNotFound",
    "FirstElementMissing",
    # Shape checks
    "is_list_shape",
    "is_map_shape",
    # Protocols
    "DistinctionKey",
]
