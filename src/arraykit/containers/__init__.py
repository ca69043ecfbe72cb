"""Container types: OrderedList and KeyedMap."""

from .ordered_list import OrderedList
from .keyed_map import KeyedMap

__all__ = ["OrderedList", "KeyedMap"]
