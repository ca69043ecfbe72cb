"""Custom exception hierarchy for arraykit containers."""

from __future__ import annotations

from typing import Hashable


class ArrayKitError(Exception):
    """Base exception for all arraykit errors."""


# --- Configuration ---
class ConfigError(ArrayKitError):
    """Invalid or missing configuration."""


# --- Shape ---
class ShapeError(ArrayKitError, ValueError):
    """Input does not have the shape the container requires."""


class InvalidListShape(ShapeError):
    """Tried to build an OrderedList from non-contiguous keys."""

    def __init__(self, message: str = "Tried to create invalid list") -> None:
        super().__init__(message)


class MapShapeInvalid(ShapeError):
    """Tried to build a KeyedMap from list-shaped input."""

    def __init__(self, message: str = "Tried to create invalid hash map") -> None:
        super().__init__(message)


# --- Lookup ---
class ElementLookupError(ArrayKitError, LookupError):
    """Strict element access failed."""


class ListKeyNotFound(ElementLookupError):
    """A key or dotted path is missing on a strict access path."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Array key: {key} not found in array")


class FirstElementMissing(ElementLookupError):
    """head() called on a list without an element at index 0."""

    def __init__(self) -> None:
        super().__init__(
            "Accessing first element in the list failed. "
            "First element does not exist."
        )
