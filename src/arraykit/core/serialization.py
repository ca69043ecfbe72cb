"""JSON encoding for containers.

Lists encode as JSON arrays while their indices are contiguous and as
objects with string keys once they are sparse; maps always encode as
objects. Nested containers and pydantic models are rendered through the
``default`` hook of :func:`json.dumps`.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from .config import Settings, get_settings
from .interfaces import JsonEncodable, KeyedContainer


def _default(value: Any) -> Any:
    if isinstance(value, JsonEncodable):
        return value.json_value()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(
    value: Any,
    *,
    indent: int | None = None,
    settings: Settings | None = None,
) -> str:
    """Serialize *value* (usually a container's ``json_value()``) to JSON."""
    options = (settings or get_settings()).json_options
    return json.dumps(
        value,
        default=_default,
        indent=indent,
        ensure_ascii=options.ensure_ascii,
        sort_keys=options.sort_keys,
    )


def to_plain(value: Any) -> Any:
    """Convert nested containers into plain lists and dicts."""
    if isinstance(value, KeyedContainer):
        return value.to_array()
    return value
