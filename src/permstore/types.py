"""Value types that can live in a store.

A field holds a primitive, a plain JSON-like container, a nested store, or a
zero-argument callable (a lazy value) that produces one of those on read.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from .store import Store

JSONPrimitive = Union[str, int, float, bool, None]
JSONObject = dict[str, Any]
JSONArray = list[Any]
JSONValue = Union[JSONPrimitive, JSONObject, JSONArray]

StoreResult = Union["Store", JSONPrimitive, JSONObject, JSONArray]
StoreValue = Union[StoreResult, Callable[[], StoreResult]]


class ValueKind(str, Enum):
    """Tag used by the path walk to dispatch on a field value."""

    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STORE = "store"
    THUNK = "thunk"


__all__ = [
    "JSONArray",
    "JSONObject",
    "JSONPrimitive",
    "JSONValue",
    "StoreResult",
    "StoreValue",
    "ValueKind",
]
