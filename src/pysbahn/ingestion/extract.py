"""Typed property extraction.

Trajectory features carry a loosely typed JSON property map. Each
:class:`FieldExtractor` knows one target JSON kind and turns a lookup
into either a value or a precise :class:`~pysbahn.exceptions.DecodeError`:

- missing key: :class:`MissingPropertyError` when required, ``None`` when optional
- present but ``null``: ``None`` when optional
- present with the wrong kind: :class:`IncorrectValueTypeError`
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from pysbahn.exceptions import IncorrectValueTypeError, MissingPropertyError

T = TypeVar("T")


def json_kind(value: Any) -> str:
    """Name the JSON kind of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def serialize_value(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


class FieldExtractor(Generic[T]):
    """Accessor for one property kind in a JSON object."""

    def __init__(self, kind: str, accepts: Callable[[Any], bool], convert: Callable[[Any], T]) -> None:
        self.kind = kind
        self._accepts = accepts
        self._convert = convert

    def __repr__(self) -> str:
        return f"FieldExtractor({self.kind!r})"

    def convert(self, value: Any) -> T:
        if not self._accepts(value):
            raise IncorrectValueTypeError(self.kind, serialize_value(value), json_kind(value))
        return self._convert(value)

    def required(self, properties: Mapping[str, Any], name: str) -> T:
        if name not in properties:
            raise MissingPropertyError(name)
        return self.convert(properties[name])

    def optional(self, properties: Mapping[str, Any], name: str) -> T | None:
        value = properties.get(name)
        if value is None:
            return None
        return self.convert(value)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


STRING: FieldExtractor[str] = FieldExtractor("string", lambda v: isinstance(v, str), str)
INTEGER: FieldExtractor[int] = FieldExtractor("integer", _is_integer, int)
OBJECT: FieldExtractor[dict[str, Any]] = FieldExtractor("object", lambda v: isinstance(v, dict), dict)


def flag(properties: Mapping[str, Any], name: str) -> bool:
    """Boolean property that defaults to ``False`` when absent or not a boolean."""
    value = properties.get(name)
    return value if isinstance(value, bool) else False
