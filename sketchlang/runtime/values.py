"""Runtime value model and coercion rules.

Values are plain Python objects drawn from a closed set: ``int``/``float``
(numbers), ``bool``, ``str``, ``list`` and the :data:`UNDEFINED` sentinel.
Coercions follow the loose rules of the language rather than Python's:

* :func:`truthy` treats every list as true, even an empty one.
* :func:`to_number` maps anything that does not convert to a finite or
  infinite number to ``0`` (used for loop counts).
* :func:`format_value` prints integral floats without a fractional part.
"""

from __future__ import annotations

import math
from typing import Any, List, Union


class _Undefined:
    """Singleton marking the absence of a value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()

Number = Union[int, float]
Value = Union[int, float, bool, str, List[Any], _Undefined]


def is_number(value: Any) -> bool:
    """True for ints, floats and booleans (which count as 0/1 in arithmetic)."""
    return isinstance(value, (int, float))


def truthy(value: Value) -> bool:
    if value is UNDEFINED:
        return False
    if isinstance(value, list):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def to_number(value: Value, default: Number = 0) -> Number:
    """Coerce ``value`` to a number, returning ``default`` when it cannot be."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return default
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return default
        if math.isnan(number):
            return default
        return int(number) if number.is_integer() else number
    return default


def to_index(value: Value) -> int:
    """Convert an integral number to a list index; raise ``TypeError`` otherwise."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"list index must be a number, not {type_name(value)}")
    if isinstance(value, float):
        if not value.is_integer():
            raise TypeError(f"list index must be a whole number, not {format_value(value)}")
        return int(value)
    return value


def format_value(value: Value) -> str:
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, list):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    return str(value)


def type_name(value: Value) -> str:
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    return type(value).__name__


__all__ = [
    "UNDEFINED",
    "Number",
    "Value",
    "is_number",
    "truthy",
    "to_number",
    "to_index",
    "format_value",
    "type_name",
]
