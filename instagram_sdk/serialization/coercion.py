"""
Value coercion from raw JSON values to declared field shapes.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Optional

from ..core.errors import DecodeError
from .descriptor import FieldKind, FieldSpec, ScalarKind


class _Absent:
    """Marker for a value that leaves the field at its default."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

_TRUE_STRINGS = ("true", "1", "yes")
_FALSE_STRINGS = ("false", "0", "no")

# JSON number grammar only: no underscores, no inf/nan, no hex.
_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_NUMBER_RE = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")

# (raw object, field target, JSON path) -> decoded object or ABSENT
NestedDecoder = Callable[[Dict[str, Any], Any, str], Any]


def json_kind(value: Any) -> str:
    """
    Name the JSON kind of a parsed value.
    """

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


def _to_int(value: Any, path: str) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise DecodeError(path, "int", "number")
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.match(text):
            return int(text)
        if _NUMBER_RE.match(text):
            number = float(text)
            if number.is_integer():
                return int(number)
        raise DecodeError(path, "int", "string")
    raise DecodeError(path, "int", json_kind(value))


def _to_float(value: Any, path: str) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if _NUMBER_RE.match(text):
            return float(text)
        raise DecodeError(path, "float", "string")
    raise DecodeError(path, "float", json_kind(value))


def _to_bool(value: Any, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise DecodeError(path, "bool", "string")
    raise DecodeError(path, "bool", json_kind(value))


def _to_string(value: Any, path: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise DecodeError(path, "string", json_kind(value))


_SCALARS = {
    ScalarKind.INT: _to_int,
    ScalarKind.FLOAT: _to_float,
    ScalarKind.BOOL: _to_bool,
    ScalarKind.STRING: _to_string,
}


def coerce_scalar(value: Any, kind: ScalarKind, path: str) -> Any:
    """
    Coerce a raw JSON value to a scalar kind; ``null`` yields ABSENT.
    """

    if value is None:
        return ABSENT
    if kind is ScalarKind.RAW:
        return value
    return _SCALARS[kind](value, path)


def coerce_field(
    value: Any,
    spec: FieldSpec,
    path: str,
    decode_nested: NestedDecoder,
) -> Any:
    """
    Coerce the raw value of one field, delegating objects to ``decode_nested``.
    """

    if spec.kind is FieldKind.SCALAR:
        return coerce_scalar(value, spec.scalar or ScalarKind.RAW, path)

    if spec.kind is FieldKind.OBJECT:
        if value is None:
            return ABSENT
        if not isinstance(value, dict):
            raise DecodeError(path, "object", json_kind(value))
        return decode_nested(value, spec.target, path)

    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(path, "array", json_kind(value))

    items: List[Any] = []
    for index, element in enumerate(value):
        element_path = f"{path}[{index}]"
        if element is None:
            continue
        if not isinstance(element, dict):
            raise DecodeError(element_path, "object", json_kind(element))
        decoded = decode_nested(element, spec.target, element_path)
        if decoded is not ABSENT:
            items.append(decoded)
    return items


def identifier_key(value: Any) -> Optional[str]:
    """
    Normalize an identifier value for the object index (``5`` == ``"5"``).
    """

    if value is None or value is ABSENT:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
