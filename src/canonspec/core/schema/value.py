#!/usr/bin/env python3
"""
Purpose:
    Classifies dynamic document content into the closed set of value kinds a
    specification may hold, and provides the structural equality used for
    enum checks.
"""
from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Union

from canonspec.core.schema.field_type import FieldType

Value = Union[str, int, float, bool, None, List["Value"], Dict[str, "Value"]]


class ValueKind(str, Enum):
    """Kind of a decoded content value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    SEQUENCE = "sequence"
    MAPPING = "mapping"

    @classmethod
    def of(cls, value: Any) -> ValueKind:
        """
        Classify `value`. Booleans are checked before numbers since
        `bool` is a subclass of `int`.

        Raises:
            TypeError: if the value is outside the document value union.
        """
        if value is None:
            return cls.NULL
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, list):
            return cls.SEQUENCE
        if isinstance(value, dict):
            return cls.MAPPING
        raise TypeError(f"Unsupported value of type {type(value).__name__}: {value!r}")


# Which value kinds satisfy each field type
_ACCEPTED_KINDS: Dict[FieldType, frozenset[ValueKind]] = {
    FieldType.STRING: frozenset({ValueKind.STRING}),
    FieldType.NUMBER: frozenset({ValueKind.NUMBER}),
    FieldType.BOOLEAN: frozenset({ValueKind.BOOLEAN}),
    FieldType.OBJECT: frozenset({ValueKind.MAPPING}),
    FieldType.ARRAY: frozenset({ValueKind.SEQUENCE}),
    FieldType.REF: frozenset({ValueKind.STRING}),
    FieldType.ANY: frozenset(ValueKind),
}


def matches_type(value: Any, field_type: FieldType) -> bool:
    """True if `value` is an acceptable instance of `field_type`."""
    return ValueKind.of(value) in _ACCEPTED_KINDS[field_type]


def values_equal(a: Any, b: Any) -> bool:
    """
    Structural equality over document values.

    Kinds must match (so `true != 1`); numbers compare numerically;
    sequences compare element-wise; mappings compare key sets and values.
    """
    kind = ValueKind.of(a)
    if kind is not ValueKind.of(b):
        return False
    if kind is ValueKind.SEQUENCE:
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if kind is ValueKind.MAPPING:
        return a.keys() == b.keys() and all(values_equal(a[k], b[k]) for k in a)
    return a == b


def normalize_value(value: Any, _parents: frozenset[int] = frozenset()) -> Value:
    """
    Return `value` as a document value: nested mapping keys are coerced to
    strings, everything else must already belong to the value union.

    Containers shared through YAML aliases are copied per occurrence; a
    container that contains itself is rejected.

    Raises:
        TypeError: for values outside the union (e.g. binary or set nodes)
            and for recursive containers.
    """
    kind = ValueKind.of(value)
    if kind not in (ValueKind.SEQUENCE, ValueKind.MAPPING):
        return value
    if id(value) in _parents:
        raise TypeError(f"Recursive value: a {kind.value} contains itself")

    parents = _parents | {id(value)}
    if kind is ValueKind.SEQUENCE:
        return [normalize_value(v, parents) for v in value]
    return {str(k): normalize_value(v, parents) for k, v in value.items()}


def format_value(value: Any) -> str:
    """Compact JSON-style rendering used in diagnostics (e.g. enum sets)."""
    return json.dumps(value, ensure_ascii=False)
