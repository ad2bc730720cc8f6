#!/usr/bin/env python3
"""
Purpose:
    Defines the FieldType enumeration for canonspec schemas, along with
    helpers for parsing and introspection of field types.
"""

from __future__ import annotations

from enum import Enum


class FieldType(str, Enum):
    """
    Supported field types in a specification schema.

    - string  : textual scalar
    - number  : numeric scalar (int or float, never boolean)
    - boolean : true/false scalar
    - object  : mapping with optional named `properties`
    - array   : sequence with an optional `items` schema
    - ref     : dependency reference string (`publisher/id@version`)
    - any     : unconstrained value
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    REF = "ref"
    ANY = "any"

    # --- Parsing helpers --- #

    @classmethod
    def parse(cls, value: str | FieldType) -> FieldType:
        """
        Coerce input to a `FieldType`; strings are trimmed and lowercased.

        Raises:
            ValueError: for unknown type names.

        Examples
        --------
        >>> FieldType.parse(" String ")
        <FieldType.STRING: 'string'>
        """
        if isinstance(value, FieldType):
            return value
        text = str(value).strip().lower()
        try:
            return cls(text)
        except ValueError:
            allowed = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown field type {value!r}; valid types are: {allowed}") from None

    # --- Introspection helpers --- #

    def is_container(self) -> bool:
        """True if the field holds nested values (object or array)."""
        return self in {FieldType.OBJECT, FieldType.ARRAY}

    def is_stringlike(self) -> bool:
        """True if values of this type are strings (string or ref)."""
        return self in {FieldType.STRING, FieldType.REF}
