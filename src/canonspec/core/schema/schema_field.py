#!/usr/bin/env python3
"""
Purpose:
    Implements the recursive SchemaField model describing the shape of a
    document's content: a field type plus optional constraints, with nested
    fields under `properties` (objects) and `items` (arrays).
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from canonspec.core.schema.field_type import FieldType
from canonspec.core.schema.value import normalize_value


# --- Model --- #

class SchemaField(BaseModel):
    """
    One field in a type definition's `schema` map.

    Keys (all but `type` optional):
      - type:        field type (string, number, boolean, object, array, ref, any)
      - required:    whether the key must be present in content
      - uri:         for ref fields, the referenced type (operators allowed here)
      - pattern:     regex applied to string values
      - enum:        allowed literal values (any type)
      - properties:  nested fields for objects
      - items:       element schema for arrays
      - description: human-readable text

    Applicability rules (properties ⇒ object, items ⇒ array, ref ⇒ uri,
    pattern ⇒ string) are not enforced here; they are reported by the
    type-definition checks so that a malformed schema still decodes.
    Keys outside this list (e.g. `default`) are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: FieldType = Field(..., description="Field type.")
    required: Optional[bool] = Field(default=None, description="Whether this field must be present.")
    uri: Optional[str] = Field(default=None, description="Referenced type URI for ref fields.")
    pattern: Optional[str] = Field(default=None, description="Regex applied to string values.")
    enum: Optional[List[Any]] = Field(default=None, description="Allowed literal values.")
    properties: Optional[Dict[str, SchemaField]] = Field(default=None, description="Nested object fields.")
    items: Optional[SchemaField] = Field(default=None, description="Array element schema.")
    description: Optional[str] = Field(default=None, description="Human-readable description.")

    # --- Validators --- #

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, v: Any) -> FieldType:
        """Coerce incoming values to FieldType (case-insensitive)."""
        return FieldType.parse(v)

    @field_validator("enum", mode="before")
    @classmethod
    def _normalize_enum(cls, v: Any) -> Any:
        if v is None or not isinstance(v, list):
            return v
        try:
            return [normalize_value(o) for o in v]
        except TypeError as e:
            raise ValueError(str(e)) from None

    # --- Convenience --- #

    @property
    def is_required(self) -> bool:
        """True if the field is marked `required: true`."""
        return bool(self.required)

    def children(self, path: str) -> Iterator[Tuple[str, str, SchemaField]]:
        """
        Yield `(name, child_path, field)` for nested schema fields.

        Object properties are addressed as `path.name`, the array element as
        `path[]` with an empty name.
        """
        for name, child in (self.properties or {}).items():
            yield name, f"{path}.{name}", child
        if self.items is not None:
            yield "", f"{path}[]", self.items

    def to_wire(self) -> Dict[str, Any]:
        """Emit the authoring shape (lowercase type, unset keys omitted)."""
        return self.model_dump(mode="json", exclude_none=True)


SchemaMap = Dict[str, SchemaField]


# --- Forward-Ref Resolution --- #
SchemaField.model_rebuild()
