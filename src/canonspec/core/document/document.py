#!/usr/bin/env python3
"""
Purpose:
    Represents a specification document: protocol version, type reference,
    metadata, optional includes and schema, and free-form content. Handles
    decoding from YAML (content keys are flattened alongside the reserved keys
    on the wire) and encoding back to the same shape.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_serializer,
)

from canonspec.core.constants import (
    DEFAULT_TEXT_ENCODING,
    RESERVED_DOCUMENT_KEYS,
    SUPPORTED_DOCUMENT_EXT,
    TYPE_DEFINITION_URI,
)
from canonspec.core.document.metadata import SpecificationMetadata
from canonspec.core.errors import InvalidDocumentStructure
from canonspec.core.formatting import format_pydantic_errors_simple
from canonspec.core.schema.schema_field import SchemaField, SchemaMap
from canonspec.core.schema.value import normalize_value
from canonspec.core.yaml_loader import dump_yaml, load_yaml_text


class SpecificationDocument(BaseModel):
    """
    Any specification document: a type definition, a project, a blog post...
    The `type` reference determines which kind.

    Typical use:
        >>> doc = SpecificationDocument.from_file("canon.yml")
        >>> doc.type_reference
        'content.org/blog-post@1.0.0'
        >>> doc.content["title"]
        'Hello'
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    protocol_version: str = Field(..., alias="canon", description="Protocol version (MAJOR.MINOR).")
    type_reference: str = Field(..., alias="type", description="Type reference (publisher/id@version).")
    metadata: SpecificationMetadata = Field(..., description="Required metadata block.")
    includes: Optional[List[str]] = Field(default=None, description="Types composed into this type.")
    type_schema: Optional[Dict[str, SchemaField]] = Field(
        default=None, alias="schema", description="Schema declared by a type definition."
    )
    content: Dict[str, Any] = Field(default_factory=dict, description="Type-specific content.")

    # --- Validators --- #

    @field_validator("protocol_version", mode="before")
    @classmethod
    def _stringify_protocol_version(cls, v: Any) -> Any:
        """`canon: 1.0` decodes as a float; keep it as text for the format checks."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("content", mode="before")
    @classmethod
    def _normalize_content(cls, v: Any) -> Any:
        """Restrict content to the document value union."""
        if not isinstance(v, dict):
            return v
        try:
            return {str(k): normalize_value(val) for k, val in v.items()}
        except TypeError as e:
            raise ValueError(str(e)) from None

    # --- Serializer: flatten content back to the top level --- #

    @model_serializer(mode="plain")
    def _dump_wire(self) -> Dict[str, Any]:
        """
        Emit the wire shape: reserved keys first (unset optionals omitted),
        then content keys in their original order.
        """
        out: Dict[str, Any] = {
            "canon": self.protocol_version,
            "type": self.type_reference,
            "metadata": self.metadata.model_dump(exclude_none=True),
        }
        if self.includes is not None:
            out["includes"] = list(self.includes)
        if self.type_schema is not None:
            out["schema"] = {name: fd.to_wire() for name, fd in self.type_schema.items()}
        for k, v in self.content.items():
            out[k] = v
        return out

    # --- Decoding --- #

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> SpecificationDocument:
        """
        Build a document from a decoded mapping. Reserved keys map onto the
        model fields; every other key becomes content.

        Raises:
            InvalidDocumentStructure: if the payload does not fit the document shape.
        """
        if not isinstance(data, Mapping):
            raise InvalidDocumentStructure(
                "Invalid specification structure: expected a mapping at the top level, "
                f"got {type(data).__name__}"
            )
        payload: Dict[str, Any] = {k: data[k] for k in RESERVED_DOCUMENT_KEYS if k in data}
        payload["content"] = {k: v for k, v in data.items() if k not in RESERVED_DOCUMENT_KEYS}
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidDocumentStructure(
                "Invalid specification structure", format_pydantic_errors_simple(e)
            ) from e

    @classmethod
    def from_yaml(cls, text: str) -> SpecificationDocument:
        """
        Decode a document from YAML text.

        Raises:
            InvalidDocumentStructure: on YAML syntax errors or a shape mismatch.
        """
        try:
            data = load_yaml_text(text)
        except yaml.YAMLError as e:
            raise InvalidDocumentStructure(f"Invalid YAML syntax: {e}") from e
        if data is None:
            raise InvalidDocumentStructure("Invalid specification structure: document is empty")
        return cls.from_wire(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> SpecificationDocument:
        """
        Load a document from a YAML file (.yml/.yaml).

        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the extension is not .yml/.yaml
            InvalidDocumentStructure: if the contents are not UTF-8 or cannot be decoded
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"The file {str(p)!r} does not exist")
        if p.suffix.lower() not in SUPPORTED_DOCUMENT_EXT:
            raise ValueError(f"Invalid document file extension for {p.name!r}; expected a .yml/.yaml file")
        try:
            text = p.read_text(encoding=DEFAULT_TEXT_ENCODING)
        except UnicodeDecodeError as e:
            raise InvalidDocumentStructure(f"Invalid specification encoding in {p.name!r}: {e}") from e
        return cls.from_yaml(text)

    # --- Encoding --- #

    def to_yaml(self) -> str:
        """Encode back to YAML in wire shape."""
        return dump_yaml(self.model_dump())

    # --- Convenience --- #

    @property
    def is_type_definition(self) -> bool:
        """True if this document declares a schema for other documents."""
        return self.type_reference == TYPE_DEFINITION_URI

    @property
    def schema_fields(self) -> SchemaMap:
        """Declared schema map (empty when absent)."""
        return dict(self.type_schema or {})

    @property
    def uri(self) -> str:
        """Reference URI of this document (`publisher/id@version`)."""
        md = self.metadata
        return f"{md.publisher}/{md.id}@{md.version}"
