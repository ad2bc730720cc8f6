#!/usr/bin/env python3
import pytest
from pydantic import ValidationError

from canonspec.core.formatting import format_pydantic_errors_simple, format_error_loc
from canonspec.core.document.metadata import SpecificationMetadata
from canonspec.core.schema.schema_field import SchemaField


# --- Unit tests for format_error_loc --- #

@pytest.mark.parametrize("loc,expected", [
    (("includes", 1), "includes[1]"),
    (("schema", "author", "properties", "name", "type"), "schema.author.properties.name.type"),
    ((0, "items"), "[0].items"),
    ((), "<root>"),
    ((0, 1, "x"), "[0][1].x"),
    (("a", 3, 2, "b"), "a[3][2].b"),
])
def test_format_error_loc(loc, expected):
    assert format_error_loc(loc) == expected


# --- format_pydantic_errors_simple: real pydantic errors --- #

def test_format_pydantic_errors_simple_with_model_errors():
    with pytest.raises(ValidationError) as ei:
        SpecificationMetadata.model_validate({"id": "x"})
    msgs = format_pydantic_errors_simple(ei.value)
    assert msgs == ["version: Field required", "publisher: Field required"]


def test_format_pydantic_errors_simple_nested_paths():
    with pytest.raises(ValidationError) as ei:
        SchemaField.model_validate({"type": "array", "items": {"type": "list"}})
    (msg,) = format_pydantic_errors_simple(ei.value)
    assert msg.startswith("items.type: Value error, Unknown field type")


# --- format_pydantic_errors_simple: fake error sources --- #

def test_format_pydantic_errors_simple_with_pydantic_like_errors():
    class FakeValidationError(Exception):
        def errors(self):
            return [
                {"loc": ("schema", "tags", "items"), "msg": "Field required"},
                {"loc": (0, "items"), "msg": "Extra inputs are not permitted"},
                {"loc": (), "msg": "Invalid payload"},
            ]

    msgs = format_pydantic_errors_simple(FakeValidationError("ignored string"))
    assert msgs == [
        "schema.tags.items: Field required",
        "[0].items: Extra inputs are not permitted",
        "<root>: Invalid payload",
    ]


def test_format_pydantic_errors_simple_with_no_entries_uses_str_first_line():
    class Empty(Exception):
        def errors(self):
            return []

    assert format_pydantic_errors_simple(Empty("Top line only\nand the rest")) == ["Top line only"]
