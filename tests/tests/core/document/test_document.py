#!/usr/bin/env python3
from pathlib import Path
from textwrap import dedent

import pytest

from canonspec.core.constants import DEFAULT_TEXT_ENCODING
from canonspec.core.document.document import SpecificationDocument
from canonspec.core.errors import InvalidDocumentStructure
from canonspec.core.schema.field_type import FieldType


BLOG_POST = dedent("""\
    canon: "1.0"
    type: content.org/blog-post@1.0.0
    metadata:
      id: hello-world
      version: 1.0.0
      publisher: example.com
      title: Hello
    title: Hello World
    author: profiles.org/jane@1.0.0
    published: 2024-01-01
    tags: [intro, news]
""")

TYPE_DEF = dedent("""\
    canon: "1.0"
    type: canon-protocol.org/type@1.0.0
    metadata:
      id: blog-post
      version: 1.0.0
      publisher: content.org
    includes:
      - standards.org/metadata@1.0.0
    schema:
      title:
        type: string
        required: true
      tags:
        type: array
        items:
          type: string
      status:
        type: string
        enum: [draft, published]
""")


# --- Decoding --- #

def test_from_yaml_splits_reserved_keys_and_content():
    doc = SpecificationDocument.from_yaml(BLOG_POST)
    assert doc.protocol_version == "1.0"
    assert doc.type_reference == "content.org/blog-post@1.0.0"
    assert doc.metadata.id == "hello-world"
    assert doc.metadata.title == "Hello"
    assert doc.includes is None
    assert doc.type_schema is None
    assert list(doc.content) == ["title", "author", "published", "tags"]
    assert doc.is_type_definition is False
    assert doc.uri == "example.com/hello-world@1.0.0"


def test_dates_stay_strings():
    doc = SpecificationDocument.from_yaml(BLOG_POST)
    assert doc.content["published"] == "2024-01-01"


def test_type_definition_decodes_schema():
    doc = SpecificationDocument.from_yaml(TYPE_DEF)
    assert doc.is_type_definition is True
    assert doc.includes == ["standards.org/metadata@1.0.0"]
    assert doc.schema_fields["title"].is_required
    assert doc.schema_fields["tags"].items.type is FieldType.STRING
    assert doc.schema_fields["status"].enum == ["draft", "published"]
    assert doc.content == {}


def test_numeric_protocol_and_metadata_version_are_kept_as_text():
    doc = SpecificationDocument.from_yaml(dedent("""\
        canon: 1.0
        type: a.org/b@1.0.0
        metadata: {id: x, version: 1.0, publisher: a.org}
    """))
    assert doc.protocol_version == "1.0"
    assert doc.metadata.version == "1.0"


def test_content_key_named_content_is_content():
    doc = SpecificationDocument.from_yaml(dedent("""\
        canon: "1.0"
        type: a.org/b@1.0.0
        metadata: {id: x, version: 1.0.0, publisher: a.org}
        content: body text
    """))
    assert doc.content == {"content": "body text"}


def test_unknown_metadata_and_schema_keys_still_decode():
    doc = SpecificationDocument.from_yaml(
        TYPE_DEF.replace("  publisher: content.org\n", "  publisher: content.org\n  license: MIT\n")
        .replace("    type: string\n    required: true\n", "    type: string\n    required: true\n    default: Untitled\n")
    )
    assert doc.metadata.publisher == "content.org"
    assert doc.schema_fields["title"].is_required
    assert "default" not in doc.schema_fields["title"].to_wire()


# --- Structural failures --- #

@pytest.mark.parametrize("text,match", [
    ("canon: [unclosed", "Invalid YAML syntax"),
    ("", "document is empty"),
    ("- just\n- a list\n", "expected a mapping"),
])
def test_undecodable_text(text, match):
    with pytest.raises(InvalidDocumentStructure, match=match):
        SpecificationDocument.from_yaml(text)


def test_missing_metadata_reports_paths():
    with pytest.raises(InvalidDocumentStructure) as ei:
        SpecificationDocument.from_yaml('canon: "1.0"\ntype: a.org/b@1.0.0\n')
    assert any(d.startswith("metadata:") for d in ei.value.details)
    assert "metadata" in str(ei.value)


def test_bad_schema_field_type_is_structural():
    text = TYPE_DEF.replace("type: array", "type: list")
    with pytest.raises(InvalidDocumentStructure) as ei:
        SpecificationDocument.from_yaml(text)
    assert any("schema.tags.type" in d for d in ei.value.details)


def test_unsupported_content_value_is_structural():
    text = BLOG_POST + "blob: !!binary aGVsbG8=\n"
    with pytest.raises(InvalidDocumentStructure, match="Invalid specification structure"):
        SpecificationDocument.from_yaml(text)


def test_recursive_alias_is_structural():
    with pytest.raises(InvalidDocumentStructure, match="Invalid specification structure") as ei:
        SpecificationDocument.from_yaml(BLOG_POST + "loop: &a [*a]\n")
    assert any("Recursive value" in d for d in ei.value.details)


def test_repeated_alias_is_not_recursive():
    doc = SpecificationDocument.from_yaml(BLOG_POST + "first: &x [1, 2]\nsecond: *x\n")
    assert doc.content["first"] == doc.content["second"] == [1, 2]


def test_invalid_structure_is_value_error():
    with pytest.raises(ValueError):
        SpecificationDocument.from_yaml("just a scalar")


# --- Files --- #

def test_from_file(tmp_path: Path):
    p = tmp_path / "canon.yml"
    p.write_text(BLOG_POST, encoding=DEFAULT_TEXT_ENCODING)
    doc = SpecificationDocument.from_file(p)
    assert doc.metadata.publisher == "example.com"


def test_from_file_missing_and_bad_extension(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        SpecificationDocument.from_file(tmp_path / "nope.yml")
    bad = tmp_path / "canon.json"
    bad.write_text("{}", encoding=DEFAULT_TEXT_ENCODING)
    with pytest.raises(ValueError, match="expected a .yml/.yaml file"):
        SpecificationDocument.from_file(bad)


# --- Encoding --- #

def test_dump_is_wire_shape_in_order():
    doc = SpecificationDocument.from_yaml(TYPE_DEF)
    dumped = doc.model_dump()
    assert list(dumped) == ["canon", "type", "metadata", "includes", "schema"]
    assert dumped["metadata"] == {"id": "blog-post", "version": "1.0.0", "publisher": "content.org"}
    assert dumped["schema"]["tags"] == {"type": "array", "items": {"type": "string"}}


def test_yaml_round_trip_is_stable():
    for text in (BLOG_POST, TYPE_DEF):
        doc = SpecificationDocument.from_yaml(text)
        again = SpecificationDocument.from_yaml(doc.to_yaml())
        assert again == doc
        assert again.to_yaml() == doc.to_yaml()
