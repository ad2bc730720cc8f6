#!/usr/bin/env python3
import pytest
from pydantic import ValidationError

from canonspec.core.document.metadata import SpecificationMetadata


def test_required_fields():
    md = SpecificationMetadata(id="blog-post", version="1.0.0", publisher="content.org")
    assert md.title is None and md.description is None


@pytest.mark.parametrize("missing", ["id", "version", "publisher"])
def test_missing_required_field_raises(missing):
    data = {"id": "x", "version": "1.0.0", "publisher": "a.org"}
    data.pop(missing)
    with pytest.raises(ValidationError, match=missing):
        SpecificationMetadata.model_validate(data)


def test_format_rules_are_not_enforced_at_decode():
    # bad id and version decode fine; the validation engine reports them
    md = SpecificationMetadata(id="Bad_ID", version="v1", publisher="nodomain")
    assert md.id == "Bad_ID"


def test_numeric_version_is_stringified():
    assert SpecificationMetadata(id="x", version=2.1, publisher="a.org").version == "2.1"


def test_extra_keys_are_ignored():
    md = SpecificationMetadata(id="x", version="1.0.0", publisher="a.org", license="MIT")
    assert not hasattr(md, "license")
    assert md.model_dump(exclude_none=True) == {"id": "x", "version": "1.0.0", "publisher": "a.org"}
