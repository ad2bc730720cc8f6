#!/usr/bin/env python3

import pytest

import canonspec.core.constants as const


# --- Basic sanity checks on constants --- #

def test_reserved_keys_and_supported_ext():
    assert const.RESERVED_DOCUMENT_KEYS == ("canon", "type", "metadata", "includes", "schema")
    assert all(x.startswith(".") for x in const.SUPPORTED_DOCUMENT_EXT)
    assert const.TYPE_DEFINITION_URI == "canon-protocol.org/type@1.0.0"


def test_regex_patterns_match_expected_inputs():
    assert const.STRICT_SEMVER_RE.fullmatch("1.2.3")
    assert not const.STRICT_SEMVER_RE.fullmatch("1.2")

    assert const.METADATA_ID_ALLOWED_RE.fullmatch("blog-post-2")
    assert not const.METADATA_ID_ALLOWED_RE.fullmatch("BlogPost")

    assert const.FIELDNAME_PREFERRED_RE.fullmatch("abc_123")
    assert not const.FIELDNAME_PREFERRED_RE.fullmatch("camelCase")


def test_validate_constants_passes_for_default_version():
    const.validate_constants()  # no exception


def test_validate_constants_raises_for_invalid_version(monkeypatch):
    monkeypatch.setattr(const, "CANON_PROTOCOL_VERSION", "1.0.0")
    with pytest.raises(RuntimeError, match="must be MAJOR.MINOR"):
        const.validate_constants()
