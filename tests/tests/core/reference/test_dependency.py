#!/usr/bin/env python3
from pathlib import Path

import pytest
from pydantic import ValidationError

from canonspec.core.errors import InvalidUri
from canonspec.core.reference.dependency import DependencyReference, VersionOperator


# --- parse --- #

def test_parse_pinned():
    ref = DependencyReference.parse("canon-protocol.org/type@1.0.0")
    assert ref.publisher == "canon-protocol.org"
    assert ref.id == "type"
    assert ref.version == "1.0.0"
    assert ref.operator is None
    assert ref.is_pinned is True


def test_parse_without_version():
    ref = DependencyReference.parse("example.com/api")
    assert (ref.publisher, ref.id, ref.version, ref.operator) == ("example.com", "api", None, None)
    assert ref.is_pinned is False


@pytest.mark.parametrize("uri,operator,version", [
    ("profiles.org/author@^1.0.0", VersionOperator.CARET, "1.0.0"),
    ("standards.org/metadata@~2.1.0", VersionOperator.TILDE, "2.1.0"),
])
def test_parse_with_operators(uri, operator, version):
    ref = DependencyReference.parse(uri)
    assert ref.operator is operator
    assert ref.version == version
    assert ref.is_pinned is False


def test_parse_splits_on_first_at_only():
    ref = DependencyReference.parse("pub.org/thing@1.0.0@extra")
    assert ref.version == "1.0.0@extra"


@pytest.mark.parametrize("bad", [
    "no-slash",
    "too/many/slashes",
    "too/many/slashes@1.0.0",
    "",
    "@1.0.0",
])
def test_parse_invalid_uri(bad):
    with pytest.raises(InvalidUri, match="Expected format: publisher/id"):
        DependencyReference.parse(bad)


def test_invalid_uri_is_a_value_error():
    with pytest.raises(ValueError):
        DependencyReference.parse("nope")


# --- to_uri round trip --- #

@pytest.mark.parametrize("uri", [
    "publisher.org/spec",
    "publisher.org/spec@1.2.3",
    "publisher.org/spec@^1.2.3",
    "publisher.org/spec@~1.2.3",
    "publisher.org/spec@",
])
def test_round_trip(uri):
    assert DependencyReference.parse(uri).to_uri() == uri


def test_str_is_uri():
    assert str(DependencyReference.parse("a.org/b@^2.0.0")) == "a.org/b@^2.0.0"


def test_reference_is_immutable():
    ref = DependencyReference.parse("a.org/b@1.0.0")
    with pytest.raises(ValidationError):
        ref.version = "2.0.0"  # type: ignore[misc]


# --- VersionOperator --- #

@pytest.mark.parametrize("text,expected", [
    ("^1", VersionOperator.CARET),
    ("~1", VersionOperator.TILDE),
    ("1.0.0", None),
    ("", None),
    ("=1.0.0", None),
])
def test_operator_from_prefix(text, expected):
    assert VersionOperator.from_prefix(text) is expected


# --- Paths / URLs --- #

def test_local_path_with_version():
    ref = DependencyReference.parse("canon-protocol.org/type@1.0.0")
    assert ref.local_path() == Path(".canon/canon-protocol.org/type/1.0.0")


def test_local_path_without_version_and_with_root(tmp_path: Path):
    ref = DependencyReference.parse("example.com/api")
    assert ref.local_path() == Path(".canon/example.com/api")
    assert ref.local_file(tmp_path) == tmp_path / ".canon" / "example.com" / "api" / "canon.yml"


def test_canonical_url():
    ref = DependencyReference.parse("canon-protocol.org/type@1.0.0")
    assert ref.canonical_url() == "https://canon.canon-protocol.org/canon-protocol.org/type/1.0.0/canon.yml"


def test_canonical_url_defaults_to_latest_and_custom_base():
    ref = DependencyReference.parse("example.com/api")
    assert ref.canonical_url("https://mirror.example.com/") == "https://mirror.example.com/example.com/api/latest/canon.yml"
