#!/usr/bin/env python3
"""
Core constants used across canonspec.

- Protocol: meta-type reference for type definitions, protocol version.
- Storage: local cache directory, document filename, registry base URL.
- File handling: supported extensions and default text encoding.
- Regular expressions: compiled patterns used by validators and normalizers.
"""

import re
from typing import Final

# --- Protocol constants --- #

# Type reference identifying a document as a type definition
TYPE_DEFINITION_URI: Final[str] = "canon-protocol.org/type@1.0.0"

# Protocol version emitted by this library (MAJOR.MINOR)
CANON_PROTOCOL_VERSION: Final[str] = "1.0"

# Top-level keys with a fixed meaning; everything else in a document is content
RESERVED_DOCUMENT_KEYS: Final[tuple[str, ...]] = ("canon", "type", "metadata", "includes", "schema")

# Publishers accepted without a dot in their name
LOCAL_PUBLISHERS: Final[frozenset[str]] = frozenset({"localhost", "example"})

# Version token used in fetch URLs when a reference carries no version
LATEST_VERSION_TOKEN: Final[str] = "latest"


# --- Storage constants --- #

# Directory (relative to a project root) holding installed specifications
LOCAL_STORE_DIRNAME: Final[str] = ".canon"

# Filename of a specification document inside a project or store entry
SPEC_FILENAME: Final[str] = "canon.yml"

# Default registry serving specifications
DEFAULT_REGISTRY_URL: Final[str] = "https://canon.canon-protocol.org"

# Supported document file extensions
SUPPORTED_DOCUMENT_EXT: Final[frozenset[str]] = frozenset({".yml", ".yaml"})

# Default text encoding
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"

# Upper bound on nested `includes` resolution
DEFAULT_MAX_INCLUDE_DEPTH: Final[int] = 16


# --- Regular Expressions --- #
# Matches strict SemVer strings (e.g., 1.2.3 only)
STRICT_SEMVER_RE: re.Pattern[str] = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")

# Protocol version strings: digits and dots only
PROTOCOL_VERSION_CHARS_RE: re.Pattern[str] = re.compile(r"^[0-9.]*$")

# Allowed metadata ids: lowercase letters, digits, hyphen
METADATA_ID_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[a-z0-9-]+$")

# Preferred schema field names: lowercase letters, digits, underscore
FIELDNAME_PREFERRED_RE: re.Pattern[str] = re.compile(r"^[a-z0-9_]*$")


# --- Runtime guard --- #
def validate_constants():
    """
    Ensure constants are valid at runtime.
    """
    if CANON_PROTOCOL_VERSION.count(".") != 1:
        raise RuntimeError(
            f"CANON_PROTOCOL_VERSION must be MAJOR.MINOR, got {CANON_PROTOCOL_VERSION!r}"
        )

validate_constants()
