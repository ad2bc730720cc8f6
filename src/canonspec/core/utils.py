#!/usr/bin/env python3
"""
Purpose:
    Provides common utility functions such as identifier and version checks,
    dictionary merge, and file I/O utilities for canonspec.
"""

import json
from pathlib import Path
from typing import Dict, Any

from canonspec.core.constants import (
    STRICT_SEMVER_RE, PROTOCOL_VERSION_CHARS_RE, METADATA_ID_ALLOWED_RE,
    FIELDNAME_PREFERRED_RE, LOCAL_PUBLISHERS, DEFAULT_TEXT_ENCODING
)


# --- Validation Helpers --- #

def is_strict_semver(version: str) -> bool:
    """Return True if the version string is strict SemVer (e.g., 'x.y.z')."""
    return bool(STRICT_SEMVER_RE.fullmatch(version))


def has_protocol_version_chars(version: str) -> bool:
    """Return True if the protocol version contains only digits and dots."""
    return bool(PROTOCOL_VERSION_CHARS_RE.fullmatch(version))


def is_major_minor(version: str) -> bool:
    """Return True if the version splits into exactly two dot-separated parts."""
    return len(version.split(".")) == 2


def is_valid_metadata_id(identifier: str) -> bool:
    """Return True if the id is lowercase alphanumeric with hyphens."""
    return bool(METADATA_ID_ALLOWED_RE.fullmatch(identifier))


def is_valid_publisher(publisher: str) -> bool:
    """Return True if the publisher looks like a domain (or a known local name)."""
    return "." in publisher or publisher in LOCAL_PUBLISHERS


def is_preferred_fieldname(name: str) -> bool:
    """Return True if a schema field name is lowercase with underscores."""
    return bool(FIELDNAME_PREFERRED_RE.fullmatch(name))


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def join_path(prefix: str, name: str) -> str:
    """Join a dotted field path; an empty prefix yields the bare name."""
    return f"{prefix}.{name}" if prefix else name


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON file from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e
