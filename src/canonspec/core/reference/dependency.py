#!/usr/bin/env python3
"""
Purpose:
    Parses and formats dependency references of the form
    `publisher/id[@[^|~]version]`, and maps them onto local storage paths and
    registry fetch URLs. Everything here is pure; no filesystem or network access.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from canonspec.core.constants import (
    DEFAULT_REGISTRY_URL,
    LATEST_VERSION_TOKEN,
    LOCAL_STORE_DIRNAME,
    SPEC_FILENAME,
)
from canonspec.core.errors import InvalidUri


class VersionOperator(str, Enum):
    """
    Compatibility operators allowed in schema-side references.

    - caret (^) : compatible changes
    - tilde (~) : patch-level changes
    """

    CARET = "^"
    TILDE = "~"

    @classmethod
    def from_prefix(cls, version: str) -> Optional[VersionOperator]:
        """
        Return the operator encoded by the first character of `version`, if any.

        >>> VersionOperator.from_prefix("^1.0.0")
        <VersionOperator.CARET: '^'>
        >>> VersionOperator.from_prefix("1.0.0") is None
        True
        """
        if not version:
            return None
        try:
            return cls(version[0])
        except ValueError:
            return None


class DependencyReference(BaseModel):
    """
    A parsed reference to another specification document.

    Example
    -------
    >>> ref = DependencyReference.parse("profiles.org/author@^1.0.0")
    >>> (ref.publisher, ref.id, ref.version, ref.operator)
    ('profiles.org', 'author', '1.0.0', <VersionOperator.CARET: '^'>)
    >>> ref.to_uri()
    'profiles.org/author@^1.0.0'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    publisher: str = Field(..., description="Publisher domain or subdomain.")
    id: str = Field(..., description="Specification identifier within the publisher.")
    version: Optional[str] = Field(default=None, description="Version, without any operator.")
    operator: Optional[VersionOperator] = Field(default=None, description="Compatibility operator, if any.")

    # --- Parsing / formatting --- #

    @classmethod
    def parse(cls, uri: str) -> DependencyReference:
        """
        Parse `publisher/id[@[^|~]version]`.

        Splits on the first '@'; the path must contain exactly one '/'.

        Raises:
            InvalidUri: if the path part does not have exactly two segments.
        """
        path, sep, version_part = uri.partition("@")
        segments = path.split("/")
        if len(segments) != 2:
            raise InvalidUri(uri)
        publisher, identifier = segments

        if not sep:
            return cls(publisher=publisher, id=identifier)

        operator = VersionOperator.from_prefix(version_part)
        version = version_part[1:] if operator else version_part
        return cls(publisher=publisher, id=identifier, version=version, operator=operator)

    def to_uri(self) -> str:
        """Format back to URI form; the exact inverse of `parse`."""
        base = f"{self.publisher}/{self.id}"
        if self.version is None:
            return base
        prefix = self.operator.value if self.operator else ""
        return f"{base}@{prefix}{self.version}"

    def __str__(self) -> str:
        return self.to_uri()

    # --- Convenience --- #

    @property
    def is_pinned(self) -> bool:
        """True if the reference names an exact version (no operator)."""
        return self.version is not None and self.operator is None

    def local_path(self, root: Optional[Path] = None) -> Path:
        """
        Storage directory for this reference: `[root/].canon/<publisher>/<id>[/<version>]`.
        """
        path = Path(LOCAL_STORE_DIRNAME) / self.publisher / self.id
        if self.version is not None:
            path = path / self.version
        return Path(root) / path if root is not None else path

    def local_file(self, root: Optional[Path] = None) -> Path:
        """Path of the stored specification document for this reference."""
        return self.local_path(root) / SPEC_FILENAME

    def canonical_url(self, base_url: str = DEFAULT_REGISTRY_URL) -> str:
        """Registry URL of the specification document; unversioned → 'latest'."""
        version = self.version if self.version is not None else LATEST_VERSION_TOKEN
        return f"{base_url.rstrip('/')}/{self.publisher}/{self.id}/{version}/{SPEC_FILENAME}"
