#!/usr/bin/env python3
"""
Purpose:
    Exception types raised by canonspec. Each also derives from the builtin
    the rest of the code base would otherwise raise (ValueError, LookupError),
    so callers can catch either.
"""
from __future__ import annotations

from typing import Iterable, List


class CanonError(Exception):
    """Base class for all canonspec errors."""


class InvalidUri(CanonError, ValueError):
    """A dependency URI does not match `publisher/id[@[^|~]version]`."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(
            f"Invalid dependency URI format: {uri}. Expected format: publisher/id[@version]"
        )


class InvalidDocumentStructure(CanonError, ValueError):
    """
    Raw text could not be decoded into a specification document.

    `details` holds one-line `path: message` entries when available.
    """

    def __init__(self, message: str, details: Iterable[str] = ()):
        self.details: List[str] = list(details)
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if not self.details:
            return base
        return base + "\n" + "\n".join(f"  - {d}" for d in self.details)


class TypeDefinitionNotFound(CanonError, LookupError):
    """A type definition could not be located by a loader."""

    def __init__(self, uri: str, reason: str = "not found"):
        self.uri = uri
        super().__init__(f"Type definition {uri!r} {reason}")
