#!/usr/bin/env python3
"""
Purpose:
    Type Definition Loaders: given a dependency reference, return the
    referenced type definition document. The local loader reads installed
    specifications from `.canon/<publisher>/<id>/<version>/canon.yml` under
    one or more roots; the static loader serves documents held in memory.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol

from canonspec.core.document.document import SpecificationDocument
from canonspec.core.errors import TypeDefinitionNotFound
from canonspec.core.reference.dependency import DependencyReference

logger = logging.getLogger(__name__)


class TypeDefinitionLoader(Protocol):
    """Anything that can produce a type definition for a reference."""

    def load(self, ref: DependencyReference) -> SpecificationDocument:
        """
        Raises:
            TypeDefinitionNotFound: if no definition exists for `ref`.
            InvalidDocumentStructure: if a definition exists but cannot be decoded.
        """
        ...


class LocalTypeLoader:
    """
    Loads type definitions installed under one or more project roots.

    Roots are searched in order; the first existing file wins. Parsed
    documents are cached by URI for the lifetime of the loader.
    """

    def __init__(self, roots: Iterable[Path]):
        self._roots = [Path(r) for r in roots]
        self._cache: Dict[str, SpecificationDocument] = {}

    @property
    def roots(self) -> List[Path]:
        """Roots searched by this loader."""
        return list(self._roots)

    def locate(self, ref: DependencyReference) -> Optional[Path]:
        """Return the first existing stored file for `ref`, or None."""
        for root in self._roots:
            candidate = ref.local_file(root)
            if candidate.is_file():
                return candidate
        return None

    def load(self, ref: DependencyReference) -> SpecificationDocument:
        key = ref.to_uri()
        if key in self._cache:
            return self._cache[key]

        path = self.locate(ref)
        if path is None:
            searched = ", ".join(str(r) for r in self._roots) or "<none>"
            raise TypeDefinitionNotFound(key, f"not found locally (searched: {searched})")

        logger.info("Loading type definition %s from %s", key, path)
        try:
            doc = SpecificationDocument.from_file(path)
        except OSError as e:
            raise TypeDefinitionNotFound(key, f"could not be read from {path}: {e}") from e
        self._cache[key] = doc
        return doc

    def clear(self) -> None:
        self._cache.clear()


class StaticTypeLoader:
    """
    Serves already-resolved type definitions keyed by URI.

    Example
    -------
    >>> loader = StaticTypeLoader({"content.org/blog-post@1.0.0": type_doc})
    """

    def __init__(self, documents: Optional[Mapping[str, SpecificationDocument]] = None):
        self._documents: Dict[str, SpecificationDocument] = dict(documents or {})

    @classmethod
    def from_documents(cls, documents: Iterable[SpecificationDocument]) -> StaticTypeLoader:
        """Key each type definition by its own metadata (`publisher/id@version`)."""
        return cls({doc.uri: doc for doc in documents})

    def add(self, uri: str, document: SpecificationDocument) -> None:
        self._documents[uri] = document

    def load(self, ref: DependencyReference) -> SpecificationDocument:
        key = ref.to_uri()
        try:
            return self._documents[key]
        except KeyError:
            raise TypeDefinitionNotFound(key) from None
