#!/usr/bin/env python3
"""
Purpose:
    Resolves a type reference into its effective schema by composing the
    schemas of its `includes` (depth-first, declared order) beneath its own.
    Resolution is bounded: a reference already on the resolution stack is a
    cycle and is skipped, as is anything deeper than `max_depth`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from canonspec.core.constants import DEFAULT_MAX_INCLUDE_DEPTH
from canonspec.core.document.document import SpecificationDocument
from canonspec.core.errors import CanonError, InvalidUri
from canonspec.core.loader import TypeDefinitionLoader
from canonspec.core.reference.dependency import DependencyReference
from canonspec.core.schema.schema_field import SchemaMap
from canonspec.core.validation.issues import IssueCategory, Severity, ValidationIssue

logger = logging.getLogger(__name__)

# Issues raised while resolving are attributed to the document's `type` key
RESOLUTION_PATH = "type"


@dataclass(frozen=True)
class ResolvedType:
    """A loaded type definition and its composed schema."""
    reference: DependencyReference
    document: SpecificationDocument
    schema: SchemaMap
    issues: Tuple[ValidationIssue, ...] = ()


class TypeResolver:
    """
    Example
    -------
    >>> resolver = TypeResolver(LocalTypeLoader([Path(".")]))
    >>> resolved = resolver.resolve(DependencyReference.parse("content.org/blog-post@1.0.0"))
    >>> list(resolved.schema)
    ['title', 'author', 'body']
    """

    def __init__(self, loader: TypeDefinitionLoader, max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH):
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        self._loader = loader
        self._max_depth = max_depth

    def resolve(self, ref: DependencyReference) -> ResolvedType:
        """
        Load `ref` and compose its effective schema.

        Raises:
            CanonError: if the root type itself cannot be loaded or decoded.
                Failures on included types are reported as warnings instead.
        """
        document = self._loader.load(ref)
        issues: List[ValidationIssue] = []
        schema = self._compose(document, [ref.to_uri()], issues)
        return ResolvedType(ref, document, schema, tuple(issues))

    # --- Internals --- #

    def _compose(self, document: SpecificationDocument, stack: List[str], issues: List[ValidationIssue]) -> SchemaMap:
        merged: SchemaMap = {}
        for include in document.includes or []:
            merged.update(self._resolve_include(include, stack, issues))
        merged.update(document.schema_fields)
        return merged

    def _resolve_include(self, include: str, stack: List[str], issues: List[ValidationIssue]) -> SchemaMap:
        try:
            ref = DependencyReference.parse(include)
        except InvalidUri as e:
            issues.append(_warning(f"Include '{include}' of '{stack[-1]}' skipped: {e}"))
            return {}

        key = ref.to_uri()
        if key in stack:
            chain = " -> ".join([*stack, key])
            logger.warning("Cyclic include detected: %s", chain)
            issues.append(_warning(f"Cyclic include '{key}' skipped ({chain})"))
            return {}

        if len(stack) > self._max_depth:
            issues.append(_warning(
                f"Include '{key}' skipped: include depth exceeds {self._max_depth}"
            ))
            return {}

        try:
            document = self._loader.load(ref)
        except CanonError as e:
            logger.warning("Could not load included type %s: %s", key, e)
            issues.append(_warning(f"Could not load included type '{key}': {e}"))
            return {}

        logger.debug("Composing include %s into %s", key, stack[-1])
        return self._compose(document, [*stack, key], issues)


def _warning(message: str) -> ValidationIssue:
    return ValidationIssue(Severity.WARNING, RESOLUTION_PATH, message, IssueCategory.TYPE_RESOLUTION)
