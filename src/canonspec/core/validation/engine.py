#!/usr/bin/env python3
"""
Purpose:
    Schema-driven validation of specification documents.

    - Document checks: protocol version, type reference, metadata formats.
    - Type-definition mode: meta-validates a declared `schema` and `includes`.
    - Instance mode: resolves the document's type and walks `content` against
      the type's schema, collecting every error and warning with its path.

    The walk is pure and collect-all: field-level failures never stop sibling
    checks, and nothing here mutates the document.
"""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Any, Callable, Dict, Mapping, Optional

from canonspec.core.constants import DEFAULT_MAX_INCLUDE_DEPTH
from canonspec.core.document.document import SpecificationDocument
from canonspec.core.errors import CanonError, InvalidUri
from canonspec.core.loader import TypeDefinitionLoader
from canonspec.core.reference.dependency import DependencyReference
from canonspec.core.resolver import TypeResolver
from canonspec.core.schema.field_type import FieldType
from canonspec.core.schema.schema_field import SchemaField, SchemaMap
from canonspec.core.schema.value import format_value, matches_type, values_equal
from canonspec.core.utils import (
    has_protocol_version_chars,
    is_major_minor,
    is_preferred_fieldname,
    is_strict_semver,
    is_valid_metadata_id,
    is_valid_publisher,
    join_path,
)
from canonspec.core.validation.issues import IssueCategory, IssueCollector
from canonspec.core.validation.report import ValidationReport

logger = logging.getLogger(__name__)


# --- Entry point --- #

class SpecificationValidator:
    """
    Validates documents, resolving instance types through a loader.

    Typical use:
        >>> validator = SpecificationValidator(LocalTypeLoader([Path(".")]))
        >>> report = validator.validate(SpecificationDocument.from_file("canon.yml"))
        >>> report.passed
        True

    Instances hold no per-document state and can be shared between threads
    as long as the loader can.
    """

    def __init__(self, loader: Optional[TypeDefinitionLoader] = None, *, max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH):
        self._resolver = TypeResolver(loader, max_include_depth) if loader is not None else None

    def validate(
        self,
        document: SpecificationDocument,
        *,
        schema: Optional[SchemaMap] = None,
        strict: bool = False,
        source: Optional[str] = None,
    ) -> ValidationReport:
        """
        Validate one document.

        Resolution (instance documents only):
        - If `schema` is provided, content is validated against it directly.
        - Else the type reference is resolved through the loader.
        - A type that cannot be resolved degrades to a warning.
        """
        collector = IssueCollector()
        check_protocol_version(document, collector)
        check_type_reference(document, collector)
        check_metadata(document, collector)

        if document.is_type_definition:
            check_type_definition(document, collector)
        elif schema is not None:
            validate_content(document.content, schema, collector)
        else:
            self._validate_against_type(document, collector)

        report = ValidationReport.from_collector(collector, strict=strict, source=source)
        logger.debug("Validated %s: %d issue(s)", source or document.uri, report.issue_count)
        return report

    def _validate_against_type(self, document: SpecificationDocument, collector: IssueCollector) -> None:
        try:
            ref = DependencyReference.parse(document.type_reference)
        except InvalidUri:
            return  # reported by check_type_reference

        if self._resolver is None:
            collector.warning(
                "type",
                f"Could not load type definition '{document.type_reference}' for validation: no type loader configured",
                IssueCategory.TYPE_RESOLUTION,
            )
            return

        try:
            resolved = self._resolver.resolve(ref)
        except CanonError as e:
            logger.warning("Type definition %s unavailable: %s", document.type_reference, e)
            collector.warning(
                "type",
                f"Could not load type definition '{document.type_reference}' for validation",
                IssueCategory.TYPE_RESOLUTION,
            )
            return

        collector.extend(resolved.issues)
        if resolved.document.type_schema is None and not resolved.document.includes:
            return  # type declares no schema; nothing to check content against
        validate_content(document.content, resolved.schema, collector)


def validate_document(
    document: SpecificationDocument,
    *,
    loader: Optional[TypeDefinitionLoader] = None,
    schema: Optional[SchemaMap] = None,
    strict: bool = False,
    source: Optional[str] = None,
) -> ValidationReport:
    """One-shot convenience wrapper around `SpecificationValidator.validate`."""
    return SpecificationValidator(loader).validate(document, schema=schema, strict=strict, source=source)


# --- Document checks --- #

def check_protocol_version(document: SpecificationDocument, collector: IssueCollector) -> None:
    """`canon` must be numeric and MAJOR.MINOR."""
    version = document.protocol_version
    if not has_protocol_version_chars(version):
        collector.error("canon", f"Invalid protocol version '{version}': must be numeric (e.g., '1.0')")
    if not is_major_minor(version):
        collector.error("canon", f"Invalid protocol version '{version}': must be MAJOR.MINOR format")


def check_type_reference(document: SpecificationDocument, collector: IssueCollector) -> None:
    """`type` must parse, should be versioned, and must not carry an operator."""
    uri = document.type_reference
    try:
        ref = DependencyReference.parse(uri)
    except InvalidUri as e:
        collector.error("type", f"Invalid type reference '{uri}': {e}")
        return

    if ref.version is None:
        collector.warning("type", f"Type reference '{uri}' should include a version", IssueCategory.VERSION_POLICY)
    if ref.operator is not None:
        collector.error("type", f"Type reference '{uri}' cannot use version operators (^ or ~) in instances")


def check_metadata(document: SpecificationDocument, collector: IssueCollector) -> None:
    md = document.metadata
    if not is_valid_metadata_id(md.id):
        collector.error(
            "metadata.id",
            f"Invalid metadata.id '{md.id}': must be lowercase alphanumeric with hyphens only",
        )
    if not is_strict_semver(md.version):
        collector.error(
            "metadata.version",
            f"Invalid metadata.version '{md.version}': must be semantic version (MAJOR.MINOR.PATCH)",
        )
    if not is_valid_publisher(md.publisher):
        collector.warning(
            "metadata.publisher",
            f"Publisher '{md.publisher}' should be a valid domain or subdomain",
        )


# --- Type-definition mode --- #

def check_type_definition(document: SpecificationDocument, collector: IssueCollector) -> None:
    """Meta-validate the declared schema and includes of a type definition."""
    for name, field in document.schema_fields.items():
        check_schema_field(name, name, field, collector)

    for i, include in enumerate(document.includes or []):
        path = f"includes[{i}]"
        try:
            ref = DependencyReference.parse(include)
        except InvalidUri as e:
            collector.error(path, f"Invalid include '{include}': {e}")
            continue
        if ref.version is None:
            collector.warning(path, f"Include '{include}' should specify a version", IssueCategory.VERSION_POLICY)


def check_schema_field(name: str, path: str, field: SchemaField, collector: IssueCollector) -> None:
    """
    Applicability rules for one schema field, recursing into properties/items.

    `name` is the field's own key (checked for naming style); `path` locates it.
    """
    definition = IssueCategory.SCHEMA_DEFINITION

    if not is_preferred_fieldname(name):
        collector.warning(path, f"Field name '{path}' should be lowercase with underscores", definition)

    if field.type is FieldType.REF:
        if field.uri is None:
            collector.error(path, f"Field '{path}' is type 'ref' but missing 'uri' property", definition)
        else:
            _check_schema_uri(path, field.uri, collector)

    if field.pattern is not None:
        if field.type is not FieldType.STRING:
            collector.warning(path, f"Field '{path}' has 'pattern' but is not type 'string'", definition)
        else:
            _check_pattern_compiles(path, field.pattern, collector)

    if field.properties is not None and field.type is not FieldType.OBJECT:
        collector.error(path, f"Field '{path}' has 'properties' but is not type 'object'", definition)

    if field.items is not None and field.type is not FieldType.ARRAY:
        collector.error(path, f"Field '{path}' has 'items' but is not type 'array'", definition)

    # array elements come back unnamed; only their constraints are checked
    for child_name, child_path, child in field.children(path):
        check_schema_field(child_name, child_path, child, collector)


def _check_schema_uri(path: str, uri: str, collector: IssueCollector) -> None:
    try:
        DependencyReference.parse(uri)
    except InvalidUri as e:
        collector.error(path, f"Field '{path}' has invalid 'uri' '{uri}': {e}", IssueCategory.SCHEMA_DEFINITION)


def _check_pattern_compiles(path: str, pattern: str, collector: IssueCollector) -> None:
    try:
        _compile(pattern)
    except re.error as e:
        collector.warning(
            path,
            f"Field '{path}' pattern '{pattern}' is not a valid regular expression: {e}",
            IssueCategory.SCHEMA_DEFINITION,
        )


# --- Instance mode --- #

def validate_content(content: Mapping[str, Any], schema: SchemaMap, collector: IssueCollector, path_prefix: str = "") -> None:
    """
    Validate a content mapping against a field map.

    Required fields are checked here, before descending; a missing field
    produces one error and nothing else. Keys absent from the schema are
    warnings only (schemas are open).
    """
    for name, field in schema.items():
        path = join_path(path_prefix, name)
        if name not in content:
            if field.is_required:
                collector.error(path, f"Required field '{path}' is missing")
            continue
        validate_value(content[name], field, path, collector)

    for name in content:
        if name not in schema:
            path = join_path(path_prefix, name)
            collector.warning(path, f"Unknown field '{path}' not defined in schema")


def validate_value(value: Any, field: SchemaField, path: str, collector: IssueCollector) -> None:
    """
    Validate one value. A type mismatch is reported once and stops all
    further checks for this field; otherwise the type-specific check runs,
    followed by the enum check.
    """
    if not matches_type(value, field.type):
        collector.error(path, f"Field '{path}' has wrong type: expected {field.type.value}")
        return

    _TYPE_CHECKS[field.type](value, field, path, collector)

    if field.enum is not None and not any(values_equal(value, option) for option in field.enum):
        collector.error(path, f"Field '{path}' value must be one of: {format_value(field.enum)}")


# --- Type-specific checks --- #

def _check_string(value: str, field: SchemaField, path: str, collector: IssueCollector) -> None:
    if field.pattern is None:
        return
    try:
        regex = _compile(field.pattern)
    except re.error as e:
        collector.warning(
            path,
            f"Field '{path}' pattern '{field.pattern}' is not a valid regular expression: {e}",
            IssueCategory.SCHEMA_DEFINITION,
        )
        return
    if not regex.search(value):
        collector.error(path, f"Field '{path}' value '{value}' doesn't match pattern '{field.pattern}'")


def _check_ref(value: str, field: SchemaField, path: str, collector: IssueCollector) -> None:
    try:
        ref = DependencyReference.parse(value)
    except InvalidUri as e:
        collector.error(path, f"Field '{path}' has invalid reference '{value}': {e}")
        return

    if ref.operator is not None:
        collector.error(path, f"Field '{path}' reference '{value}' cannot use version operators in instances")
    if ref.version is None:
        collector.warning(
            path,
            f"Field '{path}' reference '{value}' should specify an exact version",
            IssueCategory.VERSION_POLICY,
        )


def _check_array(value: list, field: SchemaField, path: str, collector: IssueCollector) -> None:
    if field.items is None:
        return
    for i, item in enumerate(value):
        validate_value(item, field.items, f"{path}[{i}]", collector)


def _check_object(value: dict, field: SchemaField, path: str, collector: IssueCollector) -> None:
    if field.properties is None:
        return
    validate_content(value, field.properties, collector, path)


def _no_constraints(value: Any, field: SchemaField, path: str, collector: IssueCollector) -> None:
    return


_TYPE_CHECKS: Dict[FieldType, Callable[[Any, SchemaField, str, IssueCollector], None]] = {
    FieldType.STRING: _check_string,
    FieldType.NUMBER: _no_constraints,
    FieldType.BOOLEAN: _no_constraints,
    FieldType.OBJECT: _check_object,
    FieldType.ARRAY: _check_array,
    FieldType.REF: _check_ref,
    FieldType.ANY: _no_constraints,
}


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)
