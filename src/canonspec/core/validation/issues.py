#!/usr/bin/env python3
"""
Purpose:
    Diagnostic records produced by validation, and the collector that
    accumulates them in two ordered sequences (errors, warnings).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class IssueCategory(str, Enum):
    """
    - schema-constraint : a value or document field breaks a declared rule
    - schema-definition : a type definition's schema is malformed
    - type-resolution   : a referenced type could not be resolved
    - version-policy    : unpinned or otherwise soft version issue
    """

    SCHEMA_CONSTRAINT = "schema-constraint"
    SCHEMA_DEFINITION = "schema-definition"
    TYPE_RESOLUTION = "type-resolution"
    VERSION_POLICY = "version-policy"


@dataclass(frozen=True)
class ValidationIssue:
    """One diagnostic, localized by a dotted/bracketed field path."""
    severity: Severity
    path: str
    message: str
    category: IssueCategory = IssueCategory.SCHEMA_CONSTRAINT

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        return self.message


class IssueCollector:
    """Ordered accumulator for errors and warnings; never raises."""

    def __init__(self):
        self.errors: List[ValidationIssue] = []
        self.warnings: List[ValidationIssue] = []

    def error(self, path: str, message: str, category: IssueCategory = IssueCategory.SCHEMA_CONSTRAINT) -> None:
        self.add(ValidationIssue(Severity.ERROR, path, message, category))

    def warning(self, path: str, message: str, category: IssueCategory = IssueCategory.SCHEMA_CONSTRAINT) -> None:
        self.add(ValidationIssue(Severity.WARNING, path, message, category))

    def add(self, issue: ValidationIssue) -> None:
        if issue.is_error:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def extend(self, issues: Iterable[ValidationIssue]) -> None:
        for issue in issues:
            self.add(issue)

    def __repr__(self):
        return f"<IssueCollector errors={len(self.errors)} warnings={len(self.warnings)}>"
