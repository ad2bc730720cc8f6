#!/usr/bin/env python3
"""
Purpose:
    Aggregates validation issues into a report, applies the pass/fail policy
    (with strict-mode promotion of warnings) and renders the diagnostics
    through a Jinja2 text template.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from canonspec.core.validation.issues import IssueCollector, ValidationIssue

TEMPLATES_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "report.txt.j2"


class Verdict(str, Enum):
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class ValidationReport:
    """
    Final outcome of validating one document.

    Policy:
        - no issues            → pass
        - any error            → fail (in every mode)
        - only warnings        → pass, or fail when `strict`

    Strict mode only changes the verdict; warnings stay warnings in
    `warnings` and in the rendered output.
    """
    errors: Tuple[ValidationIssue, ...] = ()
    warnings: Tuple[ValidationIssue, ...] = ()
    strict: bool = False
    source: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_collector(cls, collector: IssueCollector, *, strict: bool = False, source: Optional[str] = None) -> ValidationReport:
        return cls(
            errors=tuple(collector.errors),
            warnings=tuple(collector.warnings),
            strict=strict,
            source=source,
        )

    # --- Policy --- #

    @property
    def verdict(self) -> Verdict:
        if self.errors:
            return Verdict.FAIL
        if self.warnings and self.strict:
            return Verdict.FAIL
        return Verdict.PASS

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.PASS

    @property
    def issue_count(self) -> int:
        return len(self.errors) + len(self.warnings)

    def with_strict(self, strict: bool) -> ValidationReport:
        """Same diagnostics, different policy."""
        return ValidationReport(self.errors, self.warnings, strict, self.source)

    # --- Output --- #

    def render(self) -> str:
        """Human-readable report: errors, then warnings, then the verdict line."""
        template = _build_env().get_template(REPORT_TEMPLATE)
        return template.render(
            source=self.source,
            errors=self.errors,
            warnings=self.warnings,
            passed=self.passed,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary."""
        def _issue(i: ValidationIssue) -> Dict[str, str]:
            return {"path": i.path, "message": i.message, "category": i.category.value}

        return {
            "source": self.source,
            "verdict": self.verdict.value,
            "strict": self.strict,
            "errors": [_issue(i) for i in self.errors],
            "warnings": [_issue(i) for i in self.warnings],
        }


@lru_cache(maxsize=1)
def _build_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
