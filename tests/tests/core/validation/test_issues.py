#!/usr/bin/env python3
from dataclasses import FrozenInstanceError

import pytest

from canonspec.core.validation.issues import IssueCategory, IssueCollector, Severity, ValidationIssue


def test_collector_splits_by_severity_and_keeps_order():
    c = IssueCollector()
    c.warning("w1", "first warning")
    c.error("e1", "first error")
    c.warning("w2", "second warning")
    c.error("e2", "second error", IssueCategory.SCHEMA_DEFINITION)

    assert [i.path for i in c.errors] == ["e1", "e2"]
    assert [i.path for i in c.warnings] == ["w1", "w2"]
    assert c.errors[1].category is IssueCategory.SCHEMA_DEFINITION
    assert repr(c) == "<IssueCollector errors=2 warnings=2>"


def test_extend_routes_each_issue():
    c = IssueCollector()
    c.extend([
        ValidationIssue(Severity.WARNING, "type", "w", IssueCategory.TYPE_RESOLUTION),
        ValidationIssue(Severity.ERROR, "x", "e"),
    ])
    assert len(c.errors) == 1 and len(c.warnings) == 1
    assert IssueCollector().errors == []


def test_issue_defaults_and_str():
    issue = ValidationIssue(Severity.ERROR, "a.b", "boom")
    assert issue.category is IssueCategory.SCHEMA_CONSTRAINT
    assert issue.is_error
    assert str(issue) == "boom"
    with pytest.raises(FrozenInstanceError):
        issue.path = "c"
