#!/usr/bin/env python3
"""
Purpose:
    YAML loading for specification documents. Uses a SafeLoader subclass that
    leaves timestamps as plain strings, so `date: 2024-01-01` is content of
    kind string rather than a `datetime.date`.
"""

from typing import Any

import yaml

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class CanonLoader(yaml.SafeLoader):
    """SafeLoader without implicit timestamp resolution."""


CanonLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_yaml_text(text: str) -> Any:
    """Parse YAML text with `CanonLoader`. Raises `yaml.YAMLError` on bad syntax."""
    return yaml.load(text, Loader=CanonLoader)


def dump_yaml(data: Any) -> str:
    """Serialize to block-style YAML, preserving key order."""
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
