#!/usr/bin/env python3
"""
Purpose:
    Wires together the canonspec application context by merging configuration
    and building the type loader and validator.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from canonspec.core.config import load_config
from canonspec.core.constants import DEFAULT_MAX_INCLUDE_DEPTH
from canonspec.core.loader import LocalTypeLoader
from canonspec.core.validation.engine import SpecificationValidator


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration, loader and validator."""
    config: Dict[str, Any]
    loader: LocalTypeLoader
    validator: SpecificationValidator

    @property
    def strict(self) -> bool:
        return bool(self.config.get("strict", False))


# --- Factory --- #

def build_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    type_roots: Optional[Iterable[Path]] = None,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        type_roots:
            Optional override for type definition search roots. Defaults to `config['type_paths']`.

    Returns:
        AppContext: immutable bundle of config, type loader, and validator.
    """
    cfg = config or load_config()

    type_paths = [Path(p) for p in (type_roots or cfg.get("type_paths", []))]
    loader = LocalTypeLoader(type_paths)

    max_depth = int(cfg.get("max_include_depth", DEFAULT_MAX_INCLUDE_DEPTH))
    validator = SpecificationValidator(loader, max_include_depth=max_depth)

    return AppContext(config=cfg, loader=loader, validator=validator)
