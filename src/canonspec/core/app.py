#!/usr/bin/env python3
"""
Purpose:
    Process-wide access to the canonspec AppContext. The context is built
    lazily on first use and rebuilt whenever overrides are supplied.
"""
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from canonspec.core.app_context import AppContext, build_context

_CTX: Optional[AppContext] = None


def get_context(
    *,
    force_reload: bool = False,
    config_override: Optional[Dict[str, Any]] = None,
    type_roots_override: Optional[Iterable[Path]] = None,
) -> AppContext:
    """
    Return the cached `AppContext`, building it when needed.

    A rebuild happens on first use, on `force_reload`, or when either override
    is given; the rebuilt context replaces the cached one.
    """
    global _CTX
    overridden = bool(config_override or type_roots_override)
    if _CTX is None or force_reload or overridden:
        _CTX = build_context(config=config_override, type_roots=type_roots_override)
    return _CTX


def reset_context() -> None:
    """Drop the cached context; the next `get_context()` call rebuilds it."""
    global _CTX
    _CTX = None
