#!/usr/bin/env python3
"""
Formatting helpers for canonspec.

Turns pydantic v2 `ValidationError`s into the one-line `path: message`
details carried by `InvalidDocumentStructure`.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Tuple

from pydantic import ValidationError


def iter_pydantic_errors(exc: ValidationError) -> Iterator[Tuple[str, str]]:
    """Yield `(path, message)` for each entry of `exc.errors()`, in order."""
    for err in exc.errors():
        yield format_error_loc(err.get("loc", ())), err.get("msg", "Validation error")


def format_pydantic_errors_simple(exc: ValidationError) -> List[str]:
    """
    One line per error, e.g.

        schema.author.properties.name.type: Value error, Unknown field type 'text'; ...

    An error without entries is reduced to the first line of its text.
    """
    lines = [f"{path}: {msg}" for path, msg in iter_pydantic_errors(exc)]
    return lines or [str(exc).splitlines()[0]]


def format_error_loc(loc: Iterable[Any]) -> str:
    """
    Render an error `loc` the way field paths are written elsewhere:
    names joined by dots, list indices as `[i]` suffixes.

        ('includes', 1)     -> "includes[1]"
        ('metadata', 'id')  -> "metadata.id"
        ()                  -> "<root>"
    """
    out = ""
    for seg in loc:
        if isinstance(seg, int):
            out += f"[{seg}]"
        else:
            out += f".{seg}" if out else str(seg)
    return out or "<root>"
