#!/usr/bin/env python3
"""
Pydantic model for specification metadata in canonspec.

Only the shape is enforced here (required strings, optional title and
description). Format rules for `id`, `version` and `publisher` are reported as
diagnostics by the validation engine, so a document with a bad id still
decodes and gets a full report.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SpecificationMetadata(BaseModel):
    """
    Metadata block required on every specification document.

    Example
    -------
    >>> from canonspec.core.document.metadata import SpecificationMetadata
    >>> md = SpecificationMetadata(id="blog-post", version="1.0.0", publisher="content.org")
    >>> md.id, md.version
    ('blog-post', '1.0.0')
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Unique identifier (lowercase, alphanumeric with hyphens).")
    version: str = Field(..., description="Semantic version (MAJOR.MINOR.PATCH).")
    publisher: str = Field(..., description="Publisher domain or subdomain.")
    title: Optional[str] = Field(default=None, description="Human-readable title.")
    description: Optional[str] = Field(default=None, description="Free-form description.")

    # --- Validators --- #

    @field_validator("version", mode="before")
    @classmethod
    def _stringify_version(cls, v: Any) -> Any:
        """
        YAML reads `version: 1.0` as a float; keep the text so the semver
        check can report it instead of failing the decode.
        """
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v
