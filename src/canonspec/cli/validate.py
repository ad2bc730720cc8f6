#!/usr/bin/env python3
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from canonspec.core.app_context import AppContext
from canonspec.core.constants import (
    DEFAULT_MAX_INCLUDE_DEPTH,
    LOCAL_STORE_DIRNAME,
    SPEC_FILENAME,
    SUPPORTED_DOCUMENT_EXT,
)
from canonspec.core.document.document import SpecificationDocument
from canonspec.core.errors import InvalidDocumentStructure
from canonspec.core.loader import LocalTypeLoader
from canonspec.core.validation.engine import SpecificationValidator
from canonspec.core.validation.report import ValidationReport


def _is_supported_yaml_file(p: Path) -> bool:
    return p.is_file() and p.suffix.lower() in SUPPORTED_DOCUMENT_EXT


def _yaml_files_in_dir(root: Path, recursive: bool) -> list[Path]:
    if not root.is_dir():
        return []
    if recursive:
        # search each extension explicitly; pathlib has no brace expansion
        files = []
        for ext in SUPPORTED_DOCUMENT_EXT:
            files.extend(root.rglob(f"*{ext}"))
        # installed dependencies are not project files
        return [p for p in files if p.is_file() and LOCAL_STORE_DIRNAME not in p.relative_to(root).parts]
    return [p for p in root.glob("*") if _is_supported_yaml_file(p)]


def find_all_files(paths: Iterable[str | Path], recursive: bool = False) -> list[Path]:
    files: list[Path] = []
    for raw in paths:
        p = Path(raw)
        if _is_supported_yaml_file(p):
            files.append(p)
        else:
            files.extend(_yaml_files_in_dir(p, recursive))
    # stable, de-duplicated order
    return sorted(set(files))


def _roots_for_run(args, ctx: AppContext) -> List[Path]:
    """Prefer CLI-provided type roots for this run; otherwise, the context's roots."""
    if getattr(args, "type_root", None):
        return [Path(r) for r in args.type_root]
    return ctx.loader.roots


def _validator_for_file(
    file_path: Path,
    run_roots: List[Path],
    ctx: AppContext,
    cache: Dict[Tuple[Path, ...], SpecificationValidator],
) -> SpecificationValidator:
    """
    Types are looked up beside the file first (`<file dir>/.canon`), then under
    the run's roots. Files sharing a search path share a validator, and the
    context validator is reused when the search path is its own.
    """
    roots = tuple(dict.fromkeys([file_path.resolve().parent, *(r.resolve() for r in run_roots)]))
    if roots == tuple(r.resolve() for r in ctx.loader.roots):
        return ctx.validator
    if roots not in cache:
        depth = int(ctx.config.get("max_include_depth", DEFAULT_MAX_INCLUDE_DEPTH))
        cache[roots] = SpecificationValidator(LocalTypeLoader(roots), max_include_depth=depth)
    return cache[roots]


def validate_file(file_path: Path, validator: SpecificationValidator, strict: bool) -> Tuple[Optional[ValidationReport], List[str]]:
    """
    Returns: (report, decode_errors). `report` is None when the file could not be decoded.
    """
    try:
        doc = SpecificationDocument.from_file(file_path)
    except InvalidDocumentStructure as e:
        return None, [str(e).splitlines()[0], *e.details]
    except (OSError, ValueError) as e:
        return None, [str(e)]

    return validator.validate(doc, strict=strict, source=str(file_path)), []


def validate(args, ctx: AppContext) -> int:
    run_roots = _roots_for_run(args, ctx)
    validators: Dict[Tuple[Path, ...], SpecificationValidator] = {}
    strict = bool(args.strict or ctx.strict)

    targets = args.files or [SPEC_FILENAME]
    files = find_all_files(targets, recursive=args.recursive)
    if not files:
        print(f"No specification files found in: {', '.join(map(str, targets))}")
        return 1

    success = 0
    payload = []
    for fp in files:
        validator = _validator_for_file(fp, run_roots, ctx, validators)
        report, decode_errors = validate_file(fp, validator, strict)
        if report is None:
            if args.json:
                payload.append({"source": str(fp), "verdict": "fail", "decode_errors": decode_errors})
            else:
                print(f"\n{fp}: Invalid specification")
                for e in decode_errors:
                    print(f"  - {e}")
            continue

        if args.json:
            payload.append(report.to_dict())
        else:
            print()
            print(report.render())
        if report.passed:
            success += 1

    total = len(files)
    if args.json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(f"\nValidation complete: {success}/{total} passed.")
    return 0 if success == total else 1


def register(subparser):
    parser = subparser.add_parser("validate", help="Validate specification documents against their types.")
    parser.add_argument("files", nargs="*", help=f"Files or directories to validate (default: ./{SPEC_FILENAME}).")
    parser.add_argument("--recursive", "-r", action="store_true", help="Recursively scan directories.")
    parser.add_argument("--strict", action="store_true", help="Treat warnings as failures.")
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument(
        "--type-root",
        action="append",
        default=None,
        help="Override type definition roots just for this run (can be used multiple times); the file's own directory is always searched first.",
    )
    parser.set_defaults(func=validate)
