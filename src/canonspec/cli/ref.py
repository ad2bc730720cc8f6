#!/usr/bin/env python3
import json

from canonspec.core.app_context import AppContext
from canonspec.core.constants import DEFAULT_REGISTRY_URL
from canonspec.core.errors import InvalidUri
from canonspec.core.reference.dependency import DependencyReference


def register(subparsers):
    sp = subparsers.add_parser("ref", help="Inspect a dependency reference")
    sp.add_argument("uri", help="Reference of the form publisher/id[@[^|~]version]")
    sp.add_argument("--json", action="store_true", help="JSON output")
    sp.set_defaults(func=show_ref)


def show_ref(args, ctx: AppContext) -> int:
    try:
        ref = DependencyReference.parse(args.uri)
    except InvalidUri as e:
        print(str(e))
        return 1

    registry = ctx.config.get("registry_url", DEFAULT_REGISTRY_URL)
    roots = ctx.loader.roots
    installed = ctx.loader.locate(ref)
    info = {
        "uri": ref.to_uri(),
        "publisher": ref.publisher,
        "id": ref.id,
        "version": ref.version,
        "operator": ref.operator.value if ref.operator else None,
        "pinned": ref.is_pinned,
        "local_path": str(ref.local_file(roots[0] if roots else None)),
        "url": ref.canonical_url(registry),
        "installed": str(installed) if installed else None,
    }

    if args.json:
        print(json.dumps(info, indent=2))
        return 0

    for key, value in info.items():
        print(f"  {key:10} {value if value is not None else '-'}")
    return 0
