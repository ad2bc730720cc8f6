#!/usr/bin/env python3

import argparse
import sys

from canonspec.core.app import get_context
from canonspec.core.logging_setup import configure_logging
from canonspec.cli import config, ref, validate

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="canonspec", description="Canon specification toolkit")
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they should accept ctx)
    validate.register(subparsers)
    ref.register(subparsers)
    config.register(subparsers)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        ctx = get_context()  # built once
        configure_logging(ctx.config)
        return args.func(args, ctx)
    parser.print_help()
    return 1

if __name__ == "__main__":
    sys.exit(main())
