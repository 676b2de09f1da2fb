"""``roost aliases`` — check an alias file before deploying it."""

import argparse
import sys

from roost.aliases import load_aliases
from roost.errors import AliasLoadError


def run_aliases(args: argparse.Namespace) -> None:
    """Print every ``source -> target`` pair, or exit 1 if the file is broken."""
    try:
        aliases = load_aliases(args.file)
    except AliasLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not aliases:
        print("No aliases defined.")
        return

    width = max(len(source) for source in aliases)
    for source in sorted(aliases):
        print(f"{source:<{width}}  -> {aliases[source]}")
