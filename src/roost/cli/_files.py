"""``roost files`` — list what a site directory would serve.

Loads the directory exactly as ``roost serve`` would and prints a table
of request path, size and the content type each file is served with.
"""

import argparse
import sys

from roost.content import DEFAULT_SKIP_DIRS, load_content
from roost.errors import ContentLoadError
from roost.resolve import content_type, extension


def run_files(args: argparse.Namespace) -> None:
    """Print PATH, SIZE and CONTENT-TYPE for every file in ``args.site``."""
    skip = tuple(args.skip) if args.skip else DEFAULT_SKIP_DIRS
    try:
        store = load_content(args.site, skip)
    except ContentLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not store:
        print("No files found.")
        return

    rows = [
        (path, str(len(data)), content_type(extension(path), data))
        for path, data in sorted(store.items())
    ]

    # Column widths
    max_path = max(max(len(r[0]) for r in rows), 4)  # "PATH" header
    max_size = max(max(len(r[1]) for r in rows), 4)  # "SIZE" header

    fmt = f"{{:<{max_path}}}  {{:>{max_size}}}  {{}}"
    print(fmt.format("PATH", "SIZE", "CONTENT-TYPE"))
    sep_len = max_path + max_size + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for path, size, ctype in rows:
        print(fmt.format(path, size, ctype))
    print(f"\n{len(store)} files, {store.total_bytes} bytes")
