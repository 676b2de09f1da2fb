"""Roost CLI — serve a site and inspect what would be served.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — serve a static site from memory.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost serve ------------------------------------------------------
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve a site (settings default to SITE, ALIAS, HOSTNAME, CERT, KEY)",
    )
    serve_parser.add_argument("--site", default=None, help="Site directory (env: SITE)")
    serve_parser.add_argument("--alias", default=None, help="Alias JSON file (env: ALIAS)")
    serve_parser.add_argument("--host", default=None, help="Canonical host name (env: HOSTNAME)")
    serve_parser.add_argument("--cert", default=None, help="TLS certificate file (env: CERT)")
    serve_parser.add_argument("--key", default=None, help="TLS private key file (env: KEY)")
    serve_parser.add_argument("--bind", default=None, help="Bind address")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Plain-HTTP port when TLS is disabled",
    )
    serve_parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error", "critical"],
        help="Log level",
    )
    serve_parser.add_argument(
        "--no-access-log",
        action="store_true",
        help="Do not log each request",
    )

    # -- roost files ------------------------------------------------------
    files_parser = subparsers.add_parser("files", help="List the files a site would serve")
    files_parser.add_argument("site", help="Site directory")
    files_parser.add_argument(
        "--skip",
        action="append",
        default=None,
        help="Directory name to skip (repeatable, default: .git)",
    )

    # -- roost aliases ----------------------------------------------------
    aliases_parser = subparsers.add_parser("aliases", help="Validate and list an alias file")
    aliases_parser.add_argument("file", help="Alias JSON file")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from roost.cli._serve import run_serve

        run_serve(args)
    elif args.command == "files":
        from roost.cli._files import run_files

        run_files(args)
    elif args.command == "aliases":
        from roost.cli._aliases import run_aliases

        run_aliases(args)
