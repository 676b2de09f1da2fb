"""``roost serve`` — load a site and serve it.

Settings come from the environment first; command-line flags override
them. A missing site directory or an unreadable site is fatal.
"""

import argparse
import sys

from roost.config import SiteConfig
from roost.errors import ConfigurationError, ContentLoadError


def config_from_args(args: argparse.Namespace) -> SiteConfig:
    """Merge the environment with the flags given to ``roost serve``."""
    return SiteConfig.from_env(
        site_dir=args.site,
        alias_file=args.alias,
        host=args.host,
        ssl_certfile=args.cert,
        ssl_keyfile=args.key,
        bind=args.bind,
        port=args.port,
        log_level=args.log_level,
        access_log=False if args.no_access_log else None,
    )


def run_serve(args: argparse.Namespace) -> None:
    """Build the site from env + flags and run it until interrupted."""
    from roost.app import Site

    try:
        site = Site(config_from_args(args).validate())
        site.run()
    except (ConfigurationError, ContentLoadError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
