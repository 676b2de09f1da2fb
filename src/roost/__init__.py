"""Roost — a small static-site server that keeps the whole site in memory.

Loads a site directory once at startup, serves files by exact path, lets
``/page`` stand for ``/page.html``, redirects aliases from a JSON file
and, with TLS, sends plain HTTP to HTTPS.

Basic usage::

    from roost import Site, SiteConfig

    site = Site(SiteConfig(site_dir="./public", alias_file="aliases.json"))
    site.run()

Or from the environment (``SITE``, ``ALIAS``, ``HOSTNAME``, ``CERT``, ``KEY``)::

    roost serve
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AliasLoadError",
    "AliasTable",
    "ConfigurationError",
    "ContentLoadError",
    "ContentStore",
    "HTTPSRedirect",
    "NotFound",
    "Redirect",
    "RoostError",
    "Serve",
    "Site",
    "SiteConfig",
    "load_aliases",
    "load_content",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "Site":
        from roost.app import Site

        return Site

    if name == "SiteConfig":
        from roost.config import SiteConfig

        return SiteConfig

    if name in ("ContentStore", "load_content"):
        from roost import content as _content

        return getattr(_content, name)

    if name in ("AliasTable", "load_aliases"):
        from roost import aliases as _aliases

        return getattr(_aliases, name)

    if name in ("Serve", "Redirect", "NotFound"):
        from roost import resolve as _resolve

        return getattr(_resolve, name)

    if name == "HTTPSRedirect":
        from roost.server.redirect import HTTPSRedirect

        return HTTPSRedirect

    if name in ("RoostError", "ConfigurationError", "ContentLoadError", "AliasLoadError"):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
