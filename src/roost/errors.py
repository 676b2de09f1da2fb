"""Roost exception hierarchy.

Startup errors (configuration, content loading) propagate and stop the
process. Alias errors are caught by the caller and degrade to an empty
table. Per-request problems never raise: they become status codes.
"""


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when the site configuration is unusable.

    Typically raised by ``SiteConfig.validate()`` before any loading starts.
    """


class ContentLoadError(RoostError):
    """The site directory could not be loaded into memory.

    Always fatal: the server must not start with a partial content store.
    """

    def __init__(self, path: str, reason: object) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"couldn't read {path!r}: {reason}")


class AliasLoadError(RoostError):
    """The alias file could not be opened or decoded."""

    def __init__(self, path: str, reason: object) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"alias file {path!r}: {reason}")
