"""Site configuration.

SiteConfig is a frozen dataclass — immutable after creation, built once
from the environment (or directly in code) before anything is loaded.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from roost.errors import ConfigurationError

# Environment variable names read by SiteConfig.from_env()
ENV_HOST = "HOSTNAME"
ENV_CERT = "CERT"
ENV_KEY = "KEY"
ENV_SITE = "SITE"
ENV_ALIAS = "ALIAS"


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    Only ``site_dir`` is required. Override what you need::

        config = SiteConfig(site_dir="./public", alias_file="aliases.json")
    """

    # Canonical host name; the plain-HTTP redirector only answers for it
    host: str = "localhost:8080"

    # Content
    site_dir: str = ""
    alias_file: str = ""
    skip_dirs: tuple[str, ...] = (".git",)

    # TLS (both required to enable)
    ssl_certfile: str = ""
    ssl_keyfile: str = ""

    # Listeners
    bind: str = "0.0.0.0"
    port: int = 8080  # plain HTTP, TLS disabled
    tls_port: int = 443
    redirect_port: int = 80  # HTTP -> HTTPS redirector, TLS enabled

    # Transport timeouts (seconds), enforced by the server, not the resolver
    read_timeout: float = 1.0
    write_timeout: float = 2.0
    keep_alive_timeout: float = 1.0

    # Logging
    log_level: str = "info"
    access_log: bool = True

    @property
    def use_tls(self) -> bool:
        """True when both a certificate and a key file are configured."""
        return bool(self.ssl_certfile and self.ssl_keyfile)

    @property
    def listen_port(self) -> int:
        """Port of the main (content-serving) listener."""
        return self.tls_port if self.use_tls else self.port

    def validate(self) -> SiteConfig:
        """Raise ``ConfigurationError`` if the config cannot serve a site."""
        if not self.site_dir:
            msg = "Specify site directory"
            raise ConfigurationError(msg)
        return self

    def with_overrides(self, **overrides: Any) -> SiteConfig:
        """Return a copy with every non-None override applied."""
        changes = {name: value for name, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> SiteConfig:
        """Build a config from ``HOSTNAME``, ``CERT``, ``KEY``, ``SITE`` and ``ALIAS``.

        Empty variables keep the defaults. Keyword overrides win over the
        environment when they are not ``None``.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {
            "site_dir": env.get(ENV_SITE, ""),
            "alias_file": env.get(ENV_ALIAS, ""),
            "ssl_certfile": env.get(ENV_CERT, ""),
            "ssl_keyfile": env.get(ENV_KEY, ""),
        }
        host = env.get(ENV_HOST, "")
        if host:
            values["host"] = host
        return cls(**values).with_overrides(**overrides)
