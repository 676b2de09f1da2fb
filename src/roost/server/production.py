"""Production server on pounce.

Without TLS the site is served on a single plain-HTTP port. With TLS the
site is served on the TLS port and a second, plain-HTTP listener runs
the HTTPS redirector for the canonical host.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from roost.server.access_log import AccessLog
from roost.server.redirect import HTTPSRedirect

if TYPE_CHECKING:
    from pounce.config import ServerConfig

    from roost._internal.asgi import ASGIApp
    from roost.app import Site
    from roost.config import SiteConfig

logger = logging.getLogger("roost.server")


def server_config(config: SiteConfig, port: int, *, tls: bool) -> ServerConfig:
    """Build the pounce configuration for one listener.

    Timeouts are short and fixed; a stalled client is cut off by the
    server, never by the resolver. Compression and pounce's own access
    log are off (roost logs access itself).
    """
    from pounce.config import ServerConfig

    return ServerConfig(
        host=config.bind,
        port=port,
        workers=1,
        request_timeout=config.read_timeout,
        header_timeout=config.read_timeout,
        write_timeout=config.write_timeout,
        keep_alive_timeout=config.keep_alive_timeout,
        compression=False,
        access_log=False,
        log_level=config.log_level,
        ssl_certfile=config.ssl_certfile if tls else None,
        ssl_keyfile=config.ssl_keyfile if tls else None,
    )


def start_redirect_server(config: SiteConfig) -> threading.Thread:
    """Serve the HTTPS redirector on ``config.redirect_port`` in a daemon thread."""
    from pounce.server import Server

    app: ASGIApp = HTTPSRedirect(config.host)
    if config.access_log:
        app = AccessLog(app)
    server = Server(server_config(config, config.redirect_port, tls=False), app)
    thread = threading.Thread(target=server.run, name="roost-https-redirect", daemon=True)
    thread.start()
    return thread


def run_site_server(site: Site) -> None:
    """Serve *site* until interrupted (blocking).

    Example:
        >>> from roost import Site, SiteConfig
        >>> run_site_server(Site(SiteConfig(site_dir="./public")))
    """
    from pounce.server import Server

    config = site.config
    logger.info("Start server: %s", config.host)
    if config.use_tls:
        start_redirect_server(config)
    server = Server(server_config(config, config.listen_port, tls=config.use_tls), site)
    server.run()
