"""Roost site application.

Configured once, then frozen: the content store and alias table are
loaded exactly once, before the first request is served, and are only
read from then on.
"""

import logging
import threading

from roost._internal.asgi import Receive, Scope, Send
from roost.aliases import AliasTable, load_aliases_or_empty
from roost.config import SiteConfig
from roost.content import ContentStore, load_content
from roost.server.access_log import AccessLog
from roost.server.handler import handle_request

logger = logging.getLogger("roost.server")


class Site:
    """The roost ASGI application.

    Either give it a config and let it load the site on startup::

        site = Site(SiteConfig(site_dir="./public", alias_file="aliases.json"))
        site.run()

    or inject prebuilt tables (tests, embedding)::

        site = Site(content=ContentStore({"/index.html": b"<h1>hi</h1>"}))

    Thread safety:
        Loading uses a Lock + double-check so exactly one thread builds
        the tables, even when several workers receive their first request
        at the same time. After that both tables are read-only.
    """

    __slots__ = (
        "_aliases",
        "_content",
        "_freeze_lock",
        "_frozen",
        "_handler",
        "config",
    )

    def __init__(
        self,
        config: SiteConfig | None = None,
        *,
        content: ContentStore | None = None,
        aliases: AliasTable | None = None,
    ) -> None:
        self.config: SiteConfig = config or SiteConfig()
        self._content: ContentStore | None = content
        self._aliases: AliasTable | None = aliases
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        handler = self._handle_http
        self._handler = AccessLog(handler) if self.config.access_log else handler

    @classmethod
    def from_env(cls, **overrides: object) -> Site:
        """Build a Site from environment variables (see ``SiteConfig.from_env``)."""
        return cls(SiteConfig.from_env(**overrides))

    # -- Loaded tables --

    @property
    def content(self) -> ContentStore:
        """The frozen content store (loads the site on first access)."""
        self._ensure_frozen()
        assert self._content is not None
        return self._content

    @property
    def aliases(self) -> AliasTable:
        """The frozen alias table (loads the site on first access)."""
        self._ensure_frozen()
        assert self._aliases is not None
        return self._aliases

    # -- Server --

    def run(self) -> None:
        """Load the site and serve it until interrupted.

        Raises ``ConfigurationError`` or ``ContentLoadError`` before any
        listener is opened when the site cannot be loaded.
        """
        self._ensure_frozen()

        from roost.server.production import run_site_server

        run_site_server(self)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        await self._handler(scope, receive, send)

    async def _handle_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        self._ensure_frozen()
        assert self._content is not None
        assert self._aliases is not None

        await handle_request(
            scope,
            receive,
            send,
            content=self._content,
            aliases=self._aliases,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Loads the site at startup so that a broken site directory fails
        the server before it accepts connections.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.error("startup failed: %s", exc)
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe load with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Load whatever tables were not injected.

        MUST only be called while holding _freeze_lock.
        """
        if self._content is None:
            self.config.validate()
            self._content = load_content(self.config.site_dir, self.config.skip_dirs)
        if self._aliases is None:
            self._aliases = load_aliases_or_empty(self.config.alias_file)
        self._frozen = True
