"""Plain-HTTP to HTTPS redirector.

Runs on the auxiliary port-80 listener when TLS is enabled. It only
answers for the canonical host so it cannot be used as an open
redirector for arbitrary Host headers.
"""

import logging

from roost._internal.asgi import Receive, Scope, Send
from roost.http.request import Request
from roost.http.response import Response, not_found, redirect
from roost.resolve import with_query
from roost.server.sender import send_response

logger = logging.getLogger("roost.server")


def redirect_target(request: Request, host: str) -> str | None:
    """HTTPS URL for *request*, or ``None`` when the host is not *host*."""
    if request.host != host:
        return None
    return with_query(f"https://{request.host}{request.path}", request.raw_query)


def redirect_response(request: Request, host: str) -> Response:
    """Redirect *request* to HTTPS, or 404 for a foreign host."""
    target = redirect_target(request, host)
    if target is None:
        return not_found()
    logger.info("redirect to: %s", target)
    return redirect(target, method=request.method)


class HTTPSRedirect:
    """ASGI app that sends every request for ``host`` to its HTTPS URL.

    Usage::

        redirector = HTTPSRedirect("example.com")
        # GET http://example.com/a?b=1 -> 307 https://example.com/a?b=1
        # GET http://evil.test/a      -> 404
    """

    __slots__ = ("host",)

    def __init__(self, host: str) -> None:
        self.host = host

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _acknowledge_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return
        request = Request.from_asgi(scope)
        await send_response(redirect_response(request, self.host), send)


async def _acknowledge_lifespan(receive: Receive, send: Send) -> None:
    """Complete the lifespan protocol; the redirector has nothing to set up."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
