"""ASGI handler — serves the loaded site.

The only component between raw ASGI and the resolver: builds a Request
from the scope, resolves it against the content store and alias table,
and sends the outcome back through ASGI send().
"""

import logging
from collections.abc import Mapping

from roost._internal.asgi import Receive, Scope, Send
from roost.http.request import Request
from roost.http.response import Response, not_found, plain_text, redirect
from roost.resolve import NotFound, Outcome, Redirect, Serve, resolve
from roost.server.sender import send_response

logger = logging.getLogger("roost.server")


def outcome_response(outcome: Outcome, request: Request) -> Response:
    """Turn a resolution outcome into a Response."""
    match outcome:
        case Serve(content=content, content_type=ctype):
            return Response(body=content, content_type=ctype)
        case Redirect(location=location, status=status):
            logger.info("redirect to: %s", location)
            return redirect(location, status, method=request.method)
        case NotFound(body=body):
            return not_found(body)
    msg = f"unknown outcome {outcome!r}"
    raise TypeError(msg)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    content: Mapping[str, bytes],
    aliases: Mapping[str, str],
) -> None:
    """Answer a single HTTP request from the in-memory site.

    Every method is treated the same way. Unexpected failures are logged
    and answered with a bare 500; no detail ever reaches the client.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    try:
        outcome = resolve(request.path, request.raw_query, content, aliases)
        response = outcome_response(outcome, request)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = plain_text("Internal Server Error", status=500)

    await send_response(response, send)
