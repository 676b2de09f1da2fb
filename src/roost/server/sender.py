"""ASGI response sending — translates roost Responses to ASGI messages.

The body is always sent whole, in a single ``http.response.body``
message: no chunking, no ranges.
"""

from roost._internal.asgi import Send
from roost.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def raw_headers(response: Response, body_length: int) -> list[tuple[bytes, bytes]]:
    """Build the ASGI header list for *response*."""
    headers: list[tuple[bytes, bytes]] = []
    if response.content_type is not None:
        headers.append((b"content-type", response.content_type.encode("latin-1")))
    for name, value in response.headers:
        headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    headers.append((b"content-length", str(body_length).encode("latin-1")))
    return headers


async def send_response(response: Response, send: Send) -> None:
    """Translate a roost Response into ASGI send() calls."""
    body = response.body if _body_allowed(response.status) else b""

    await send(
        {
            "type": "http.response.start",
            "status": int(response.status),
            "headers": raw_headers(response, len(body)),
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
