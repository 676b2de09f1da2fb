"""Immutable HTTP response and the few shapes roost answers with.

``with_header()`` returns a new Response; nothing is mutated in place.
"""

import html
from dataclasses import dataclass, replace
from http import HTTPStatus
from urllib.parse import quote

PLAIN_TEXT = "text/plain; charset=utf-8"
HTML_TEXT = "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``content_type`` of ``None`` sends no Content-Type header at all.
    """

    body: bytes = b""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Lookups --

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive), or *default*."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default

    @property
    def location(self) -> str | None:
        """The Location header, if any."""
        return self.header("location")

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")


def plain_text(body: str, status: int = 200) -> Response:
    """A ``text/plain`` response."""
    return Response(body=body.encode("utf-8"), status=status, content_type=PLAIN_TEXT)


def not_found(body: str = HTTPStatus.NOT_FOUND.phrase) -> Response:
    """404 with a plain-text body."""
    return plain_text(body, status=HTTPStatus.NOT_FOUND)


def escape_non_ascii(url: str) -> str:
    """Percent-encode every non-ASCII character of *url* as UTF-8.

    ASCII is left alone, existing ``%xx`` escapes included, so an
    already-encoded URL passes through unchanged.
    """
    if url.isascii():
        return url
    return "".join(char if char.isascii() else quote(char, safe="") for char in url)


def redirect(
    url: str,
    status: int = HTTPStatus.TEMPORARY_REDIRECT,
    *,
    method: str = "GET",
) -> Response:
    """A redirect to *url*.

    GET and HEAD requests also get a short HTML body linking to the
    target, for clients that do not follow redirects. Non-ASCII
    characters in *url* are percent-encoded so the Location header
    stays sendable.
    """
    url = escape_non_ascii(url)
    response = Response(status=status).with_header("Location", url)
    if method in ("GET", "HEAD"):
        phrase = HTTPStatus(status).phrase
        body = f'<a href="{html.escape(url)}">{phrase}</a>.\n'
        response = replace(response, body=body.encode("utf-8"), content_type=HTML_TEXT)
    return response
