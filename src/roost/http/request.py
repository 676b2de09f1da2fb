"""Immutable HTTP request.

Everything the resolver and the redirector need from a request is
known once the ASGI scope arrives, so the request is frozen metadata.
The body is never read: every method is answered the same way.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def decode_headers(raw: Any) -> dict[str, str]:
    """Decode ASGI header pairs into a dict with lower-cased names.

    The first occurrence of a header wins.
    """
    headers: dict[str, str] = {}
    for name, value in raw or ():
        headers.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
    return headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    raw_query: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    client: tuple[str, int] | None = None

    @property
    def host(self) -> str:
        """The Host header exactly as sent, or ``""``."""
        return self.headers.get("host", "")

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.raw_query:
            return f"{self.path}?{self.raw_query}"
        return self.path

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            raw_query=scope.get("query_string", b"").decode("latin-1"),
            headers=decode_headers(scope.get("headers")),
            client=tuple(client) if client else None,
        )
