"""Tests for roost.http.request — building requests from ASGI scopes."""

import pytest

from roost.http.request import Request, decode_headers


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope dict."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


class TestFromASGI:
    def test_basic(self) -> None:
        request = Request.from_asgi(_make_scope(method="POST", path="/blog/post"))
        assert request.method == "POST"
        assert request.path == "/blog/post"
        assert request.raw_query == ""
        assert request.client == ("127.0.0.1", 54321)

    def test_query_string_kept_raw(self) -> None:
        request = Request.from_asgi(_make_scope(query_string=b"a=1&b=%20x"))
        assert request.raw_query == "a=1&b=%20x"

    def test_host_header(self) -> None:
        request = Request.from_asgi(_make_scope(headers=[(b"Host", b"example.com")]))
        assert request.host == "example.com"

    def test_missing_host(self) -> None:
        assert Request.from_asgi(_make_scope()).host == ""

    def test_optional_keys(self) -> None:
        scope = {"type": "http", "method": "GET", "path": "/x"}
        request = Request.from_asgi(scope)
        assert request.raw_query == ""
        assert request.headers == {}
        assert request.client is None

    def test_frozen(self) -> None:
        request = Request.from_asgi(_make_scope())
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]


class TestURL:
    def test_path_only(self) -> None:
        assert Request(method="GET", path="/a").url == "/a"

    def test_with_query(self) -> None:
        assert Request(method="GET", path="/a", raw_query="b=1").url == "/a?b=1"


class TestDecodeHeaders:
    def test_lowercases_names(self) -> None:
        assert decode_headers([(b"Content-Type", b"text/html")]) == {"content-type": "text/html"}

    def test_first_value_wins(self) -> None:
        headers = decode_headers([(b"host", b"a.test"), (b"Host", b"b.test")])
        assert headers["host"] == "a.test"

    def test_none(self) -> None:
        assert decode_headers(None) == {}
