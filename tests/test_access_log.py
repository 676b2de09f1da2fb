"""Tests for roost.server.access_log — status capture and request logging."""

import logging

import pytest

from roost.server.access_log import AccessLog, StatusRecorder, _format_elapsed


def _scope(path: str = "/", query: bytes = b"", method: str = "GET") -> dict:
    return {"type": "http", "method": method, "path": path, "query_string": query}


async def _receive() -> dict:
    return {"type": "http.request", "body": b""}


class TestStatusRecorder:
    async def test_defaults_to_ok(self) -> None:
        async def send(message: dict) -> None:
            pass

        recorder = StatusRecorder(send)
        assert recorder.status == 200
        assert recorder.started is False

    async def test_records_first_status(self) -> None:
        sent: list[dict] = []

        async def send(message: dict) -> None:
            sent.append(message)

        recorder = StatusRecorder(send)
        await recorder({"type": "http.response.start", "status": 404, "headers": []})
        await recorder({"type": "http.response.start", "status": 500, "headers": []})
        await recorder({"type": "http.response.body", "body": b""})
        assert recorder.status == 404
        assert len(sent) == 3


class TestAccessLog:
    async def test_logs_status_method_url(self, caplog: pytest.LogCaptureFixture) -> None:
        async def app(scope, receive, send) -> None:
            await send({"type": "http.response.start", "status": 307, "headers": []})
            await send({"type": "http.response.body", "body": b""})

        async def send(message: dict) -> None:
            pass

        with caplog.at_level(logging.INFO, logger="roost.access"):
            await AccessLog(app)(_scope("/old", b"x=1"), _receive, send)

        record = caplog.records[-1]
        assert record.name == "roost.access"
        assert record.getMessage().endswith(" 307 GET /old?x=1")

    async def test_app_that_never_responds_logs_ok(self, caplog: pytest.LogCaptureFixture) -> None:
        async def app(scope, receive, send) -> None:
            pass

        async def send(message: dict) -> None:
            pass

        with caplog.at_level(logging.INFO, logger="roost.access"):
            await AccessLog(app)(_scope("/x", method="POST"), _receive, send)
        assert caplog.records[-1].getMessage().endswith(" 200 POST /x")

    async def test_crash_before_response_logs_500(self, caplog: pytest.LogCaptureFixture) -> None:
        async def app(scope, receive, send) -> None:
            raise RuntimeError("boom")

        async def send(message: dict) -> None:
            pass

        with caplog.at_level(logging.INFO, logger="roost.access"), pytest.raises(RuntimeError):
            await AccessLog(app)(_scope("/x"), _receive, send)
        assert caplog.records[-1].getMessage().endswith(" 500 GET /x")

    async def test_crash_after_start_keeps_sent_status(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        async def app(scope, receive, send) -> None:
            await send({"type": "http.response.start", "status": 404, "headers": []})
            raise RuntimeError("boom")

        async def send(message: dict) -> None:
            pass

        with caplog.at_level(logging.INFO, logger="roost.access"), pytest.raises(RuntimeError):
            await AccessLog(app)(_scope("/x"), _receive, send)
        assert caplog.records[-1].getMessage().endswith(" 404 GET /x")

    async def test_lifespan_passes_through(self, caplog: pytest.LogCaptureFixture) -> None:
        seen: list[str] = []

        async def app(scope, receive, send) -> None:
            seen.append(scope["type"])

        with caplog.at_level(logging.INFO, logger="roost.access"):
            await AccessLog(app)({"type": "lifespan"}, _receive, None)  # type: ignore[arg-type]
        assert seen == ["lifespan"]
        assert not [r for r in caplog.records if r.name == "roost.access"]

    async def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        async def app(scope, receive, send) -> None:
            await send({"type": "http.response.start", "status": 200, "headers": []})

        async def send(message: dict) -> None:
            pass

        custom = logging.getLogger("tests.access")
        with caplog.at_level(logging.INFO, logger="tests.access"):
            await AccessLog(app, custom)(_scope("/"), _receive, send)
        assert caplog.records[-1].name == "tests.access"


class TestFormatElapsed:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0.0000005, "0.5µs"), (0.0125, "12.500ms"), (2.5, "2.500s")],
    )
    def test_units(self, seconds: float, expected: str) -> None:
        assert _format_elapsed(seconds) == expected
