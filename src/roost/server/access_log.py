"""Access logging for any ASGI app.

``AccessLog`` wraps an app and logs one line per HTTP request with the
elapsed time, status, method and URL. The status is captured by
``StatusRecorder``, a thin wrapper around ASGI ``send``.
"""

import logging
import time

from roost._internal.asgi import ASGIApp, Message, Receive, Scope, Send
from roost.http.request import Request

access_logger = logging.getLogger("roost.access")


class StatusRecorder:
    """Wraps ``send`` and records the first response status sent.

    ``status`` is 200 until the app starts a response with another code.
    """

    __slots__ = ("_send", "_status")

    def __init__(self, send: Send) -> None:
        self._send = send
        self._status: int | None = None

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start" and self._status is None:
            self._status = int(message["status"])
        await self._send(message)

    @property
    def started(self) -> bool:
        """True once the app has sent ``http.response.start``."""
        return self._status is not None

    @property
    def status(self) -> int:
        if self._status is None:
            return 200
        return self._status


def _format_elapsed(seconds: float) -> str:
    if seconds < 1e-3:
        return f"{seconds * 1e6:.1f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds:.3f}s"


class AccessLog:
    """ASGI wrapper that logs every HTTP request after it is answered.

    Non-HTTP scopes (lifespan) pass straight through.
    """

    __slots__ = ("app", "logger")

    def __init__(self, app: ASGIApp, logger: logging.Logger | None = None) -> None:
        self.app = app
        self.logger = logger or access_logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request.from_asgi(scope)
        start = time.perf_counter()
        recorder = StatusRecorder(send)
        failed = False
        try:
            await self.app(scope, receive, recorder)
        except Exception:
            failed = True
            raise
        finally:
            elapsed = time.perf_counter() - start
            # A crash before any response went out is a server error
            status = 500 if failed and not recorder.started else recorder.status
            self.logger.info(
                "%s %d %s %s",
                _format_elapsed(elapsed),
                status,
                request.method,
                request.url,
            )
