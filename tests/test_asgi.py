"""Tests for the ASGI surface — lifespan protocol and response sending."""

from typing import Any

from tollgate.app import App
from tollgate.config import AppConfig
from tollgate.http.response import Response
from tollgate.server.sender import send_response


class _Recorder:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)


def _receiver(*types: str) -> Any:
    pending = [{"type": t} for t in types]

    async def receive() -> dict[str, Any]:
        return pending.pop(0)

    return receive


class TestLifespan:
    async def test_startup_and_shutdown(self) -> None:
        events: list[str] = []
        app = App(AppConfig(banner=False))
        app.on_startup(lambda: events.append("start"))
        app.on_shutdown(lambda: events.append("stop"))

        send = _Recorder()
        await app({"type": "lifespan"}, _receiver("lifespan.startup", "lifespan.shutdown"), send)

        assert events == ["start", "stop"]
        assert [m["type"] for m in send.messages] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_startup_failure_reported(self) -> None:
        app = App(AppConfig(banner=False))

        @app.on_startup
        def broken() -> None:
            msg = "no database"
            raise RuntimeError(msg)

        send = _Recorder()
        await app({"type": "lifespan"}, _receiver("lifespan.startup"), send)

        assert send.messages == [{"type": "lifespan.startup.failed", "message": "no database"}]

    async def test_invalid_setup_fails_startup(self) -> None:
        app = App(AppConfig(banner=False, token=""))
        app.route("/closed", auth=True)(lambda: {})

        send = _Recorder()
        await app({"type": "lifespan"}, _receiver("lifespan.startup"), send)

        assert send.messages[0]["type"] == "lifespan.startup.failed"


class TestNonHttpScope:
    async def test_websocket_ignored(self) -> None:
        app = App(AppConfig(banner=False))
        send = _Recorder()
        await app({"type": "websocket", "path": "/"}, _receiver(), send)
        assert send.messages == []


class TestSendResponse:
    async def test_start_and_body(self) -> None:
        send = _Recorder()
        await send_response(Response({"a": 1}).with_header("X-Trace", "t1"), send)

        start, body = send.messages
        assert start["type"] == "http.response.start"
        assert start["status"] == 200
        headers = dict(start["headers"])
        assert headers[b"content-type"] == b"application/json; charset=utf-8"
        assert headers[b"x-trace"] == b"t1"
        assert headers[b"content-length"] == b"7"
        assert body == {"type": "http.response.body", "body": b'{"a":1}'}

    async def test_head_omits_body_keeps_length(self) -> None:
        send = _Recorder()
        await send_response(Response({"a": 1}), send, head=True)

        start, body = send.messages
        assert dict(start["headers"])[b"content-length"] == b"7"
        assert body["body"] == b""

    async def test_no_content_has_no_body(self) -> None:
        send = _Recorder()
        await send_response(Response({"a": 1}, status=204), send)

        start, body = send.messages
        assert dict(start["headers"])[b"content-length"] == b"0"
        assert body["body"] == b""
