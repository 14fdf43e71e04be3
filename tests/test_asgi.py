"""Tests for archway.server.asgi — ApiServer as an ASGI application."""

from typing import Any

import httpx
import pytest

from archway.binding import Binding, Endpoint
from archway.config import ServerConfig
from archway.container import ApiContainer
from archway.errors import ConfigurationError
from archway.function import Function, PlaceholderFunction
from archway.server.asgi import ApiServer, read_request


def _api() -> ApiContainer:
    return ApiContainer(
        "api",
        {
            "hello": ("GET /hello/{name}", Function("hello", lambda name: f"Hello, {name}!")),
            "echo": ("POST /echo/{tag}", Function("echo", lambda tag, body: {"tag": tag, "body": body})),
        },
    )


def _placeholder_api() -> ApiContainer:
    return ApiContainer("store", {"get": ("GET /get/{c}", PlaceholderFunction("get-handler"))})


async def _lifespan(server: ApiServer, *events: str) -> list[dict[str, Any]]:
    incoming = [{"type": f"lifespan.{event}"} for event in events]
    sent: list[dict[str, Any]] = []

    async def receive() -> dict[str, Any]:
        return incoming.pop(0)

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    await server({"type": "lifespan"}, receive, send)
    return sent


class TestHTTP:
    @pytest.mark.asyncio
    async def test_serves_routes(self) -> None:
        server = ApiServer(_api(), binding=Binding())
        transport = httpx.ASGITransport(app=server)
        async with httpx.AsyncClient(transport=transport, base_url="http://api") as client:
            response = await client.get("/hello/Ada%20Lovelace")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == "Hello, Ada Lovelace!"

    @pytest.mark.asyncio
    async def test_post_body(self) -> None:
        server = ApiServer(_api(), binding=Binding())
        transport = httpx.ASGITransport(app=server)
        async with httpx.AsyncClient(transport=transport, base_url="http://api") as client:
            response = await client.post("/echo/t1?ignored=1", json={"a": 1})

        assert response.json() == {"tag": "t1", "body": {"a": 1}}

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        server = ApiServer(_api(), binding=Binding())
        transport = httpx.ASGITransport(app=server)
        async with httpx.AsyncClient(transport=transport, base_url="http://api") as client:
            response = await client.delete("/hello/Ada")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    @pytest.mark.asyncio
    async def test_placeholder_request_is_500(self) -> None:
        server = ApiServer(_placeholder_api(), binding=Binding())
        transport = httpx.ASGITransport(app=server)
        async with httpx.AsyncClient(transport=transport, base_url="http://store") as client:
            response = await client.get("/get/greeted")

        assert response.status_code == 500
        assert "get-handler" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_rejects_websocket(self) -> None:
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "websocket.connect"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await ApiServer(_api(), binding=Binding())({"type": "websocket"}, receive, send)
        assert sent == [{"type": "websocket.close"}]


class TestLifespan:
    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self) -> None:
        server = ApiServer(_api(), binding=Binding())
        calls: list[str] = []

        @server.on_startup
        async def open_pool() -> None:
            calls.append("startup")

        @server.on_shutdown
        def close_pool() -> None:
            calls.append("shutdown")

        sent = await _lifespan(server, "startup", "shutdown")

        assert sent == [
            {"type": "lifespan.startup.complete"},
            {"type": "lifespan.shutdown.complete"},
        ]
        assert calls == ["startup", "shutdown"]

    @pytest.mark.asyncio
    async def test_unresolved_placeholders_fail_startup(self) -> None:
        server = ApiServer(_placeholder_api(), binding=Binding())
        sent = await _lifespan(server, "startup")

        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "'get-handler'" in sent[0]["message"]

    @pytest.mark.asyncio
    async def test_startup_hook_can_resolve_placeholders(self) -> None:
        store = _placeholder_api()
        binding = Binding()
        server = ApiServer(store, binding=binding)

        @server.on_startup
        def install() -> None:
            binding.bind(store, Endpoint("store", 3001), {"get": lambda c: []})

        sent = await _lifespan(server, "startup", "shutdown")
        assert sent[0] == {"type": "lifespan.startup.complete"}

    @pytest.mark.asyncio
    async def test_check_can_be_disabled(self) -> None:
        server = ApiServer(
            _placeholder_api(), binding=Binding(), config=ServerConfig(check_placeholders=False)
        )
        sent = await _lifespan(server, "startup", "shutdown")
        assert sent[0] == {"type": "lifespan.startup.complete"}

    @pytest.mark.asyncio
    async def test_failing_hook_fails_startup(self) -> None:
        server = ApiServer(_api(), binding=Binding())

        @server.on_startup
        def broken() -> None:
            raise RuntimeError("no database")

        sent = await _lifespan(server, "startup")
        assert sent == [{"type": "lifespan.startup.failed", "message": "no database"}]

    @pytest.mark.asyncio
    async def test_failing_shutdown_hook_reports_failure(self) -> None:
        server = ApiServer(_api(), binding=Binding())

        @server.on_shutdown
        async def broken() -> None:
            raise RuntimeError("pool already closed")

        sent = await _lifespan(server, "startup", "shutdown")
        assert sent == [
            {"type": "lifespan.startup.complete"},
            {"type": "lifespan.shutdown.failed", "message": "pool already closed"},
        ]


class TestServer:
    def test_marks_container_local(self) -> None:
        api = _api()
        binding = Binding()
        ApiServer(api, binding=binding)
        assert binding.is_local(api)

    def test_check(self) -> None:
        ApiServer(_api(), binding=Binding()).check()
        with pytest.raises(ConfigurationError, match="unresolved placeholder functions: 'get-handler'"):
            ApiServer(_placeholder_api(), binding=Binding()).check()

    def test_default_config(self) -> None:
        assert ApiServer(_api(), binding=Binding()).config == ServerConfig()

    def test_run_uses_uvicorn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import uvicorn

        calls: list[dict[str, Any]] = []
        monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append({"app": app, **kwargs}))

        server = ApiServer(_api(), binding=Binding(), config=ServerConfig(port=3001, log_level="debug"))
        server.run()
        server.run(host="0.0.0.0", port=9000)

        assert calls == [
            {"app": server, "host": "127.0.0.1", "port": 3001, "log_level": "debug"},
            {"app": server, "host": "0.0.0.0", "port": 9000, "log_level": "debug"},
        ]


class TestReadRequest:
    @pytest.mark.asyncio
    async def test_reads_chunked_body(self) -> None:
        messages = [
            {"type": "http.request", "body": b'{"a"', "more_body": True},
            {"type": "http.request", "body": b": 1}", "more_body": False},
        ]

        async def receive() -> dict[str, Any]:
            return messages.pop(0)

        scope = {"type": "http", "method": "POST", "path": "/x", "raw_path": b"/x?y=1"}
        request = await read_request(scope, receive)
        assert request.method == "POST"
        assert request.path == "/x"
        assert request.json() == {"a": 1}

    @pytest.mark.asyncio
    async def test_reencodes_path_without_raw_path(self) -> None:
        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b""}

        scope = {"type": "http", "method": "GET", "path": "/hello/Ada Lovelace"}
        request = await read_request(scope, receive)
        assert request.path == "/hello/Ada%20Lovelace"

    @pytest.mark.asyncio
    async def test_disconnect_stops_reading(self) -> None:
        async def receive() -> dict[str, Any]:
            return {"type": "http.disconnect"}

        scope = {"type": "http", "method": "POST", "path": "/x", "raw_path": b"/x"}
        request = await read_request(scope, receive)
        assert request.body == b""
