"""ASGI dispatch adapter — serve a container over HTTP.

The only component that touches raw ASGI. Converts scope and body
messages into an ``IncomingRequest``, dispatches, and sends the
``OutgoingResponse`` back through ASGI ``send()``.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

from archway._internal.asgi import Receive, Scope, Send
from archway.binding import Binding
from archway.config import ServerConfig
from archway.container import ApiContainer
from archway.errors import ConfigurationError
from archway.server.dispatch import IncomingRequest, dispatch
from archway.server.sender import send_response

logger = logging.getLogger("archway.server")

# Characters left as-is when re-encoding an already-decoded ASGI path
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


class ApiServer:
    """An ASGI application serving one container.

    Constructing a server marks the container local on ``binding``.
    Startup hooks run first (open pools, install overloads), then the
    placeholder check: startup fails while the container has placeholder
    functions without an overload, unless
    ``ServerConfig(check_placeholders=False)``.

    Usage::

        server = ApiServer(store.container, binding=binding, config=ServerConfig(port=3001))

        @server.on_startup
        async def connect():
            pool = await create_pool(dsn)
            binding.bind(store.container, endpoint, postgres_overloads(pool))

        server.run()

    or hand ``server`` to any ASGI server as the application.
    """

    __slots__ = ("_shutdown_hooks", "_startup_hooks", "binding", "config", "container")

    def __init__(
        self,
        container: ApiContainer,
        *,
        binding: Binding,
        config: ServerConfig | None = None,
    ) -> None:
        self.container = container
        self.binding = binding
        self.config = config or ServerConfig()
        self._startup_hooks: list[Callable[[], Any]] = []
        self._shutdown_hooks: list[Callable[[], Any]] = []
        binding.mark_local(container)

    def on_startup(self, hook: Callable[[], Any]) -> Callable[[], Any]:
        """Register a sync or async hook to run before serving. Usable as a decorator."""
        self._startup_hooks.append(hook)
        return hook

    def on_shutdown(self, hook: Callable[[], Any]) -> Callable[[], Any]:
        """Register a sync or async hook to run at shutdown. Usable as a decorator."""
        self._shutdown_hooks.append(hook)
        return hook

    def check(self) -> None:
        """Raise ``ConfigurationError`` if any placeholder is unresolved."""
        unresolved = self.container.unresolved_placeholders()
        if unresolved:
            names = ", ".join(repr(function.id) for function in unresolved)
            msg = f"Container {self.container.id!r} has unresolved placeholder functions: {names}"
            raise ConfigurationError(msg)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve with uvicorn until interrupted."""
        import uvicorn

        uvicorn.run(
            self,
            host=host or self.config.host,
            port=port or self.config.port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] == "websocket":
            # Routes are HTTP only; reject the handshake
            await receive()
            await send({"type": "websocket.close"})
            return

        if scope["type"] != "http":
            return

        request = await read_request(scope, receive)
        response = await dispatch(self.container, request)
        await send_response(response, send)

    async def startup(self) -> None:
        """Run startup hooks, then the placeholder check."""
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result
        if self.config.check_placeholders:
            self.check()
        logger.info(
            "%s serving %d route(s): %s",
            self.container.id,
            len(self.container),
            ", ".join(str(entry.spec) for entry in self.container),
        )

    async def shutdown(self) -> None:
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol and signal completion to the server."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("startup failed for %s", self.container.id)
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception as exc:
                    logger.exception("shutdown failed for %s", self.container.id)
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return


async def read_request(scope: Scope, receive: Receive) -> IncomingRequest:
    """Build an ``IncomingRequest`` from an HTTP scope, reading the whole body."""
    raw_path: bytes = scope.get("raw_path") or b""
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = quote(scope["path"], safe=_PATH_SAFE)

    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break

    return IncomingRequest(method=scope["method"], path=path, body=b"".join(chunks))
