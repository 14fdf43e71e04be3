"""Worker dispatch adapter — fetch-style handlers.

A worker handler is ``async (httpx.Request) -> httpx.Response``: the
same shape as an edge-worker ``fetch`` export, and exactly what
``httpx.MockTransport`` and ``service_binding_handler`` accept. That
makes a worker callable from an ``httpx.AsyncClient`` or from another
container's overloads without opening a socket.
"""

from typing import Any

import httpx

from archway._internal.types import Fetcher
from archway.binding import Binding
from archway.container import ApiContainer
from archway.context import env_var
from archway.server.dispatch import IncomingRequest, dispatch


def create_worker_handler(container: ApiContainer) -> Fetcher:
    """Create a fetch handler that dispatches to ``container``."""

    async def handle(request: httpx.Request) -> httpx.Response:
        body = await request.aread()
        incoming = IncomingRequest(
            method=request.method,
            path=request.url.raw_path.split(b"?", 1)[0].decode("ascii"),
            body=body,
        )
        response = await dispatch(container, incoming)
        return httpx.Response(
            response.status,
            headers={"content-type": response.content_type},
            content=response.body,
            request=request,
        )

    return handle


class WorkerEntrypoint:
    """A worker module's ``fetch(request, env)`` export.

    Publishes ``env`` through ``archway.context.get_env()`` for the
    duration of each request, so overloads can reach per-request
    bindings (KV namespaces, service bindings) without globals::

        store = json_store("greeted-store", in_memory=False)
        binding.bind(store, Endpoint("jsonstore", 0), kv_overloads(lambda: get_env().kv))
        worker = WorkerEntrypoint(store, binding=binding)

        response = await worker.fetch(request, env)
    """

    __slots__ = ("_handle", "container")

    def __init__(self, container: ApiContainer, *, binding: Binding | None = None) -> None:
        self.container = container
        self._handle = create_worker_handler(container)
        if binding is not None:
            binding.mark_local(container)

    async def fetch(self, request: httpx.Request, env: Any = None) -> httpx.Response:
        token = env_var.set(env)
        try:
            return await self._handle(request)
        finally:
            env_var.reset(token)
