"""In-process dispatch adapter.

Sends requests through the same matching and serialization path as the
HTTP and worker adapters, with no network involved. Useful for tests,
scripts, and for running several containers inside one process.
"""

import json as json_module
from typing import Any

from archway.container import ApiContainer
from archway.server.dispatch import IncomingRequest, OutgoingResponse, dispatch, split_target


class LocalClient:
    """Dispatch requests to a container in-process.

    Usage::

        client = LocalClient(api)
        response = await client.get("/v1/api/hello/Ada")
        assert response.status == 200
        assert response.json() == "Hello, Ada!"
    """

    __slots__ = ("container",)

    def __init__(self, container: ApiContainer) -> None:
        self.container = container

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: bytes | None = None,
        json: Any = None,
    ) -> OutgoingResponse:
        """Dispatch an arbitrary request."""
        if json is not None:
            body = json_module.dumps(json).encode("utf-8")
        request = IncomingRequest(method=method, path=split_target(path), body=body or b"")
        return await dispatch(self.container, request)

    async def get(self, path: str) -> OutgoingResponse:
        return await self.request("GET", path)

    async def post(self, path: str, *, body: bytes | None = None, json: Any = None) -> OutgoingResponse:
        return await self.request("POST", path, body=body, json=json)

    async def put(self, path: str, *, body: bytes | None = None, json: Any = None) -> OutgoingResponse:
        return await self.request("PUT", path, body=body, json=json)

    async def delete(self, path: str) -> OutgoingResponse:
        return await self.request("DELETE", path)
