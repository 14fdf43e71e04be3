"""Key-value backend for the JSON store.

Each document is one key, ``<collection>:<time-ordered id>``, so a
prefix listing returns a collection in insertion order. Any object
with ``put``, ``get``, and ``list_keys`` coroutines works as a
namespace; ``RedisKV`` adapts ``redis.asyncio``.
"""

import json
import time
import uuid
from collections.abc import Callable
from typing import Any, Protocol

import anyio

from archway._internal.types import Handler
from archway.stores.errors import BackendNotInstalledError

_GLOB_SPECIAL = frozenset("*?[]\\")

_last_ns = 0


class KVNamespace(Protocol):
    """The key-value operations the JSON store needs."""

    async def put(self, key: str, value: str) -> None: ...

    async def get(self, key: str) -> str | None: ...

    async def list_keys(self, prefix: str) -> list[str]: ...


class RedisKV:
    """``KVNamespace`` over a ``redis.asyncio.Redis`` client."""

    __slots__ = ("_redis",)

    def __init__(self, redis: Any) -> None:
        self._redis = redis

    @classmethod
    def from_url(cls, url: str) -> "RedisKV":
        """Connect lazily to ``redis://host:port/db``."""
        try:
            import redis.asyncio as redis_asyncio
        except ImportError:
            msg = "archway.stores.kv requires 'redis'. Install it with: pip install archway[redis]"
            raise BackendNotInstalledError(msg) from None

        return cls(redis_asyncio.from_url(url, decode_responses=True))

    async def put(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def get(self, key: str) -> str | None:
        value = await self._redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def list_keys(self, prefix: str) -> list[str]:
        pattern = "".join(f"\\{c}" if c in _GLOB_SPECIAL else c for c in prefix) + "*"
        keys = [
            key.decode("utf-8") if isinstance(key, bytes) else key
            async for key in self._redis.scan_iter(match=pattern)
        ]
        return sorted(keys)

    async def close(self) -> None:
        await self._redis.aclose()


def document_key(collection: str) -> str:
    """A new key for ``collection`` that sorts after every earlier one."""
    global _last_ns
    # Strictly increasing within a process, even if the clock stalls
    _last_ns = max(time.time_ns(), _last_ns + 1)
    return f"{collection}:{_last_ns:020d}-{uuid.uuid4().hex}"


def kv_overloads(get_kv: Callable[[], KVNamespace]) -> dict[str, Handler]:
    """Store and get implementations backed by a KV namespace.

    ``get_kv`` is resolved on every call, so the namespace can come from
    the current worker environment (``lambda: get_env().kv``).
    """

    async def store(collection: str, document: Any) -> dict[str, bool]:
        await get_kv().put(document_key(collection), json.dumps(document))
        return {"success": True}

    async def get(collection: str) -> list[Any]:
        kv = get_kv()
        keys = await kv.list_keys(f"{collection}:")
        values: list[str | None] = [None] * len(keys)

        async def fetch(index: int, key: str) -> None:
            values[index] = await kv.get(key)

        async with anyio.create_task_group() as tg:
            for index, key in enumerate(keys):
                tg.start_soon(fetch, index, key)

        # A key can disappear between listing and reading
        return [json.loads(value) for value in values if value is not None]

    return {"store": store, "get": get}
