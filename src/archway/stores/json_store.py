"""The JSON store container and its typed facade."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from archway.container import ApiContainer
from archway.function import Function, PlaceholderFunction

if TYPE_CHECKING:
    from archway.architecture import Architecture

STORE_ROUTE = "POST /store/{collection}"
GET_ROUTE = "GET /get/{collection}"


class JsonStore:
    """Typed access to a JSON store container.

    The methods go through the container's functions, so they follow
    whatever backend the binding installed: in-memory, Postgres, KV, or
    a remote store process.
    """

    __slots__ = ("container",)

    def __init__(self, container: ApiContainer) -> None:
        self.container = container

    @property
    def id(self) -> str:
        return self.container.id

    async def store(self, collection: str, document: Any) -> dict[str, bool]:
        """Append ``document`` to ``collection``."""
        return await self.container.call("store", collection, document)

    async def get(self, collection: str) -> list[Any]:
        """Return every document in ``collection``, oldest first where the backend can."""
        return await self.container.call("get", collection)


def json_store(
    id: str,
    *,
    scope: Architecture | None = None,
    in_memory: bool = True,
) -> JsonStore:
    """Build a JSON store container.

    With ``in_memory=False`` both routes are placeholders: the store
    declares its API but a binding must supply the implementation.
    """
    if in_memory:
        data: dict[str, list[Any]] = {}

        def store(collection: str, document: Any) -> dict[str, bool]:
            data.setdefault(collection, []).append(document)
            return {"success": True}

        def get(collection: str) -> list[Any]:
            return list(data.get(collection, ()))

        store_function = Function("store-handler", store)
        get_function = Function("get-handler", get)
    else:
        store_function = PlaceholderFunction("store-handler")
        get_function = PlaceholderFunction("get-handler")

    container = ApiContainer(id, scope=scope)
    container.add_route("store", STORE_ROUTE, store_function)
    container.add_route("get", GET_ROUTE, get_function)
    return JsonStore(container)
