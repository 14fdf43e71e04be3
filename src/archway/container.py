"""API containers — ordered route tables of named functions.

A container owns its routes. Each route pairs a compiled ``RouteSpec``
with a ``Function``; the same container can then be served in-process,
behind an ASGI server, or from a worker fetch handler, and called
remotely through an HTTP overload, all from one definition.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from archway._internal.types import Handler
from archway.errors import ConfigurationError, DuplicateRouteError, RouteNotFoundError
from archway.function import Function
from archway.routing.parser import parse_route
from archway.routing.route import RouteEntry, RouteMatch

if TYPE_CHECKING:
    from archway.architecture import Architecture


class ApiContainer:
    """A named, insertion-ordered table of routes.

    Usage::

        api = ApiContainer("api", {
            "hello": ("GET /v1/api/hello/{name}", hello_function),
            "hellos": ("GET /v1/api/hellos", hellos_function),
        })

        @api.route("health", "GET /health")
        def health():
            return {"ok": True}

        await api.call("hello", "Ada")
    """

    __slots__ = ("_routes", "id")

    def __init__(
        self,
        id: str,
        routes: Mapping[str, tuple[str, Function]] | None = None,
        *,
        scope: Architecture | None = None,
    ) -> None:
        self.id = id
        self._routes: dict[str, RouteEntry] = {}
        for name, (route, function) in (routes or {}).items():
            self.add_route(name, route, function)
        if scope is not None:
            scope.add(self)

    # -- Registration --

    def add_route(self, name: str, route: str, function: Function) -> RouteEntry:
        """Register ``function`` under ``name`` at ``route``.

        Raises ``DuplicateRouteError`` if ``name`` is taken, and
        ``ConfigurationError`` if the function is already routed by
        another container or the exact method and path are already
        registered here (the second route could never match).
        """
        if name in self._routes:
            raise DuplicateRouteError(name, self.id)

        owner = function._owner
        if owner is not None and owner is not self:
            msg = (
                f"Function {function.id!r} is already routed by container "
                f"{owner.id!r} and cannot be added to {self.id!r}"
            )
            raise ConfigurationError(msg)

        spec = parse_route(route)
        for existing in self._routes.values():
            if (
                existing.spec.method == spec.method
                and existing.spec.pattern.pattern == spec.pattern.pattern
            ):
                msg = (
                    f"Route {name!r} ({spec}) in container {self.id!r} duplicates "
                    f"route {existing.name!r} ({existing.spec})"
                )
                raise ConfigurationError(msg)

        function._owner = self
        entry = RouteEntry(name=name, spec=spec, function=function)
        self._routes[name] = entry
        return entry

    def route(self, name: str, route: str) -> Callable[[Handler], Function]:
        """Decorator form of ``add_route`` for plain implementations.

        The decorated callable becomes the default implementation of a
        new ``Function`` whose id is ``name``.
        """

        def decorator(handler: Handler) -> Function:
            function = Function(name, handler)
            self.add_route(name, route, function)
            return function

        return decorator

    # -- Lookup --

    def get_route(self, name: str) -> RouteEntry:
        """Return the entry registered under ``name``.

        Raises ``RouteNotFoundError`` if there is none.
        """
        try:
            return self._routes[name]
        except KeyError:
            raise RouteNotFoundError(name, self.id) from None

    def list_routes(self) -> list[str]:
        """Route names in registration order."""
        return list(self._routes)

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        return tuple(self._routes.values())

    def unresolved_placeholders(self) -> list[Function]:
        """Placeholder functions that have no overload installed.

        Use as a readiness check: a container with unresolved
        placeholders will fail requests for those routes.
        """
        return [
            entry.function
            for entry in self._routes.values()
            if entry.function.is_placeholder and not entry.function.has_overload()
        ]

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Find the first route, in registration order, matching a request.

        The method must match exactly. ``path`` is the raw request path;
        captured arguments are URL-decoded.
        """
        for entry in self._routes.values():
            if entry.spec.method != method:
                continue
            args = entry.spec.match(path)
            if args is not None:
                return RouteMatch(entry=entry, args=args)
        return None

    # -- In-process invocation --

    async def call(self, name: str, *args: Any) -> Any:
        """Invoke the function routed under ``name`` directly."""
        return await self.get_route(name).function.invoke(*args)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<ApiContainer {self.id!r} routes={self.list_routes()!r}>"
