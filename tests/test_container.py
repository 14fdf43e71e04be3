"""Tests for archway.container — route registration, lookup, and matching."""

import pytest

from archway.architecture import Architecture
from archway.container import ApiContainer
from archway.errors import ConfigurationError, DuplicateRouteError, RouteNotFoundError
from archway.function import Function, PlaceholderFunction


def _hello_api() -> ApiContainer:
    return ApiContainer(
        "api",
        {
            "hello": ("GET /v1/api/hello/{name}", Function("hello-handler", lambda n: f"Hello, {n}!")),
            "hellos": ("GET /v1/api/hellos", Function("hellos-handler", lambda: [])),
        },
    )


class TestRegistration:
    def test_routes_keep_registration_order(self) -> None:
        api = _hello_api()
        assert api.list_routes() == ["hello", "hellos"]
        assert [entry.name for entry in api] == ["hello", "hellos"]
        assert len(api) == 2

    def test_get_route(self) -> None:
        api = _hello_api()
        entry = api.get_route("hello")
        assert entry.spec.method == "GET"
        assert entry.spec.path == "/v1/api/hello/{name}"
        assert entry.function.id == "hello-handler"

    def test_get_route_unknown(self) -> None:
        with pytest.raises(RouteNotFoundError, match="Route 'missing' not found in container 'api'"):
            _hello_api().get_route("missing")

    def test_route_not_found_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            _hello_api().get_route("missing")

    def test_duplicate_name(self) -> None:
        api = _hello_api()
        with pytest.raises(DuplicateRouteError, match="Duplicate route name 'hello'"):
            api.add_route("hello", "GET /other", Function("other", lambda: None))

    def test_duplicate_method_and_path(self) -> None:
        api = _hello_api()
        with pytest.raises(ConfigurationError, match="duplicates route 'hello'"):
            api.add_route("hello2", "GET /v1/api/hello/{who}", Function("h2", lambda w: w))

    def test_same_path_other_method_is_allowed(self) -> None:
        api = _hello_api()
        api.add_route("create", "POST /v1/api/hellos", Function("create", lambda body: body))
        assert "create" in api

    def test_function_routed_once(self) -> None:
        shared = Function("shared", lambda: None)
        ApiContainer("a", {"x": ("GET /x", shared)})
        with pytest.raises(ConfigurationError, match="already routed by container 'a'"):
            ApiContainer("b", {"x": ("GET /x", shared)})

    def test_function_routed_once_even_when_ids_match(self) -> None:
        shared = Function("shared", lambda: None)
        ApiContainer("api", {"a": ("GET /a", shared)})
        with pytest.raises(ConfigurationError, match="already routed by container 'api'"):
            ApiContainer("api", {"b": ("GET /b", shared)})

    def test_same_function_twice_in_one_container(self) -> None:
        shared = Function("shared", lambda: None)
        api = ApiContainer("a", {"x": ("GET /x", shared), "y": ("GET /y", shared)})
        assert api.get_route("y").function is shared

    def test_route_decorator(self) -> None:
        api = ApiContainer("api")

        @api.route("health", "GET /health")
        def health() -> dict[str, bool]:
            return {"ok": True}

        assert isinstance(health, Function)
        assert health.id == "health"
        assert api.get_route("health").function is health

    def test_scope_registers_container(self) -> None:
        arch = Architecture("arch")
        api = ApiContainer("api", scope=arch)
        assert arch["api"] is api

    def test_contains_and_repr(self) -> None:
        api = _hello_api()
        assert "hello" in api
        assert "nope" not in api
        assert repr(api) == "<ApiContainer 'api' routes=['hello', 'hellos']>"


class TestMatch:
    def test_matches_method_and_path(self) -> None:
        match = _hello_api().match("GET", "/v1/api/hello/Ada")
        assert match is not None
        assert match.entry.name == "hello"
        assert match.args == ("Ada",)
        assert match.path_params == {"name": "Ada"}

    def test_method_mismatch(self) -> None:
        assert _hello_api().match("POST", "/v1/api/hello/Ada") is None
        assert _hello_api().match("get", "/v1/api/hello/Ada") is None

    def test_no_route(self) -> None:
        assert _hello_api().match("GET", "/nowhere") is None

    def test_first_registered_wins(self) -> None:
        api = ApiContainer(
            "api",
            {
                "any": ("GET /items/{id}", Function("any", lambda i: "any")),
                "special": ("GET /items/special", Function("special", lambda: "special")),
            },
        )
        match = api.match("GET", "/items/special")
        assert match is not None
        assert match.entry.name == "any"

    def test_decodes_captures(self) -> None:
        match = _hello_api().match("GET", "/v1/api/hello/Ada%20Lovelace")
        assert match is not None
        assert match.args == ("Ada Lovelace",)


class TestCall:
    @pytest.mark.asyncio
    async def test_call_by_name(self) -> None:
        assert await _hello_api().call("hello", "Ada") == "Hello, Ada!"

    @pytest.mark.asyncio
    async def test_call_unknown(self) -> None:
        with pytest.raises(RouteNotFoundError):
            await _hello_api().call("missing")

    @pytest.mark.asyncio
    async def test_call_follows_overload(self) -> None:
        api = _hello_api()
        api.get_route("hello").function.overload(lambda name: f"Hi {name}")
        assert await api.call("hello", "Ada") == "Hi Ada"


class TestUnresolvedPlaceholders:
    def test_lists_placeholders_without_overload(self) -> None:
        store = PlaceholderFunction("store-handler")
        get = PlaceholderFunction("get-handler")
        api = ApiContainer("store", {"store": ("POST /s/{c}", store), "get": ("GET /g/{c}", get)})
        assert api.unresolved_placeholders() == [store, get]

        store.overload(lambda c, d: None)
        assert api.unresolved_placeholders() == [get]

    def test_plain_functions_are_resolved(self) -> None:
        assert _hello_api().unresolved_placeholders() == []
