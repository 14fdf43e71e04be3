"""Archway — declare an API once, run it in-process, over HTTP, or remotely.

Functions are named operations with a swappable implementation.
Containers route them by path. A binding decides, per process, whether
each container runs its defaults, a storage backend, or a remote proxy.

Basic usage::

    from archway import ApiContainer, Binding, ApiServer

    api = ApiContainer("api")

    @api.route("hello", "GET /v1/api/hello/{name}")
    def hello(name):
        return f"Hello, {name}!"

    await api.call("hello", "Ada")          # in-process
    ApiServer(api, binding=Binding()).run() # over HTTP

Calling another process::

    binding.bind_from_env(store.container, "JSONSTORE")
    binding.enable_remote(store.container)
    await store.get("greeted")              # now an HTTP call
"""

__version__ = "0.1.0"
__all__ = [
    "ApiContainer",
    "ApiServer",
    "Architecture",
    "ArchwayError",
    "Binding",
    "ConfigurationError",
    "DuplicateRouteError",
    "Endpoint",
    "Function",
    "IncomingRequest",
    "InvocationError",
    "LocalClient",
    "NotImplementedFunctionError",
    "OutgoingResponse",
    "PlaceholderFunction",
    "RemoteCallError",
    "RouteNotFoundError",
    "RouteSpec",
    "ServerConfig",
    "WorkerEntrypoint",
    "create_worker_handler",
    "dispatch",
    "get_env",
    "get_request",
    "http_handler",
    "parse_route",
    "service_binding_handler",
]


# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ApiContainer": "archway.container",
    "ApiServer": "archway.server.asgi",
    "Architecture": "archway.architecture",
    "ArchwayError": "archway.errors",
    "Binding": "archway.binding",
    "ConfigurationError": "archway.errors",
    "DuplicateRouteError": "archway.errors",
    "Endpoint": "archway.binding",
    "Function": "archway.function",
    "IncomingRequest": "archway.server.dispatch",
    "InvocationError": "archway.errors",
    "LocalClient": "archway.server.inprocess",
    "NotImplementedFunctionError": "archway.errors",
    "OutgoingResponse": "archway.server.dispatch",
    "PlaceholderFunction": "archway.function",
    "RemoteCallError": "archway.errors",
    "RouteNotFoundError": "archway.errors",
    "RouteSpec": "archway.routing.route",
    "ServerConfig": "archway.config",
    "WorkerEntrypoint": "archway.server.worker",
    "create_worker_handler": "archway.server.worker",
    "dispatch": "archway.server.dispatch",
    "get_env": "archway.context",
    "get_request": "archway.context",
    "http_handler": "archway.remote",
    "parse_route": "archway.routing.parser",
    "service_binding_handler": "archway.remote",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import archway`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_path), name)
