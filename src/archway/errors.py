"""Archway exception hierarchy.

Shared across the container, binding registry, remote handlers, and
dispatch adapters so every module raises and catches the same types.
"""


class ArchwayError(Exception):
    """Base for all archway-specific errors."""


class ConfigurationError(ArchwayError):
    """Raised when an architecture or binding is misconfigured.

    Configuration errors surface at startup, before any traffic is accepted.
    """


class DuplicateRouteError(ConfigurationError):
    """Raised when a route name is registered twice on one container."""

    def __init__(self, name: str, container: str) -> None:
        self.name = name
        self.container = container
        super().__init__(f"Duplicate route name {name!r} in container {container!r}")


class RouteNotFoundError(ConfigurationError):
    """Raised when a route name is not registered on a container."""

    def __init__(self, name: str, container: str) -> None:
        self.name = name
        self.container = container
        super().__init__(f"Route {name!r} not found in container {container!r}")


class InvocationError(ArchwayError):
    """Base for errors raised while invoking a function."""


class NotImplementedFunctionError(InvocationError):
    """Raised by a placeholder function that was never given an overload."""

    def __init__(self, function_id: str) -> None:
        self.function_id = function_id
        super().__init__(
            f"Function {function_id!r} is not implemented. Provide an overload before invoking."
        )


class RemoteCallError(InvocationError):
    """Raised when an outbound call to a bound endpoint fails.

    ``status`` is ``None`` when the request never produced a response
    (connection refused, DNS failure, timeout).
    """

    def __init__(self, method: str, url: str, status: int | None, detail: str) -> None:
        self.method = method
        self.url = url
        self.status = status
        self.detail = detail
        if status is None:
            message = f"Remote call {method} {url} failed: {detail}"
        else:
            message = f"Remote call {method} {url} failed with {status}: {detail}"
        super().__init__(message)
