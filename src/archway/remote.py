"""Remote handlers — function overloads that call a bound endpoint.

``http_handler`` turns a route into an implementation that performs
the same call over HTTP. Positional arguments map onto the route's
placeholders in order; for POST/PUT the next argument is sent as the
JSON body. The transport is pluggable:

- default: a fresh ``httpx.AsyncClient`` per call
- ``client=``: a shared ``httpx.AsyncClient`` (connection reuse, or an
  ``httpx.ASGITransport`` for in-process servers)
- ``fetch=``: any ``async (httpx.Request) -> httpx.Response`` callable,
  such as a worker handler reached through a service binding

Non-2xx responses, transport failures, and success bodies that are not
JSON raise ``RemoteCallError``. An empty success body returns ``None``.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx

from archway._internal.invoke import invoke
from archway._internal.types import Fetcher, Handler
from archway.binding import Endpoint
from archway.errors import RemoteCallError
from archway.routing.parser import parse_route
from archway.routing.route import RouteSpec

logger = logging.getLogger("archway.remote")

# Service bindings route by binding, not by host; the URL only carries the path
SERVICE_BINDING_BASE_URL = "https://internal"

DEFAULT_TIMEOUT = 30.0


def http_handler(
    endpoint: Endpoint | str,
    route: str | RouteSpec,
    *,
    client: httpx.AsyncClient | None = None,
    fetch: Fetcher | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Handler:
    """Build an overload that calls ``route`` on ``endpoint``.

    Args:
        endpoint: Bound endpoint or base URL (``"http://jsonstore:3001"``).
        route: Route string or compiled ``RouteSpec`` of the remote route.
        client: Shared client to send through. Not closed by the handler.
        fetch: Fetch-style callable to send through instead of a client.
        timeout: Per-request timeout when the handler owns the client.
    """
    spec = parse_route(route) if isinstance(route, str) else route
    base_url = (endpoint if isinstance(endpoint, str) else endpoint.base_url).rstrip("/")
    count = len(spec.param_names)

    async def send(request: httpx.Request) -> httpx.Response:
        if fetch is not None:
            return await invoke(fetch, request)
        if client is not None:
            return await client.send(request)
        async with httpx.AsyncClient(timeout=timeout) as owned:
            return await owned.send(request)

    async def remote_call(*args: Any) -> Any:
        url = f"{base_url}{spec.build_path(args)}"
        content: bytes | None = None
        if spec.has_body and len(args) > count:
            content = json.dumps(args[count]).encode("utf-8")

        headers = {"content-type": "application/json"} if content is not None else {}
        request = httpx.Request(spec.method, url, headers=headers, content=content)
        logger.debug("remote call %s %s", spec.method, url)

        try:
            response = await send(request)
        except httpx.HTTPError as exc:
            raise RemoteCallError(spec.method, url, None, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise RemoteCallError(spec.method, url, response.status_code, _error_detail(response))
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise RemoteCallError(
                spec.method, url, response.status_code, "invalid JSON response"
            ) from None

    remote_call.__name__ = f"remote {spec}"
    remote_call.__qualname__ = remote_call.__name__
    return remote_call


def service_binding_handler(get_binding: Callable[[], Any], route: str | RouteSpec) -> Handler:
    """Build an overload that calls ``route`` through a service binding.

    ``get_binding`` is resolved on every call, because worker bindings
    arrive with each request's environment. It may return a fetch
    callable or an object with a ``fetch`` method.
    """

    async def fetch(request: httpx.Request) -> httpx.Response:
        binding = get_binding()
        return await invoke(getattr(binding, "fetch", binding), request)

    return http_handler(SERVICE_BINDING_BASE_URL, route, fetch=fetch)


def _error_detail(response: httpx.Response) -> str:
    """Prefer the remote ``{"error": ...}`` envelope, else the raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return response.text
