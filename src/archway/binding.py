"""Binding — associate containers with endpoints and install overloads.

A ``Binding`` is the per-process registry that decides how each
container's functions run. The process bootstrap constructs one and
hands it to every server it starts::

    binding = Binding()

    # Serve the api here; proxy the store to another process
    binding.bind(api, Endpoint("hello-api", 3000))
    binding.bind_from_env(store, "JSONSTORE")
    binding.enable_remote(store)

    ApiServer(api, binding=binding).run()

Overloads are arbitrary implementations: direct Postgres calls, KV
calls, HTTP proxies, or service-binding calls. Binding is the single
place where a storage backend or a transport gets swapped.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from archway._internal.types import Handler
from archway.config import parse_port
from archway.container import ApiContainer
from archway.errors import ConfigurationError

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger("archway.binding")


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Where a container is reachable over the network."""

    host: str
    port: int
    scheme: str = "http"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    @classmethod
    def parse(cls, url: str) -> Endpoint:
        """Parse ``scheme://host[:port]``; the port defaults by scheme."""
        parts = urlsplit(url)
        if not parts.scheme or not parts.hostname:
            msg = f"Invalid endpoint URL: {url!r}. Expected format: 'http://host:port'"
            raise ConfigurationError(msg)
        port = parts.port or (443 if parts.scheme == "https" else 80)
        return cls(host=parts.hostname, port=port, scheme=parts.scheme)

    def __str__(self) -> str:
        return self.base_url


class Binding:
    """Process-wide registry of container endpoints and local containers.

    A container may be bound, marked local, both, or neither. It is
    *remote* when it is bound and not local.
    """

    __slots__ = ("_endpoints", "_local")

    def __init__(self) -> None:
        self._endpoints: dict[ApiContainer, Endpoint] = {}
        self._local: set[ApiContainer] = set()

    def bind(
        self,
        container: ApiContainer,
        endpoint: Endpoint,
        overloads: Mapping[str, Handler] | None = None,
    ) -> None:
        """Record ``endpoint`` for ``container`` and install overloads.

        Overload keys are route names. Every name is checked before
        anything is installed, so an unknown name raises
        ``RouteNotFoundError`` and leaves the container untouched.
        """
        targets = [
            (container.get_route(name), handler) for name, handler in (overloads or {}).items()
        ]

        self._endpoints[container] = endpoint
        for entry, handler in targets:
            entry.function.overload(handler)
            logger.debug("overloaded %s.%s (%s)", container.id, entry.name, entry.spec)

    def bind_from_env(
        self,
        container: ApiContainer,
        prefix: str,
        overloads: Mapping[str, Handler] | None = None,
        *,
        strict: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> Endpoint | None:
        """Bind ``container`` from ``<PREFIX>_HOST`` and ``<PREFIX>_PORT``.

        If either variable is missing the container stays unbound and
        ``None`` is returned, unless ``strict`` is set, which raises
        ``ConfigurationError`` instead.
        """
        env = os.environ if environ is None else environ
        host = env.get(f"{prefix}_HOST")
        port = env.get(f"{prefix}_PORT")

        if not host or not port:
            if strict:
                msg = (
                    f"Container {container.id!r} requires {prefix}_HOST and "
                    f"{prefix}_PORT to be set"
                )
                raise ConfigurationError(msg)
            logger.debug("%s_HOST/%s_PORT not set; %s stays unbound", prefix, prefix, container.id)
            return None

        endpoint = Endpoint(host=host, port=parse_port(port, f"{prefix}_PORT"))
        self.bind(container, endpoint, overloads)
        return endpoint

    def enable_remote(
        self,
        container: ApiContainer,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Overload every route of a bound container with an HTTP call.

        After this, in-process calls such as ``await container.call(...)``
        travel to the bound endpoint. Raises ``ConfigurationError`` if the
        container is unbound or served by this process.
        """
        from archway.remote import http_handler

        endpoint = self._endpoints.get(container)
        if endpoint is None:
            msg = f"Container {container.id!r} has no endpoint; bind it before enabling remote calls"
            raise ConfigurationError(msg)
        if container in self._local:
            msg = f"Container {container.id!r} is served locally and cannot proxy to itself"
            raise ConfigurationError(msg)

        for entry in container:
            entry.function.overload(http_handler(endpoint, entry.spec, client=client))
        logger.info("%s routes now call %s", container.id, endpoint)

    def get_endpoint(self, container: ApiContainer) -> Endpoint | None:
        return self._endpoints.get(container)

    @property
    def bindings(self) -> Mapping[ApiContainer, Endpoint]:
        """Read-only view of every bound container."""
        return MappingProxyType(self._endpoints)

    def mark_local(self, container: ApiContainer) -> None:
        """Record that this process serves ``container`` itself."""
        self._local.add(container)

    def is_local(self, container: ApiContainer) -> bool:
        return container in self._local

    def is_remote(self, container: ApiContainer) -> bool:
        """True when the container is bound and not served by this process."""
        return container in self._endpoints and container not in self._local
