"""Invocation-scoped context via ContextVar.

Provides:
- ``request_var``: the ``IncomingRequest`` being dispatched.
- ``env_var``: the worker environment passed to ``fetch(request, env)``.

Both are set by the dispatch adapters and reset after each request, so
a function implementation can read them without changing its call
signature. Outside a request, accessing them raises ``LookupError``.

``ContextVar`` is task-local under asyncio, so concurrent requests
never see each other's values.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from archway.server.dispatch import IncomingRequest

request_var: ContextVar[IncomingRequest] = ContextVar("archway_request")
"""The current request. Set by ``dispatch()`` around each invocation."""

env_var: ContextVar[Any] = ContextVar("archway_env")
"""The current worker environment. Set by ``WorkerEntrypoint.fetch()``."""


def get_request() -> IncomingRequest:
    """Return the request currently being dispatched.

    Raises ``LookupError`` if called outside a dispatched request, for
    example when a function is invoked directly in-process.
    """
    return request_var.get()


def get_env() -> Any:
    """Return the worker environment of the current request.

    Raises ``LookupError`` outside ``WorkerEntrypoint.fetch()``.
    """
    return env_var.get()
