"""Dispatch adapters — one matching algorithm, three hosts.

- ``LocalClient``: in-process calls, no network involved
- ``ApiServer``: an ASGI application (served by uvicorn)
- ``create_worker_handler`` / ``WorkerEntrypoint``: a fetch-style
  handler over ``httpx.Request`` and ``httpx.Response``
"""

from archway.server.asgi import ApiServer
from archway.server.dispatch import IncomingRequest, OutgoingResponse, dispatch
from archway.server.inprocess import LocalClient
from archway.server.worker import WorkerEntrypoint, create_worker_handler

__all__ = [
    "ApiServer",
    "IncomingRequest",
    "LocalClient",
    "OutgoingResponse",
    "WorkerEntrypoint",
    "create_worker_handler",
    "dispatch",
]
