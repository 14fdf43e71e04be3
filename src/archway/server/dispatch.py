"""The dispatch algorithm shared by every adapter.

Each adapter maps its host's native request onto ``IncomingRequest``,
calls ``dispatch()``, and maps the ``OutgoingResponse`` back. Per request:

1. Match routes in registration order (exact method, then path).
2. Build arguments: URL-decoded path captures in parameter order, plus
   the parsed JSON body for POST/PUT.
3. Invoke the route's function.
4. 200 with the JSON result, 500 with ``{"error": message}`` on any
   failure, or 404 ``{"error": "Not found"}`` when nothing matched.

Failures never escape ``dispatch()``: one failing handler degrades to a
500 for that request and nothing else.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from archway.container import ApiContainer
from archway.context import request_var

logger = logging.getLogger("archway.server")

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class IncomingRequest:
    """A host-neutral request.

    ``path`` is the raw request path, still percent-encoded and without
    the query string. ``path_params`` is filled in once a route matches.
    """

    method: str
    path: str
    body: bytes = b""
    path_params: Mapping[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        """Parse the body as JSON. An empty body parses as ``None``."""
        if not self.body:
            return None
        return json.loads(self.body)


@dataclass(frozen=True, slots=True)
class OutgoingResponse:
    """A host-neutral JSON response."""

    status: int = 200
    body: bytes = b"null"
    content_type: str = JSON_CONTENT_TYPE

    @classmethod
    def from_value(cls, value: Any, status: int = 200) -> "OutgoingResponse":
        """JSON-encode ``value`` as the response body."""
        return cls(status=status, body=json.dumps(value).encode("utf-8"))

    @classmethod
    def error(cls, message: str, status: int = 500) -> "OutgoingResponse":
        return cls.from_value({"error": message}, status=status)

    def json(self) -> Any:
        return json.loads(self.body)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")


def split_target(target: str) -> str:
    """Drop the query string from a request target."""
    return target.split("?", 1)[0]


async def dispatch(container: ApiContainer, request: IncomingRequest) -> OutgoingResponse:
    """Match, invoke, and serialize one request against ``container``."""
    match = container.match(request.method, request.path)
    if match is None:
        logger.debug("404 %s %s: no route in %s", request.method, request.path, container.id)
        return OutgoingResponse.error("Not found", status=404)

    entry = match.entry
    request = replace(request, path_params=match.path_params)
    token = request_var.set(request)
    try:
        args: list[Any] = list(match.args)
        if entry.spec.has_body:
            args.append(request.json())
        result = await entry.function.invoke(*args)
        response = OutgoingResponse.from_value(result)
    except Exception as exc:
        logger.exception("500 %s %s (%s.%s)", request.method, request.path, container.id, entry.name)
        return OutgoingResponse.error(str(exc) or "Internal server error")
    finally:
        request_var.reset(token)

    logger.debug("200 %s %s (%s.%s)", request.method, request.path, container.id, entry.name)
    return response
