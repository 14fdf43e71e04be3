"""ASGI response sending — translates OutgoingResponse to ASGI messages."""

from archway._internal.asgi import Send
from archway.server.dispatch import OutgoingResponse


async def send_response(response: OutgoingResponse, send: Send) -> None:
    """Translate an ``OutgoingResponse`` into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
        (b"content-length", str(len(response.body)).encode("latin-1")),
    ]

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": response.body,
        }
    )
