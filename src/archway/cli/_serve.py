"""``archway serve`` — serve a container over HTTP with uvicorn.

A resolved ``ApiServer`` is served as configured by its module, with
its binding, overloads, and startup hooks. A bare container is wrapped
in a server with a fresh ``Binding`` and its default implementations.
Placeholder checks run during ASGI lifespan startup.
"""

import argparse
import sys

from archway.binding import Binding
from archway.cli._resolve import resolve_target
from archway.server.asgi import ApiServer


def run_serve(args: argparse.Namespace) -> None:
    try:
        target = resolve_target(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    server = target if isinstance(target, ApiServer) else ApiServer(target, binding=Binding())
    server.run(host=args.host, port=args.port)
