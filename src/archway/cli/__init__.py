"""Archway CLI — route listing, readiness checks, and serving.

Entry point registered as ``archway`` in ``pyproject.toml``::

    [project.scripts]
    archway = "archway.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``archway`` command."""
    parser = argparse.ArgumentParser(
        prog="archway",
        description="Archway — one API definition, served in-process, over HTTP, or remotely.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- archway routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List a container's routes")
    routes_parser.add_argument("target", help="Import string (e.g. myapp.architecture:api)")

    # -- archway check ----------------------------------------------------
    check_parser = subparsers.add_parser(
        "check", help="Fail if placeholder functions have no overload"
    )
    check_parser.add_argument("target", help="Import string (e.g. myapp.architecture:api)")

    # -- archway serve ----------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a container over HTTP")
    serve_parser.add_argument("target", help="Import string (e.g. myapp.server:server)")
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from archway.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from archway.cli._check import run_check

        run_check(args)
    elif args.command == "serve":
        from archway.cli._serve import run_serve

        run_serve(args)
