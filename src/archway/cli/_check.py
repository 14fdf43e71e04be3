"""``archway check`` — readiness check for placeholder functions.

Exits with code 1 if any placeholder function routed by the container
has no overload installed.
"""

import argparse

from archway.cli._resolve import resolve_container


def run_check(args: argparse.Namespace) -> None:
    container = resolve_container(args.target)
    unresolved = container.unresolved_placeholders()

    if not unresolved:
        print(f"{container.id}: all {len(container)} route(s) have an implementation.")
        return

    print(f"{container.id}: {len(unresolved)} placeholder function(s) without an overload:")
    for entry in container:
        if entry.function in unresolved:
            print(f"  {entry.name:<16} {entry.spec}  ({entry.function.id})")
    raise SystemExit(1)
