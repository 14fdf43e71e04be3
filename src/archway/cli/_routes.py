"""``archway routes`` — list a container's routes."""

import argparse

from archway.cli._resolve import resolve_container


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of NAME, METHOD, PATH, and FUNCTION in registration order."""
    container = resolve_container(args.target)

    if not len(container):
        print(f"No routes registered on {container.id!r}.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for entry in container:
        function = entry.function
        label = function.id
        if function.is_placeholder:
            label = f"{label} (placeholder{', overloaded' if function.has_overload() else ''})"
        elif function.has_overload():
            label = f"{label} (overloaded)"
        rows.append((entry.name, entry.spec.method, entry.spec.path, label))

    headers = ("NAME", "METHOD", "PATH", "FUNCTION")
    widths = [
        max(len(header), *(len(row[i]) for row in rows)) for i, header in enumerate(headers[:3])
    ]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(row[3]) for row in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
