"""Route string parsing.

A route string is ``[METHOD ]PATH``::

    "GET /v1/api/hello/{name}"   -> GET, params ("name",)
    "POST /store/{collection}"   -> POST, params ("collection",)
    "/health"                    -> GET (default), no params

Placeholders are ``{name}`` where ``name`` matches ``\\w+``. Anything
else in the path, including an unbalanced ``{`` or ``}``, is literal.
"""

import re

from archway.routing.route import RouteSpec

DEFAULT_METHOD = "GET"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

# One path segment: anything but a slash
_SEGMENT = "([^/]+)"


def parse_route(route: str) -> RouteSpec:
    """Parse a route string into a compiled ``RouteSpec``.

    The method token is taken verbatim (case-sensitive). Only a string
    with exactly one space is split into method and path.
    """
    parts = route.split(" ")
    if len(parts) == 2:
        method, path = parts
        method = method or DEFAULT_METHOD
    else:
        method, path = DEFAULT_METHOD, route

    # re.split with one capture group alternates literal, name, literal, ...
    pieces = _PLACEHOLDER.split(path)
    literal_segments = tuple(pieces[::2])
    param_names = tuple(pieces[1::2])

    regex = _SEGMENT.join(re.escape(literal) for literal in literal_segments)
    return RouteSpec(
        method=method,
        path=path,
        literal_segments=literal_segments,
        param_names=param_names,
        pattern=re.compile(f"^{regex}$"),
    )
