"""Routing — route strings compiled into anchored path matchers.

Route strings are parsed once, when a container registers them, and
matched in registration order on every request.
"""

from archway.routing.parser import parse_route
from archway.routing.route import RouteEntry, RouteMatch, RouteSpec

__all__ = ["RouteEntry", "RouteMatch", "RouteSpec", "parse_route"]
