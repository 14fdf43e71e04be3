"""RouteSpec, RouteEntry, and RouteMatch frozen dataclasses."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote

if TYPE_CHECKING:
    from archway.function import Function

BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT"})

# Same safe set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """A compiled route string.

    ``literal_segments`` holds the literal text around the placeholders
    and always has ``len(param_names) + 1`` entries::

        parse_route("GET /users/{id}/posts/{post}")
        # literal_segments == ("/users/", "/posts/", "")
        # param_names      == ("id", "post")
    """

    method: str
    path: str
    literal_segments: tuple[str, ...]
    param_names: tuple[str, ...]
    pattern: re.Pattern[str]

    @property
    def has_body(self) -> bool:
        """True when requests for this route carry a JSON body argument."""
        return self.method in BODY_METHODS

    def match(self, path: str) -> tuple[str, ...] | None:
        """Match a raw request path, returning URL-decoded arguments.

        Arguments come back in ``param_names`` order. Returns ``None``
        if the path does not match.
        """
        m = self.pattern.fullmatch(path)
        if m is None:
            return None
        return tuple(unquote(value) for value in m.groups())

    def build_path(self, args: Sequence[Any]) -> str:
        """Substitute the first ``len(param_names)`` args into the path.

        Raises ``TypeError`` if fewer arguments than placeholders are given.
        """
        count = len(self.param_names)
        if len(args) < count:
            msg = (
                f"Route {self.method} {self.path} expects {count} path "
                f"argument(s), got {len(args)}"
            )
            raise TypeError(msg)

        parts = [self.literal_segments[0]]
        for value, literal in zip(args[:count], self.literal_segments[1:], strict=True):
            parts.append(quote(str(value), safe=_URI_COMPONENT_SAFE))
            parts.append(literal)
        return "".join(parts)

    def __str__(self) -> str:
        return f"{self.method} {self.path}"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A named route registered on a container."""

    name: str
    spec: RouteSpec
    function: Function


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    entry: RouteEntry
    args: tuple[str, ...]

    @property
    def path_params(self) -> dict[str, str]:
        return dict(zip(self.entry.spec.param_names, self.args, strict=True))
