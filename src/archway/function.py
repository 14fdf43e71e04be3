"""Functions — named operations with a swappable implementation.

A ``Function`` wraps a default implementation and one override slot.
``invoke()`` always resolves to the override when one is installed,
otherwise to the default. Overloading replaces, it never chains::

    hello = Function("hello-handler", lambda name: f"Hello, {name}!")
    await hello.invoke("Ada")             # "Hello, Ada!"

    hello.overload(remote_hello)          # e.g. an HTTP proxy
    await hello.invoke("Ada")             # whatever remote_hello returns

The slot is written during startup binding and read on every request.
Replacing it is a single attribute assignment, so a concurrent reader
sees either the old implementation or the new one, never a mix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from archway._internal.invoke import invoke
from archway._internal.types import Handler
from archway.errors import NotImplementedFunctionError

if TYPE_CHECKING:
    from archway.architecture import Architecture
    from archway.container import ApiContainer


class Function:
    """A named operation with a default implementation and an optional overload."""

    __slots__ = ("_overload", "_owner", "handler", "id")

    def __init__(self, id: str, handler: Handler, *, scope: Architecture | None = None) -> None:
        self.id = id
        self.handler = handler
        self._overload: Handler | None = None
        # Container this function is routed on, if any
        self._owner: ApiContainer | None = None
        if scope is not None:
            scope.add(self)

    def overload(self, handler: Handler) -> None:
        """Replace the implementation. The most recent call wins."""
        self._overload = handler

    def has_overload(self) -> bool:
        return self._overload is not None

    @property
    def resolved(self) -> Handler:
        """The implementation ``invoke()`` would call right now."""
        overload = self._overload
        return overload if overload is not None else self.handler

    @property
    def is_placeholder(self) -> bool:
        return False

    async def invoke(self, *args: Any) -> Any:
        """Call the resolved implementation. Errors propagate unchanged."""
        return await invoke(self.resolved, *args)

    def __repr__(self) -> str:
        state = "overloaded" if self.has_overload() else "default"
        return f"<{type(self).__name__} {self.id!r} ({state})>"


class PlaceholderFunction(Function):
    """A function that must be overloaded before use.

    Declares an operation in the API contract without providing an
    implementation. Invoking it without an overload raises
    ``NotImplementedFunctionError``. Containers list these through
    ``unresolved_placeholders()`` so servers can refuse to start.
    """

    __slots__ = ()

    def __init__(self, id: str, *, scope: Architecture | None = None) -> None:
        super().__init__(id, self._not_implemented, scope=scope)

    def _not_implemented(self, *args: Any) -> Any:
        raise NotImplementedFunctionError(self.id)

    @property
    def is_placeholder(self) -> bool:
        return True
