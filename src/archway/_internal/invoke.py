"""Invoke helpers — call sync or async implementations uniformly.

Function implementations and overloads can be ``def`` or ``async def``.
Any code that calls a user-provided implementation must handle both
cases. This module keeps the sync/async check in exactly one place.

Usage::

    from archway._internal.invoke import invoke

    result = await invoke(handler, *args)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync, returns immediately
        def hellos():
            return greetings

        # async, awaited automatically
        async def hello(name):
            await store.store("greeted", {"name": name})
            return f"Hello, {name}!"
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
