"""Shared type aliases used across archway modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

import httpx

# Function implementation: positional args in route parameter order
Handler: TypeAlias = Callable[..., Any]

# Worker-style fetch: one request in, one response out
Fetcher: TypeAlias = Callable[[httpx.Request], Awaitable[httpx.Response]]
