"""Import resolution — resolves ``"module:attribute"`` strings.

Shared by every ``archway`` subcommand to locate a container or a
server from a user-supplied import string.
"""

import importlib
import sys

from archway.container import ApiContainer
from archway.server.asgi import ApiServer
from archway.stores.json_store import JsonStore

_TARGET_TYPES = (ApiContainer, ApiServer, JsonStore)


def resolve_target(import_string: str) -> ApiContainer | ApiServer:
    """Resolve an import string to an ``ApiContainer`` or ``ApiServer``.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"api"``. A ``JsonStore`` resolves to its container.
    Callables that are not targets themselves are treated as factories
    and called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a container or server.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "api"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, _TARGET_TYPES):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, JsonStore):
        obj = obj.container

    if not isinstance(obj, (ApiContainer, ApiServer)):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not an ApiContainer or ApiServer"
        raise TypeError(msg)

    return obj


def resolve_container(import_string: str) -> ApiContainer:
    """Resolve to a container, exiting with status 1 on failure."""
    try:
        target = resolve_target(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    if isinstance(target, ApiServer):
        return target.container
    return target
