"""Architecture — the root that collects containers and functions.

An ``Architecture`` is a named registry of components. It is purely
descriptive: ``synth()`` produces a JSON-friendly definition that
deployment tooling can consume.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeAlias

from archway.errors import ConfigurationError

if TYPE_CHECKING:
    from archway.container import ApiContainer
    from archway.function import Function

Component: TypeAlias = "ApiContainer | Function"


class Architecture:
    """The root of an architecture definition.

    Usage::

        arch = Architecture("hello-world")
        api = ApiContainer("api", scope=arch)
        arch.synth()
        # {"id": "hello-world",
        #  "components": [{"id": "api", "path": "hello-world/api", "type": "ApiContainer"}]}
    """

    __slots__ = ("_components", "id")

    def __init__(self, id: str = "architecture") -> None:
        self.id = id
        self._components: dict[str, Component] = {}

    def add(self, component: Component) -> None:
        """Register a component. Ids are unique per architecture."""
        if component.id in self._components:
            msg = f"Component {component.id!r} is already defined in architecture {self.id!r}"
            raise ConfigurationError(msg)
        self._components[component.id] = component

    @property
    def components(self) -> tuple[Component, ...]:
        return tuple(self._components.values())

    def __getitem__(self, id: str) -> Component:
        return self._components[id]

    def synth(self) -> dict[str, Any]:
        """Describe the architecture as plain data."""
        return {
            "id": self.id,
            "components": [
                {
                    "id": component.id,
                    "path": f"{self.id}/{component.id}",
                    "type": type(component).__name__,
                }
                for component in self._components.values()
            ],
        }
