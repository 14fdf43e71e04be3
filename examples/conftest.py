"""Shared pytest configuration for archway examples.

Provides fixtures that load a fresh copy of the ``app.py`` file in the
same directory as the test. Each load re-executes app.py in an isolated
module namespace, so every test starts with clean state (empty stores,
no overloads installed).
"""

import importlib.util
import itertools
from collections.abc import Callable
from pathlib import Path
from types import ModuleType

import pytest

_counter = itertools.count()


@pytest.fixture
def load_example(request: pytest.FixtureRequest) -> Callable[[], ModuleType]:
    """Return a loader; each call executes the sibling app.py afresh."""
    app_path = Path(request.path).parent / "app.py"

    def load() -> ModuleType:
        module_name = f"example_{app_path.parent.name}_{next(_counter)}"
        spec = importlib.util.spec_from_file_location(module_name, app_path)
        assert spec is not None
        assert spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return load


@pytest.fixture
def example(load_example: Callable[[], ModuleType]) -> ModuleType:
    """A freshly loaded example module."""
    return load_example()
