"""JSON document store — a container built by composition.

``json_store()`` registers ``store`` and ``get`` routes on a plain
``ApiContainer``. Backends are overloads installed through a binding:

- in-memory defaults (``in_memory=True``)
- PostgreSQL via ``asyncpg`` (``postgres_overloads``)
- a key-value namespace, e.g. Redis (``kv_overloads``)
- another process, via ``Binding.enable_remote``
"""

from archway.stores.json_store import GET_ROUTE, STORE_ROUTE, JsonStore, json_store

__all__ = ["GET_ROUTE", "STORE_ROUTE", "JsonStore", "json_store"]
