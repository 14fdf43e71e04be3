"""Store backend error hierarchy."""

from archway.errors import ArchwayError


class StoreError(ArchwayError):
    """Base for all archway.stores errors."""


class BackendNotInstalledError(StoreError):
    """Raised when the driver for a store backend is not installed."""
