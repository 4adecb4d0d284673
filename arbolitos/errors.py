"""Exceptions raised by the plant operations and surfaced by the CLI."""


class ArbolitosError(Exception):
    """Base class for errors reported to the user."""


class InvalidArgument(ArbolitosError, ValueError):
    """User input rejected before any storage call."""


class StorageError(ArbolitosError):
    """Connection, query or write failure in the MongoDB backend."""
