"""Database lookups used by the ranking service and catalog endpoints."""

from .lookup import LookupProvider

__all__ = ["LookupProvider"]
