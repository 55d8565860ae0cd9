"""Adapters — command execution bindings.

Public re-exports for convenient access.
"""

from goat.adapters.base import Adapter, ExecutionContext
from goat.adapters.mock import MockAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "MockAdapter",
]
