"""Domain port definitions for adapters."""

from __future__ import annotations

from .store import ResourceStore
from .unit_of_work import StoreUnitOfWork

__all__ = [
    "ResourceStore",
    "StoreUnitOfWork",
]
