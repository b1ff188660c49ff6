"""Failures raised by resource stores.

``NotFoundError`` is expected during normal operation and callers map it to a
boolean where existence is the question. Every other ``StoreError`` is treated
as transient: it is raised unchanged so the surrounding loop can retry the
whole invocation against a fresh read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from projclaim.domain.model import NamespacedName, ResourceKind


class StoreError(RuntimeError):
    """Base class for resource store failures."""

    def __init__(
        self,
        message: str,
        *,
        kind: ResourceKind | None = None,
        key: NamespacedName | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.key = key


class NotFoundError(StoreError):
    """Raised when no record exists under the requested key."""


class AlreadyExistsError(StoreError):
    """Raised when creating a record whose key is already taken."""


class ConflictError(StoreError):
    """Raised when a write carries a stale resource version."""
