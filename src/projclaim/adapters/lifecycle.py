"""Kubernetes-style record lifecycle shared by the local store adapters.

* ``update`` writes metadata and spec, keeping the stored status.
* ``update_status`` writes status, keeping everything else.
* ``delete`` on a record holding finalizers only stamps ``deletion_timestamp``;
  the record disappears once an update leaves it without finalizers.
* A stale ``resource_version`` on any write is a conflict. A record without a
  version is written unconditionally.
"""

from __future__ import annotations

from copy import deepcopy
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from projclaim.domain.errors import ConflictError

if TYPE_CHECKING:
    from projclaim.domain.model import Resource


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def check_version(stored: Resource, incoming: Resource) -> None:
    expected = incoming.metadata.resource_version
    if expected is None or expected == stored.metadata.resource_version:
        return
    raise ConflictError(
        f"{incoming.kind} {incoming.key} was modified: "
        f"have version {expected}, store has {stored.metadata.resource_version}",
        kind=incoming.kind,
        key=incoming.key,
    )


def prepare_create[TResource: Resource](incoming: TResource) -> TResource:
    record = deepcopy(incoming)
    record.metadata.deletion_timestamp = None
    return record


def merge_update[TResource: Resource](stored: TResource, incoming: TResource) -> TResource:
    record = deepcopy(incoming)
    record.status = deepcopy(stored.status)  # pyright: ignore[reportAttributeAccessIssue]
    record.metadata.deletion_timestamp = stored.metadata.deletion_timestamp
    return record


def merge_status_update[TResource: Resource](stored: TResource, incoming: TResource) -> TResource:
    record = deepcopy(stored)
    record.status = deepcopy(incoming.status)  # pyright: ignore[reportAttributeAccessIssue]
    return record


def request_deletion(stored: Resource, *, now: datetime) -> bool:
    """Mark ``stored`` deleted. Return ``True`` when it can be removed right away."""

    if not stored.metadata.finalizers:
        return True
    if stored.metadata.deletion_timestamp is None:
        stored.metadata.deletion_timestamp = now
    return False


def is_collectable(record: Resource) -> bool:
    return record.is_deletion_requested and not record.metadata.finalizers


def is_terminating(record: Resource) -> bool:
    """Deletion was already requested and finalizers still hold the record."""
    return record.is_deletion_requested and bool(record.metadata.finalizers)
