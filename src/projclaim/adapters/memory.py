"""In-process resource store with optimistic concurrency."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING

from projclaim.adapters.lifecycle import (
    check_version,
    is_collectable,
    is_terminating,
    merge_status_update,
    merge_update,
    prepare_create,
    request_deletion,
    utcnow,
)
from projclaim.domain.errors import AlreadyExistsError, NotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from datetime import datetime

    from projclaim.domain.model import NamespacedName, Resource, ResourceKind

type _RecordKey = tuple[ResourceKind, str, str]


@dataclass(frozen=True, slots=True)
class StoreCall:
    operation: str
    kind: ResourceKind
    key: NamespacedName


@dataclass(slots=True)
class InMemoryResourceStore:
    """Dict-backed store; every read and write copies, so callers never alias."""

    clock: Callable[[], datetime] = utcnow
    calls: list[StoreCall] = field(default_factory=list)
    _records: dict[_RecordKey, Resource] = field(default_factory=dict)
    _versions: Iterator[int] = field(default_factory=lambda: count(1))

    def get[TResource: Resource](self, kind: type[TResource], key: NamespacedName) -> TResource:
        self._journal("get", kind.KIND, key)
        stored = self._records.get((kind.KIND, key.namespace, key.name))
        if stored is None:
            raise NotFoundError(f"{kind.KIND} {key} not found", kind=kind.KIND, key=key)
        if not isinstance(stored, kind):
            raise TypeError(f"Stored {stored.kind} {key} is not a {kind.__name__}")
        return deepcopy(stored)

    def create(self, record: Resource) -> None:
        self._journal("create", record.kind, record.key)
        record_key = self._record_key(record)
        if record_key in self._records:
            raise AlreadyExistsError(
                f"{record.kind} {record.key} already exists", kind=record.kind, key=record.key
            )
        self._save(prepare_create(record), origin=record)

    def update(self, record: Resource) -> None:
        self._journal("update", record.kind, record.key)
        stored = self._require(record)
        check_version(stored, record)
        merged = merge_update(stored, record)
        if is_collectable(merged):
            del self._records[self._record_key(record)]
            record.metadata.resource_version = None
            return
        self._save(merged, origin=record)

    def update_status(self, record: Resource) -> None:
        self._journal("update_status", record.kind, record.key)
        stored = self._require(record)
        check_version(stored, record)
        self._save(merge_status_update(stored, record), origin=record)

    def delete(self, record: Resource) -> None:
        self._journal("delete", record.kind, record.key)
        stored = self._require(record)
        if is_terminating(stored):
            return
        if request_deletion(stored, now=self.clock()):
            del self._records[self._record_key(record)]
            return
        self._save(stored)

    # Test helpers -------------------------------------------------------------

    def contains(self, kind: type[Resource], key: NamespacedName) -> bool:
        return (kind.KIND, key.namespace, key.name) in self._records

    def operations(self, kind: ResourceKind | None = None) -> list[str]:
        return [call.operation for call in self.calls if kind is None or call.kind == kind]

    def _journal(self, operation: str, kind: ResourceKind, key: NamespacedName) -> None:
        self.calls.append(StoreCall(operation=operation, kind=kind, key=key))

    def _record_key(self, record: Resource) -> _RecordKey:
        return (record.kind, record.metadata.namespace, record.metadata.name)

    def _require(self, record: Resource) -> Resource:
        stored = self._records.get(self._record_key(record))
        if stored is None:
            raise NotFoundError(
                f"{record.kind} {record.key} not found", kind=record.kind, key=record.key
            )
        return stored

    def _save(self, record: Resource, *, origin: Resource | None = None) -> None:
        version = str(next(self._versions))
        record.metadata.resource_version = version
        self._records[self._record_key(record)] = record
        if origin is not None:
            origin.metadata.resource_version = version
