"""
Base building blocks:
object metadata and the kind contract shared by every stored record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from projclaim.domain.model.primitives import NamespacedName

if TYPE_CHECKING:
    from datetime import datetime

    from projclaim.domain.model.enums import ResourceKind


@dataclass(kw_only=True)
class ObjectMeta:
    name: str
    namespace: str
    finalizers: tuple[str, ...] = ()
    # tombstone: set once by the store when removal is requested, never cleared
    deletion_timestamp: datetime | None = None
    # opaque optimistic-concurrency token owned by the store
    resource_version: str | None = None

    @property
    def key(self) -> NamespacedName:
        return NamespacedName(namespace=self.namespace, name=self.name)


@dataclass(kw_only=True)
class Resource:
    """A record addressable in the resource store by kind and namespaced name."""

    metadata: ObjectMeta

    # class-level discriminator; subclasses must override
    KIND: ClassVar[ResourceKind]

    @property
    def kind(self) -> ResourceKind:
        return self.KIND

    @property
    def key(self) -> NamespacedName:
        return self.metadata.key

    @property
    def is_deletion_requested(self) -> bool:
        return self.metadata.deletion_timestamp is not None
