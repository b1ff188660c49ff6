"""Port for the declarative resource store the reconciler writes to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from projclaim.domain.model import NamespacedName, Resource


@runtime_checkable
class ResourceStore(Protocol):
    """Get/create/update/delete by (kind, namespace, name).

    Successful writes stamp the new ``metadata.resource_version`` onto the
    record passed in, so later writes from the same caller are not rejected as
    stale. ``update`` persists metadata and spec only; ``update_status``
    persists the status sub-resource only.
    """

    def get[TResource: Resource](self, kind: type[TResource], key: NamespacedName) -> TResource:
        """Return a fresh copy of the record or raise ``NotFoundError``."""
        ...

    def create(self, record: Resource) -> None:
        """Persist a new record or raise ``AlreadyExistsError``."""
        ...

    def update(self, record: Resource) -> None:
        """Persist metadata and spec or raise ``ConflictError``/``NotFoundError``."""
        ...

    def update_status(self, record: Resource) -> None:
        """Persist the status sub-resource with the same conflict semantics."""
        ...

    def delete(self, record: Resource) -> None:
        """Request removal or raise ``NotFoundError`` when already absent."""
        ...
