"""Unit-of-work abstraction around a resource store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from projclaim.domain.ports.store import ResourceStore


@runtime_checkable
class StoreUnitOfWork(Protocol):
    """Scope of one reconciliation invocation against a store."""

    @property
    def store(self) -> ResourceStore: ...

    def __enter__(self) -> StoreUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
