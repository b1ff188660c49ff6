"""Unit of work for the Kubernetes store.

Each API call is durable on its own, so commit and rollback have nothing to do;
the unit of work only scopes the HTTP client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from projclaim.adapters.kubernetes.client import KubernetesResourceStore

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType


class KubernetesUnitOfWork:
    def __init__(
        self, store_factory: Callable[[], KubernetesResourceStore] = KubernetesResourceStore
    ) -> None:
        self._store_factory = store_factory
        self._store: KubernetesResourceStore | None = None

    def __enter__(self) -> KubernetesUnitOfWork:
        self._store = self._store_factory()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if self._store is not None:
            self._store.close()
        self._store = None
        return False

    @property
    def store(self) -> KubernetesResourceStore:
        if self._store is None:
            raise RuntimeError("Unit of work not entered")
        return self._store

    def commit(self) -> None:
        return None

    def rollback(self) -> None:
        return None


if TYPE_CHECKING:
    from projclaim.domain.ports import StoreUnitOfWork

    _uow_check: StoreUnitOfWork = KubernetesUnitOfWork()
