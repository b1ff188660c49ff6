"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from projclaim.adapters.kubernetes import KubernetesUnitOfWork
from projclaim.adapters.sqlalchemy import SqlAlchemyUnitOfWork, is_started, startup
from projclaim.config import Backend, OperatorConfig, get_operator_config
from projclaim.domain.errors import NotFoundError, StoreError
from projclaim.domain.model import (
    LegalEntity,
    NamespacedName,
    ObjectMeta,
    ProjectClaim,
    ProjectClaimSpec,
)
from projclaim.domain.ports import StoreUnitOfWork
from projclaim.domain.reconciliation import ProjectClaimAdapter, ReconcileResult, reconcile_claim

if TYPE_CHECKING:
    from datetime import datetime

UnitOfWorkFactory = Callable[[], StoreUnitOfWork]

DEFAULT_MAX_PASSES = 10

log = getLogger(__name__)


def build_unit_of_work_factory(config: OperatorConfig) -> UnitOfWorkFactory:
    """Return the unit-of-work factory for the configured backend."""

    if config.backend is Backend.KUBERNETES:
        return KubernetesUnitOfWork
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def reconcile_project_claim(
    key: NamespacedName,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: OperatorConfig | None = None,
    clock: Callable[[], datetime] | None = None,
) -> ReconcileResult | None:
    """Run one reconciliation pass for the claim at ``key``.

    Returns ``None`` when the claim no longer exists. Writes that succeeded
    before a store failure are kept (each is valid on its own) and the failure
    is re-raised for the caller to retry.
    """

    effective_config = config or get_operator_config()
    effective_uow = unit_of_work_factory or build_unit_of_work_factory(effective_config)

    with effective_uow() as uow:
        try:
            claim = uow.store.get(ProjectClaim, key)
        except NotFoundError:
            log.info("ProjectClaim %s not found, nothing to reconcile", key)
            return None

        adapter = ProjectClaimAdapter(
            claim,
            uow.store,
            logger=log,
            reference_namespace=effective_config.reference_namespace,
            clock=clock,
        )
        try:
            result = reconcile_claim(adapter)
        except StoreError:
            uow.commit()
            raise
        uow.commit()

    log.info(f"Reconciled ProjectClaim {key}: requeue={result.requeue}, step={result.step}")
    return result


def reconcile_until_settled(
    key: NamespacedName,
    *,
    max_passes: int = DEFAULT_MAX_PASSES,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: OperatorConfig | None = None,
) -> ReconcileResult | None:
    """Re-run reconciliation while it asks to be re-queued, up to ``max_passes``."""

    if max_passes < 1:
        raise ValueError("max_passes must be at least 1")
    effective_config = config or get_operator_config()
    effective_uow = unit_of_work_factory or build_unit_of_work_factory(effective_config)

    result: ReconcileResult | None = None
    for attempt in range(1, max_passes + 1):
        result = reconcile_project_claim(
            key, unit_of_work_factory=effective_uow, config=effective_config
        )
        if result is None or not result.requeue:
            return result
        log.debug("ProjectClaim %s requeued after pass %s", key, attempt)
    log.warning("ProjectClaim %s still requeueing after %s passes", key, max_passes)
    return result


def create_project_claim(
    key: NamespacedName,
    legal_entity: LegalEntity,
    *,
    region: str = "",
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: OperatorConfig | None = None,
) -> ProjectClaim:
    """Create a new claim. Claims are normally created by users, not the reconciler."""

    effective_uow = unit_of_work_factory or build_unit_of_work_factory(
        config or get_operator_config()
    )
    claim = ProjectClaim(
        metadata=ObjectMeta(name=key.name, namespace=key.namespace),
        spec=ProjectClaimSpec(legal_entity=legal_entity, region=region),
    )
    with effective_uow() as uow:
        uow.store.create(claim)
        uow.commit()
    log.info("Created ProjectClaim %s", key)
    return claim


def request_claim_deletion(
    key: NamespacedName,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: OperatorConfig | None = None,
) -> None:
    """Ask the store to remove a claim; finalizers keep it until reconciled."""

    effective_uow = unit_of_work_factory or build_unit_of_work_factory(
        config or get_operator_config()
    )
    with effective_uow() as uow:
        claim = uow.store.get(ProjectClaim, key)
        uow.store.delete(claim)
        uow.commit()
    log.info("Requested deletion of ProjectClaim %s", key)


def get_project_claim(
    key: NamespacedName,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: OperatorConfig | None = None,
) -> ProjectClaim:
    effective_uow = unit_of_work_factory or build_unit_of_work_factory(
        config or get_operator_config()
    )
    with effective_uow() as uow:
        return uow.store.get(ProjectClaim, key)
