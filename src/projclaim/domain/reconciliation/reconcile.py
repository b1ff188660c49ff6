"""One reconciliation pass over a claim, in the order the controller runs it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from projclaim.domain.errors import StoreError
from projclaim.domain.model import ClaimPhase, ConditionStatus
from projclaim.domain.reconciliation.finalizer import has_finalizer
from projclaim.domain.reconciliation.state import ObjectState

if TYPE_CHECKING:
    from collections.abc import Callable

    from projclaim.domain.reconciliation.adapter import ProjectClaimAdapter

log = getLogger(__name__)


class ReconcileStep(StrEnum):
    FINALIZE = "FinalizeFailed"
    INITIALIZE = "InitializeFailed"
    PHASE_PENDING = "SetPendingFailed"
    REFERENCE_LINK = "ReferenceLinkFailed"
    FINALIZER = "FinalizerFailed"
    REFERENCE = "ReferenceCreationFailed"
    PHASE_PENDING_PROJECT = "SetPendingProjectFailed"
    CLEAR_ERROR = "ClearErrorFailed"


RECONCILED_REASON = "Reconciled"


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Whether the loop should run another pass, and the step that decided it."""

    requeue: bool
    step: ReconcileStep | None = None


def reconcile_claim(adapter: ProjectClaimAdapter) -> ReconcileResult:
    """Run the adapter operations for one pass.

    A step that wrote to the store ends the pass with ``requeue=True`` so the
    next pass starts from a fresh read. Store errors are recorded on the
    claim's error condition when possible and then re-raised.
    """

    if adapter.is_claim_deletion_requested():
        _run_step(adapter, ReconcileStep.FINALIZE, adapter.finalize_claim, record=False)
        if not has_finalizer(adapter.claim):
            log.info("ProjectClaim %s finalized", adapter.claim.key)
            return ReconcileResult(requeue=False, step=ReconcileStep.FINALIZE)
        # the reference is still being removed; check again later
        return ReconcileResult(requeue=True, step=ReconcileStep.FINALIZE)

    steps: tuple[tuple[ReconcileStep, Callable[[], ObjectState], bool], ...] = (
        (ReconcileStep.INITIALIZE, adapter.ensure_conditions_initialized, True),
        (ReconcileStep.PHASE_PENDING, lambda: adapter.ensure_phase(ClaimPhase.PENDING), False),
        (ReconcileStep.REFERENCE_LINK, adapter.ensure_reference_link, True),
        (ReconcileStep.FINALIZER, adapter.ensure_finalizer_present, True),
        (ReconcileStep.REFERENCE, adapter.ensure_reference_exists, False),
        (
            ReconcileStep.PHASE_PENDING_PROJECT,
            lambda: adapter.ensure_phase(ClaimPhase.PENDING_PROJECT),
            False,
        ),
    )
    for step, operation, requeue_on_change in steps:
        state = _run_step(adapter, step, operation)
        if requeue_on_change and state.modified:
            return ReconcileResult(requeue=True, step=step)

    _run_step(adapter, ReconcileStep.CLEAR_ERROR, lambda: _clear_error(adapter), record=False)
    return ReconcileResult(requeue=False)


def _clear_error(adapter: ProjectClaimAdapter) -> ObjectState:
    condition = adapter.find_condition()
    if condition is None or condition.status == ConditionStatus.FALSE:
        return ObjectState.UNCHANGED
    return adapter.set_condition(ConditionStatus.FALSE, RECONCILED_REASON, "")


def _run_step(
    adapter: ProjectClaimAdapter,
    step: ReconcileStep,
    operation: Callable[[], ObjectState],
    *,
    record: bool = True,
) -> ObjectState:
    try:
        return operation()
    except StoreError as exc:
        log.warning("Step %s failed for ProjectClaim %s: %s", step, adapter.claim.key, exc)
        if record:
            _record_error(adapter, step, exc)
        raise


def _record_error(adapter: ProjectClaimAdapter, step: ReconcileStep, error: StoreError) -> None:
    try:
        adapter.set_condition(ConditionStatus.TRUE, step.value, str(error))
    except StoreError:
        log.exception("Could not record %s on ProjectClaim %s", step, adapter.claim.key)
