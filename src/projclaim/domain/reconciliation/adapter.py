"""Stateful facade over one claim, its expected reference and the store."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from projclaim.domain.errors import NotFoundError
from projclaim.domain.model import ClaimPhase, ConditionStatus, ProjectReference
from projclaim.domain.reconciliation import conditions, finalizer, phase
from projclaim.domain.reconciliation.deletion import finalize_claim
from projclaim.domain.reconciliation.naming import (
    DEFAULT_REFERENCE_NAMESPACE,
    expected_reference,
)
from projclaim.domain.reconciliation.state import ObjectState

if TYPE_CHECKING:
    from collections.abc import Callable
    from logging import Logger

    from projclaim.domain.model import NamespacedName, ProjectClaim, ProjectClaimCondition
    from projclaim.domain.ports import ResourceStore

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def _as_condition_status(value: ConditionStatus | bool) -> ConditionStatus:  # noqa: FBT001
    if isinstance(value, bool):
        return ConditionStatus.TRUE if value else ConditionStatus.FALSE
    return ConditionStatus(value)


class ProjectClaimAdapter:
    """Idempotent state transitions for one reconciliation invocation.

    The adapter holds the caller's claim snapshot and mutates it in place
    before asking the store to persist. Every ``ensure_*`` operation first
    checks whether its intent already holds and reports ``ObjectState`` so the
    caller can decide whether to re-fetch and re-queue. Store failures are
    raised unchanged; nothing here retries.
    """

    def __init__(
        self,
        claim: ProjectClaim,
        store: ResourceStore,
        *,
        logger: Logger | None = None,
        reference_namespace: str = DEFAULT_REFERENCE_NAMESPACE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.claim = claim
        self.store = store
        self.log = logger or log
        self.clock = clock or _utcnow
        self.reference = expected_reference(claim, reference_namespace)
        self._observed_reference: ProjectReference | None = None

    @property
    def reference_key(self) -> NamespacedName:
        return self.reference.key

    # Existence ---------------------------------------------------------------

    def reference_exists(self) -> bool:
        try:
            found = self.store.get(ProjectReference, self.reference_key)
        except NotFoundError:
            self._observed_reference = None
            return False
        self._observed_reference = found
        return True

    def is_claim_deletion_requested(self) -> bool:
        return self.claim.is_deletion_requested

    def is_reference_deletion_requested(self) -> bool:
        if self._observed_reference is not None:
            return self._observed_reference.is_deletion_requested
        return self.reference.is_deletion_requested

    # Claim spec and metadata -------------------------------------------------

    def ensure_conditions_initialized(self) -> ObjectState:
        if self.claim.status.conditions is not None:
            return ObjectState.UNCHANGED
        self.claim.status.conditions = []
        self.update_status()
        return ObjectState.MODIFIED

    def ensure_reference_link(self) -> ObjectState:
        expected_link = self.reference_key
        if self.claim.spec.project_reference_link == expected_link:
            return ObjectState.UNCHANGED
        self.log.info(
            "Linking ProjectClaim %s to ProjectReference %s", self.claim.key, expected_link
        )
        self.claim.spec.project_reference_link = expected_link
        self.update_claim()
        return ObjectState.MODIFIED

    def ensure_finalizer_present(self) -> ObjectState:
        if not finalizer.add_finalizer(self.claim):
            return ObjectState.UNCHANGED
        self.log.info("Adding finalizer to ProjectClaim %s", self.claim.key)
        try:
            self.update_claim()
        except Exception:
            self.log.exception("Failed to update ProjectClaim %s with finalizer", self.claim.key)
            raise
        return ObjectState.MODIFIED

    def ensure_finalizer_removed(self) -> ObjectState:
        if not finalizer.remove_finalizer(self.claim):
            return ObjectState.UNCHANGED
        self.log.info("Removing finalizer from ProjectClaim %s", self.claim.key)
        self.update_claim()
        return ObjectState.MODIFIED

    # Reference lifecycle -----------------------------------------------------

    def ensure_reference_exists(self) -> ObjectState:
        if self.reference_exists():
            return ObjectState.UNCHANGED
        self.log.info("Creating ProjectReference %s", self.reference_key)
        self.store.create(self.reference)
        return ObjectState.MODIFIED

    def delete_reference(self) -> None:
        target = self._observed_reference or self.reference
        self.log.info("Deleting ProjectReference %s", target.key)
        try:
            self.store.delete(target)
        except NotFoundError:
            self.log.debug("ProjectReference %s already gone", target.key)

    def finalize_claim(self) -> ObjectState:
        return finalize_claim(self)

    # Status ------------------------------------------------------------------

    def ensure_phase(self, target: ClaimPhase) -> ObjectState:
        target = ClaimPhase(target)
        current = self.claim.status.state
        if not phase.may_enter(current, target):
            return ObjectState.UNCHANGED
        self.log.info(
            "Moving ProjectClaim %s from phase %s to %s",
            self.claim.key,
            current or "(none)",
            target,
        )
        self.claim.status.state = target
        self.update_status()
        return ObjectState.MODIFIED

    def set_condition(
        self,
        status: ConditionStatus | bool,  # noqa: FBT001
        reason: str,
        message: str,
    ) -> ObjectState:
        """Record or clear the error condition on the claim's status.

        A non-true status for a condition that was never recorded is dropped
        without touching the store.
        """

        resolved = _as_condition_status(status)
        now = self.clock()
        if not conditions.apply_condition(self.claim, resolved, reason, message, now=now):
            return ObjectState.UNCHANGED
        self.update_status()
        return ObjectState.MODIFIED

    def find_condition(self) -> ProjectClaimCondition | None:
        return conditions.find_condition(self.claim)

    # Persistence -------------------------------------------------------------

    def update_claim(self) -> None:
        self.store.update(self.claim)

    def update_status(self) -> None:
        """Persist the claim's status sub-resource."""
        try:
            self.store.update_status(self.claim)
        except Exception:
            name = self.claim.metadata.name
            self.log.exception(f"Failed to update ProjectClaim state for {name}")
            raise
