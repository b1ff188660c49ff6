"""Cascading delete: the reference goes first, the claim's finalizer last."""

from __future__ import annotations

from typing import TYPE_CHECKING

from projclaim.domain.reconciliation.state import ObjectState

if TYPE_CHECKING:
    from projclaim.domain.reconciliation.adapter import ProjectClaimAdapter


def finalize_claim(adapter: ProjectClaimAdapter) -> ObjectState:
    """Advance deletion of a claim by one step without waiting on the store.

    While the reference exists its deletion is requested (once) and the
    finalizer stays on the claim, so the store cannot drop the claim before a
    later pass observes the reference gone. Only then is the finalizer removed.
    """

    reference_exists = adapter.reference_exists()

    if reference_exists and not adapter.is_reference_deletion_requested():
        adapter.delete_reference()

    if not reference_exists:
        return adapter.ensure_finalizer_removed()

    return ObjectState.UNCHANGED
