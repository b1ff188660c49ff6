"""Deletion-blocking marker held on a claim while its reference may exist."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from projclaim.domain.model import finalizers

if TYPE_CHECKING:
    from projclaim.domain.model import ProjectClaim

PROJECT_CLAIM_FINALIZER: Final[str] = "finalizer.gcp.managed.openshift.io"


def has_finalizer(claim: ProjectClaim) -> bool:
    return finalizers.contains(claim.metadata.finalizers, PROJECT_CLAIM_FINALIZER)


def add_finalizer(claim: ProjectClaim) -> bool:
    """Append the marker, keeping other finalizers. Return whether anything changed."""

    if has_finalizer(claim):
        return False
    claim.metadata.finalizers = finalizers.with_finalizer(
        claim.metadata.finalizers, PROJECT_CLAIM_FINALIZER
    )
    return True


def remove_finalizer(claim: ProjectClaim) -> bool:
    """Drop only our marker. Return whether anything changed."""

    if not has_finalizer(claim):
        return False
    claim.metadata.finalizers = finalizers.without(
        claim.metadata.finalizers, PROJECT_CLAIM_FINALIZER
    )
    return True
