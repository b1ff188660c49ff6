"""Deterministic naming of the reference that pairs with a claim."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Final

from projclaim.domain.model import (
    NamespacedName,
    ObjectMeta,
    ProjectReference,
    ProjectReferenceSpec,
)

if TYPE_CHECKING:
    from projclaim.domain.model import ProjectClaim

DEFAULT_REFERENCE_NAMESPACE: Final[str] = "gcp-project-operator"


def reference_name_for(claim_key: NamespacedName) -> str:
    return f"{claim_key.namespace}-{claim_key.name}"


def reference_key_for(claim_key: NamespacedName, reference_namespace: str) -> NamespacedName:
    """Return the identity of the reference paired with ``claim_key``."""

    return NamespacedName(namespace=reference_namespace, name=reference_name_for(claim_key))


def expected_reference(claim: ProjectClaim, reference_namespace: str) -> ProjectReference:
    """Build the reference a claim should have; nothing is persisted here."""

    key = reference_key_for(claim.key, reference_namespace)
    return ProjectReference(
        metadata=ObjectMeta(name=key.name, namespace=key.namespace),
        spec=ProjectReferenceSpec(
            gcp_project_id="",
            project_claim_link=claim.key,
            legal_entity=replace(claim.spec.legal_entity),
        ),
    )
