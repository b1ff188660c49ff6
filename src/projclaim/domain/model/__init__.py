"""Public domain model surface."""

from __future__ import annotations

from projclaim.domain.model import finalizers
from projclaim.domain.model.base import ObjectMeta, Resource
from projclaim.domain.model.claim import (
    ProjectClaim,
    ProjectClaimCondition,
    ProjectClaimSpec,
    ProjectClaimStatus,
)
from projclaim.domain.model.enums import (
    ClaimConditionType,
    ClaimPhase,
    ConditionStatus,
    ReferencePhase,
    ResourceKind,
)
from projclaim.domain.model.primitives import LegalEntity, NamespacedName
from projclaim.domain.model.reference import (
    ProjectReference,
    ProjectReferenceSpec,
    ProjectReferenceStatus,
)

__all__ = [  # noqa: RUF022
    # base
    "ObjectMeta",
    "Resource",
    "NamespacedName",
    "LegalEntity",
    "finalizers",
    # enums
    "ResourceKind",
    "ClaimPhase",
    "ReferencePhase",
    "ConditionStatus",
    "ClaimConditionType",
    # claim
    "ProjectClaim",
    "ProjectClaimSpec",
    "ProjectClaimStatus",
    "ProjectClaimCondition",
    # reference
    "ProjectReference",
    "ProjectReferenceSpec",
    "ProjectReferenceStatus",
]
