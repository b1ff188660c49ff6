"""ProjectReference aggregate: provisioning state of the project behind a claim."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from projclaim.domain.model.base import Resource
from projclaim.domain.model.enums import ReferencePhase, ResourceKind
from projclaim.domain.model.primitives import LegalEntity, NamespacedName


@dataclass(kw_only=True)
class ProjectReferenceSpec:
    # filled in later by project provisioning
    gcp_project_id: str = ""
    project_claim_link: NamespacedName = field(default_factory=NamespacedName)
    # snapshot taken when the reference is created; not kept in sync with the claim
    legal_entity: LegalEntity


@dataclass(kw_only=True)
class ProjectReferenceStatus:
    state: ReferencePhase | None = None


@dataclass(kw_only=True)
class ProjectReference(Resource):
    KIND: ClassVar[ResourceKind] = ResourceKind.PROJECT_REFERENCE

    spec: ProjectReferenceSpec
    status: ProjectReferenceStatus = field(default_factory=ProjectReferenceStatus)
