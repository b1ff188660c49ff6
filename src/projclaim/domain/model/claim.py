"""ProjectClaim aggregate: a request for a provisioned GCP project."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from projclaim.domain.model.base import Resource
from projclaim.domain.model.enums import (
    ClaimConditionType,
    ClaimPhase,
    ConditionStatus,
    ResourceKind,
)
from projclaim.domain.model.primitives import LegalEntity, NamespacedName

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class ProjectClaimCondition:
    """One status condition. Immutable: updates replace the entry in its list.

    Condition kinds written by other controllers are kept as plain strings.
    """

    type: ClaimConditionType | str
    status: ConditionStatus
    reason: str
    message: str
    last_transition_time: datetime
    last_probe_time: datetime


@dataclass(kw_only=True)
class ProjectClaimSpec:
    legal_entity: LegalEntity
    region: str = ""
    gcp_credential_secret: NamespacedName = field(default_factory=NamespacedName)
    gcp_project_id: str = ""
    project_reference_link: NamespacedName = field(default_factory=NamespacedName)


@dataclass(kw_only=True)
class ProjectClaimStatus:
    state: ClaimPhase | None = None
    # None means the store never initialised the list; [] is an initialised, empty list
    conditions: list[ProjectClaimCondition] | None = None


@dataclass(kw_only=True)
class ProjectClaim(Resource):
    KIND: ClassVar[ResourceKind] = ResourceKind.PROJECT_CLAIM

    spec: ProjectClaimSpec
    status: ProjectClaimStatus = field(default_factory=ProjectClaimStatus)
