"""Minimal Pydantic models for the gcp.managed.openshift.io custom resources."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field

API_GROUP: Final[str] = "gcp.managed.openshift.io"
API_VERSION: Final[str] = f"{API_GROUP}/v1alpha1"


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamespacedNameModel(ManifestBaseModel):
    name: str = ""
    namespace: str = ""


class LegalEntityModel(ManifestBaseModel):
    name: str = ""
    id: str = ""


class ObjectMetaModel(ManifestBaseModel):
    name: str
    namespace: str = ""
    finalizers: list[str] = Field(default_factory=list)
    deletion_timestamp: datetime | None = Field(default=None, alias="deletionTimestamp")
    resource_version: str | None = Field(default=None, alias="resourceVersion")


class ConditionModel(ManifestBaseModel):
    type: str
    status: str
    reason: str = ""
    message: str = ""
    last_transition_time: datetime | None = Field(default=None, alias="lastTransitionTime")
    last_probe_time: datetime | None = Field(default=None, alias="lastProbeTime")


class ProjectClaimSpecModel(ManifestBaseModel):
    legal_entity: LegalEntityModel = Field(alias="legalEntity")
    region: str = ""
    gcp_credential_secret: NamespacedNameModel = Field(
        default_factory=NamespacedNameModel, alias="gcpCredentialSecret"
    )
    gcp_project_id: str = Field(default="", alias="gcpProjectID")
    project_reference_link: NamespacedNameModel = Field(
        default_factory=NamespacedNameModel, alias="projectReferenceCRLink"
    )


class ProjectClaimStatusModel(ManifestBaseModel):
    state: str = ""
    conditions: list[ConditionModel] | None = None


class ProjectClaimManifest(ManifestBaseModel):
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: Literal["ProjectClaim"] = "ProjectClaim"
    metadata: ObjectMetaModel
    spec: ProjectClaimSpecModel
    status: ProjectClaimStatusModel = Field(default_factory=ProjectClaimStatusModel)


class ProjectReferenceSpecModel(ManifestBaseModel):
    gcp_project_id: str = Field(default="", alias="gcpProjectID")
    project_claim_link: NamespacedNameModel = Field(
        default_factory=NamespacedNameModel, alias="projectClaimCRLink"
    )
    legal_entity: LegalEntityModel = Field(alias="legalEntity")


class ProjectReferenceStatusModel(ManifestBaseModel):
    state: str = ""


class ProjectReferenceManifest(ManifestBaseModel):
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: Literal["ProjectReference"] = "ProjectReference"
    metadata: ObjectMetaModel
    spec: ProjectReferenceSpecModel
    status: ProjectReferenceStatusModel = Field(default_factory=ProjectReferenceStatusModel)
