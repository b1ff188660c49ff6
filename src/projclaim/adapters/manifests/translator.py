"""Translate between domain records and custom-resource manifests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from projclaim.domain.model import (
    ClaimConditionType,
    ClaimPhase,
    ConditionStatus,
    LegalEntity,
    NamespacedName,
    ObjectMeta,
    ProjectClaim,
    ProjectClaimCondition,
    ProjectClaimSpec,
    ProjectClaimStatus,
    ProjectReference,
    ProjectReferenceSpec,
    ProjectReferenceStatus,
    ReferencePhase,
)

from .schema import (
    ConditionModel,
    LegalEntityModel,
    NamespacedNameModel,
    ObjectMetaModel,
    ProjectClaimManifest,
    ProjectClaimSpecModel,
    ProjectClaimStatusModel,
    ProjectReferenceManifest,
    ProjectReferenceSpecModel,
    ProjectReferenceStatusModel,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from projclaim.domain.model import Resource

type Manifest = dict[str, Any]

_EPOCH = datetime.fromtimestamp(0, tz=UTC)


class ManifestError(ValueError):
    """Raised when a payload cannot be translated into a domain record."""


# Domain -> manifest ------------------------------------------------------------


def to_manifest(record: Resource) -> Manifest:
    """Return the JSON-ready manifest for a claim or reference."""

    if isinstance(record, ProjectClaim):
        model: ProjectClaimManifest | ProjectReferenceManifest = _claim_manifest(record)
    elif isinstance(record, ProjectReference):
        model = _reference_manifest(record)
    else:
        raise ManifestError(f"Unsupported record type: {type(record).__name__}")
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _meta_model(meta: ObjectMeta) -> ObjectMetaModel:
    return ObjectMetaModel(
        name=meta.name,
        namespace=meta.namespace,
        finalizers=list(meta.finalizers),
        deletion_timestamp=meta.deletion_timestamp,
        resource_version=meta.resource_version,
    )


def _link_model(link: NamespacedName) -> NamespacedNameModel:
    return NamespacedNameModel(name=link.name, namespace=link.namespace)


def _legal_entity_model(entity: LegalEntity) -> LegalEntityModel:
    return LegalEntityModel(name=entity.name, id=entity.id)


def _claim_manifest(claim: ProjectClaim) -> ProjectClaimManifest:
    conditions = claim.status.conditions
    return ProjectClaimManifest(
        metadata=_meta_model(claim.metadata),
        spec=ProjectClaimSpecModel(
            legal_entity=_legal_entity_model(claim.spec.legal_entity),
            region=claim.spec.region,
            gcp_credential_secret=_link_model(claim.spec.gcp_credential_secret),
            gcp_project_id=claim.spec.gcp_project_id,
            project_reference_link=_link_model(claim.spec.project_reference_link),
        ),
        status=ProjectClaimStatusModel(
            state=claim.status.state.value if claim.status.state else "",
            conditions=(
                None
                if conditions is None
                else [
                    ConditionModel(
                        type=str(condition.type),
                        status=condition.status.value,
                        reason=condition.reason,
                        message=condition.message,
                        last_transition_time=condition.last_transition_time,
                        last_probe_time=condition.last_probe_time,
                    )
                    for condition in conditions
                ]
            ),
        ),
    )


def _reference_manifest(reference: ProjectReference) -> ProjectReferenceManifest:
    return ProjectReferenceManifest(
        metadata=_meta_model(reference.metadata),
        spec=ProjectReferenceSpecModel(
            gcp_project_id=reference.spec.gcp_project_id,
            project_claim_link=_link_model(reference.spec.project_claim_link),
            legal_entity=_legal_entity_model(reference.spec.legal_entity),
        ),
        status=ProjectReferenceStatusModel(
            state=reference.status.state.value if reference.status.state else "",
        ),
    )


def merge_manifest(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Manifest:
    """Lay ``overlay`` over ``base``, keeping fields the domain model does not know.

    Nested mappings merge key by key; any other value in ``overlay`` replaces
    the one in ``base``.
    """

    merged: Manifest = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = merge_manifest(
                cast("Mapping[str, Any]", current), cast("Mapping[str, Any]", value)
            )
        else:
            merged[key] = value
    return merged


# Manifest -> domain ------------------------------------------------------------


def from_manifest[TResource: Resource](
    kind: type[TResource], payload: Mapping[str, object]
) -> TResource:
    """Parse ``payload`` into a record of ``kind``."""

    if kind is ProjectClaim:
        record: Resource = parse_claim(payload)
    elif kind is ProjectReference:
        record = parse_reference(payload)
    else:
        raise ManifestError(f"Unsupported record type: {kind.__name__}")
    return cast("TResource", record)


def parse_claim(payload: Mapping[str, object]) -> ProjectClaim:
    model = ProjectClaimManifest.model_validate(payload)
    conditions = model.status.conditions
    return ProjectClaim(
        metadata=_meta(model.metadata),
        spec=ProjectClaimSpec(
            legal_entity=_legal_entity(model.spec.legal_entity),
            region=model.spec.region,
            gcp_credential_secret=_link(model.spec.gcp_credential_secret),
            gcp_project_id=model.spec.gcp_project_id,
            project_reference_link=_link(model.spec.project_reference_link),
        ),
        status=ProjectClaimStatus(
            state=_phase(model.status.state),
            conditions=None if conditions is None else [_condition(item) for item in conditions],
        ),
    )


def parse_reference(payload: Mapping[str, object]) -> ProjectReference:
    model = ProjectReferenceManifest.model_validate(payload)
    state = model.status.state
    try:
        reference_state = ReferencePhase(state) if state else None
    except ValueError as exc:
        raise ManifestError(f"Unknown ProjectReference state: {state!r}") from exc
    return ProjectReference(
        metadata=_meta(model.metadata),
        spec=ProjectReferenceSpec(
            gcp_project_id=model.spec.gcp_project_id,
            project_claim_link=_link(model.spec.project_claim_link),
            legal_entity=_legal_entity(model.spec.legal_entity),
        ),
        status=ProjectReferenceStatus(state=reference_state),
    )


def _meta(model: ObjectMetaModel) -> ObjectMeta:
    return ObjectMeta(
        name=model.name,
        namespace=model.namespace,
        finalizers=tuple(model.finalizers),
        deletion_timestamp=model.deletion_timestamp,
        resource_version=model.resource_version,
    )


def _link(model: NamespacedNameModel) -> NamespacedName:
    return NamespacedName(namespace=model.namespace, name=model.name)


def _legal_entity(model: LegalEntityModel) -> LegalEntity:
    return LegalEntity(name=model.name, id=model.id)


def _phase(value: str) -> ClaimPhase | None:
    if not value:
        return None
    try:
        return ClaimPhase(value)
    except ValueError as exc:
        raise ManifestError(f"Unknown ProjectClaim state: {value!r}") from exc


def _condition(model: ConditionModel) -> ProjectClaimCondition:
    try:
        status = ConditionStatus(model.status)
    except ValueError as exc:
        raise ManifestError(f"Unknown condition {model.type}={model.status}") from exc
    condition_type: ClaimConditionType | str = model.type
    if model.type in ClaimConditionType:
        condition_type = ClaimConditionType(model.type)
    return ProjectClaimCondition(
        type=condition_type,
        status=status,
        reason=model.reason,
        message=model.message,
        last_transition_time=model.last_transition_time or _EPOCH,
        last_probe_time=model.last_probe_time or _EPOCH,
    )
