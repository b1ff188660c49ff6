from __future__ import annotations

from projclaim.domain.model import NamespacedName, ResourceKind
from tests.helpers.claims import FIXED_NOW, make_claim, make_reference


def test_namespaced_name_formats_as_path() -> None:
    key = NamespacedName(namespace="customer", name="my-claim")

    assert str(key) == "customer/my-claim"
    assert not key.is_empty
    assert NamespacedName().is_empty


def test_resources_expose_kind_and_key() -> None:
    claim = make_claim()
    reference = make_reference(claim)

    assert claim.kind is ResourceKind.PROJECT_CLAIM
    assert reference.kind is ResourceKind.PROJECT_REFERENCE
    assert claim.key == NamespacedName(namespace="customer", name="my-claim")
    assert reference.key == NamespacedName(
        namespace="gcp-project-operator", name="customer-my-claim"
    )


def test_deletion_requested_follows_timestamp() -> None:
    claim = make_claim()
    assert not claim.is_deletion_requested

    claim.metadata.deletion_timestamp = FIXED_NOW

    assert claim.is_deletion_requested


def test_fresh_claim_has_uninitialised_conditions() -> None:
    claim = make_claim()

    assert claim.status.state is None
    assert claim.status.conditions is None
    assert claim.spec.project_reference_link.is_empty
