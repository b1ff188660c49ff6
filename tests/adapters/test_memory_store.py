from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from projclaim.domain.errors import AlreadyExistsError, ConflictError, NotFoundError
from projclaim.domain.model import ClaimPhase, ProjectClaim, ProjectReference, ResourceKind
from tests.helpers.claims import FIXED_NOW, make_claim, seed_claim

if TYPE_CHECKING:
    from projclaim.adapters.memory import InMemoryResourceStore


def test_create_assigns_version_to_caller(store: InMemoryResourceStore) -> None:
    claim = make_claim()

    store.create(claim)

    assert claim.metadata.resource_version is not None
    assert store.get(ProjectClaim, claim.key).metadata.resource_version == (
        claim.metadata.resource_version
    )


def test_create_rejects_duplicates(store: InMemoryResourceStore) -> None:
    store.create(make_claim())

    with pytest.raises(AlreadyExistsError) as exc:
        store.create(make_claim())

    assert exc.value.kind is ResourceKind.PROJECT_CLAIM


def test_get_missing_raises_not_found(store: InMemoryResourceStore) -> None:
    claim = make_claim()

    with pytest.raises(NotFoundError):
        store.get(ProjectClaim, claim.key)
    with pytest.raises(NotFoundError):
        store.get(ProjectReference, claim.key)


def test_reads_are_isolated_copies(store: InMemoryResourceStore) -> None:
    claim = seed_claim(store, make_claim())

    claim.spec.region = "mutated"

    assert store.get(ProjectClaim, claim.key).spec.region == "us-east1"


def test_update_ignores_status_and_update_status_ignores_spec(
    store: InMemoryResourceStore,
) -> None:
    claim = seed_claim(store, make_claim())

    claim.spec.region = "europe-west1"
    claim.status.state = ClaimPhase.PENDING
    store.update(claim)
    after_update = store.get(ProjectClaim, claim.key)

    after_update.spec.region = "ignored"
    after_update.status.state = ClaimPhase.PENDING
    store.update_status(after_update)
    after_status = store.get(ProjectClaim, claim.key)

    assert after_update.metadata.resource_version == after_status.metadata.resource_version
    assert after_status.spec.region == "europe-west1"
    assert after_status.status.state is ClaimPhase.PENDING


def test_stale_version_conflicts(store: InMemoryResourceStore) -> None:
    claim = seed_claim(store, make_claim())
    stale = store.get(ProjectClaim, claim.key)

    claim.spec.region = "europe-west1"
    store.update(claim)

    with pytest.raises(ConflictError):
        store.update(stale)
    with pytest.raises(ConflictError):
        store.update_status(stale)


def test_delete_without_finalizers_removes_record(store: InMemoryResourceStore) -> None:
    claim = seed_claim(store, make_claim())

    store.delete(claim)

    assert not store.contains(ProjectClaim, claim.key)


def test_delete_with_finalizers_marks_record(store: InMemoryResourceStore) -> None:
    claim = seed_claim(store, make_claim(finalizers=("guard",)))

    store.delete(claim)
    marked = store.get(ProjectClaim, claim.key)

    assert marked.metadata.deletion_timestamp == FIXED_NOW
    marked.metadata.finalizers = ()
    store.update(marked)
    assert not store.contains(ProjectClaim, claim.key)
    assert marked.metadata.resource_version is None


def test_repeated_delete_leaves_terminating_record_alone(store: InMemoryResourceStore) -> None:
    claim = seed_claim(store, make_claim(finalizers=("guard",)))
    store.delete(claim)
    marked = store.get(ProjectClaim, claim.key)

    store.delete(marked)
    again = store.get(ProjectClaim, claim.key)

    assert again.metadata.resource_version == marked.metadata.resource_version
    assert again.metadata.deletion_timestamp == FIXED_NOW



def test_update_cannot_clear_deletion_timestamp(store: InMemoryResourceStore) -> None:
    claim = seed_claim(store, make_claim(finalizers=("guard",)))
    store.delete(claim)
    marked = store.get(ProjectClaim, claim.key)

    marked.metadata.deletion_timestamp = None
    store.update(marked)

    assert store.get(ProjectClaim, claim.key).is_deletion_requested


def test_calls_are_journaled(store: InMemoryResourceStore) -> None:
    claim = seed_claim(store, make_claim())

    assert store.operations() == ["create", "get"]
    assert store.operations(ResourceKind.PROJECT_REFERENCE) == []
    assert store.calls[0].key == claim.key
