from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import sessionmaker

from projclaim.adapters.sqlalchemy import (
    SqlAlchemyResourceStore,
    insert_statement,
    resource_table,
)
from projclaim.domain.errors import AlreadyExistsError, ConflictError, NotFoundError
from projclaim.domain.model import ClaimPhase, ProjectClaim, ProjectReference
from tests.helpers.claims import FIXED_NOW, FakeClock, make_claim, make_reference

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


def _store(session: Session) -> SqlAlchemyResourceStore:
    return SqlAlchemyResourceStore(session, clock=FakeClock())


def test_create_and_get_round_trip(sqlite_session: Session) -> None:
    store = _store(sqlite_session)
    claim = make_claim(phase=ClaimPhase.PENDING, conditions=[])

    store.create(claim)
    loaded = store.get(ProjectClaim, claim.key)

    assert claim.metadata.resource_version == "1"
    assert loaded == claim


def test_rows_hold_manifest_json(sqlite_session: Session) -> None:
    store = _store(sqlite_session)
    claim = make_claim()
    store.create(claim)
    store.create(make_reference(claim))

    rows = sqlite_session.execute(
        select(resource_table.c.kind, resource_table.c.manifest).order_by(resource_table.c.kind)
    ).all()

    assert [row.kind for row in rows] == ["ProjectClaim", "ProjectReference"]
    assert rows[0].manifest["spec"]["legalEntity"]["id"] == "entity-1"


def test_create_duplicate_raises(sqlite_session: Session) -> None:
    store = _store(sqlite_session)
    store.create(make_claim())

    with pytest.raises(AlreadyExistsError):
        store.create(make_claim())


def test_get_missing_raises(sqlite_session: Session) -> None:
    claim = make_claim()

    with pytest.raises(NotFoundError):
        _store(sqlite_session).get(ProjectReference, claim.key)


def test_update_bumps_version_and_keeps_status(sqlite_session: Session) -> None:
    store = _store(sqlite_session)
    claim = make_claim(phase=ClaimPhase.PENDING)
    store.create(claim)

    claim.spec.region = "europe-west1"
    claim.status.state = ClaimPhase.READY
    store.update(claim)
    loaded = store.get(ProjectClaim, claim.key)

    assert claim.metadata.resource_version == "2"
    assert loaded.spec.region == "europe-west1"
    assert loaded.status.state is ClaimPhase.PENDING


def test_update_status_keeps_spec(sqlite_session: Session) -> None:
    store = _store(sqlite_session)
    claim = make_claim()
    store.create(claim)

    claim.spec.region = "ignored"
    claim.status.conditions = []
    store.update_status(claim)
    loaded = store.get(ProjectClaim, claim.key)

    assert loaded.spec.region == "us-east1"
    assert loaded.status.conditions == []
    assert loaded.metadata.resource_version == "2"


def test_stale_write_conflicts(sqlite_session: Session) -> None:
    store = _store(sqlite_session)
    claim = make_claim()
    store.create(claim)
    stale = store.get(ProjectClaim, claim.key)
    store.update_status(claim)

    with pytest.raises(ConflictError):
        store.update(stale)


def test_delete_honours_finalizers(sqlite_session: Session) -> None:
    store = _store(sqlite_session)
    guarded = make_claim(finalizers=("guard",))
    plain = make_claim(name="plain")
    store.create(guarded)
    store.create(plain)

    store.delete(guarded)
    store.delete(plain)
    marked = store.get(ProjectClaim, guarded.key)

    assert marked.metadata.deletion_timestamp == FIXED_NOW
    with pytest.raises(NotFoundError):
        store.get(ProjectClaim, plain.key)

    marked.metadata.finalizers = ()
    store.update(marked)
    with pytest.raises(NotFoundError):
        store.get(ProjectClaim, guarded.key)


def test_repeated_delete_keeps_resource_version(sqlite_session: Session) -> None:
    store = _store(sqlite_session)
    guarded = make_claim(finalizers=("guard",))
    store.create(guarded)
    store.delete(guarded)
    marked = store.get(ProjectClaim, guarded.key)

    store.delete(marked)

    assert store.get(ProjectClaim, guarded.key).metadata.resource_version == (
        marked.metadata.resource_version
    )



def test_committed_write_invalidates_older_snapshot(sqlite_engine: Engine) -> None:
    factory = sessionmaker(bind=sqlite_engine)
    with factory() as seed:
        _store(seed).create(make_claim())
        seed.commit()

    with factory() as session:
        store = _store(session)
        claim = store.get(ProjectClaim, make_claim().key)
        stale = store.get(ProjectClaim, claim.key)
        claim.status.state = ClaimPhase.PENDING
        store.update_status(claim)
        session.commit()

        stale.status.state = ClaimPhase.READY
        with pytest.raises(ConflictError):
            store.update_status(stale)
        assert store.get(ProjectClaim, claim.key).status.state is ClaimPhase.PENDING


def test_insert_ignores_duplicates_only_on_sqlite() -> None:
    statement = insert_statement(make_claim(), version=1)

    sqlite_sql = str(statement.compile(dialect=sqlite.dialect()))
    postgres_sql = str(statement.compile(dialect=postgresql.dialect()))

    assert "OR IGNORE" in sqlite_sql
    assert "OR IGNORE" not in postgres_sql
    assert postgres_sql.startswith("INSERT INTO resource")
