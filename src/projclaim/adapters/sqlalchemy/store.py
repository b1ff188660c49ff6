"""Resource store backed by a SQLAlchemy session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from projclaim.adapters.lifecycle import (
    check_version,
    is_collectable,
    is_terminating,
    merge_status_update,
    merge_update,
    prepare_create,
    request_deletion,
    utcnow,
)
from projclaim.adapters.manifests import from_manifest, to_manifest
from projclaim.adapters.sqlalchemy.mappings import resource_table
from projclaim.domain.errors import AlreadyExistsError, ConflictError, NotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from sqlalchemy.orm import Session
    from sqlalchemy.sql.dml import Insert
    from sqlalchemy.sql.elements import ColumnElement

    from projclaim.domain.model import NamespacedName, Resource, ResourceKind


def insert_statement(record: Resource, *, version: int) -> Insert:
    """Build the row insert for ``record``; SQLite ignores a duplicate key instead of failing."""

    return (
        insert(resource_table)
        .prefix_with("OR IGNORE", dialect="sqlite")
        .values(
            kind=record.kind.value,
            namespace=record.metadata.namespace,
            name=record.metadata.name,
            resource_version=version,
            manifest=to_manifest(record),
        )
    )


class SqlAlchemyResourceStore:
    """Store records as manifest JSON rows with an integer resource version.

    Writes are conditional on the version read, so a concurrent writer using
    another session surfaces as ``ConflictError`` rather than a lost update.
    Nothing is committed here; the unit of work owns the transaction.
    """

    def __init__(self, session: Session, *, clock: Callable[[], datetime] = utcnow) -> None:
        self.session = session
        self.clock = clock

    def get[TResource: Resource](self, kind: type[TResource], key: NamespacedName) -> TResource:
        row = self._fetch(kind.KIND, key)
        if row is None:
            raise NotFoundError(f"{kind.KIND} {key} not found", kind=kind.KIND, key=key)
        return self._load(kind, row)

    def create(self, record: Resource) -> None:
        prepared = prepare_create(record)
        prepared.metadata.resource_version = "1"
        if self._fetch(record.kind, record.key) is not None:
            raise self._exists(record)
        try:
            result = self.session.execute(insert_statement(prepared, version=1))
        except IntegrityError as exc:
            raise self._exists(record) from exc
        # on SQLite a concurrent insert of the same key is ignored and reports rowcount 0
        if result.rowcount != 1:
            raise self._exists(record)
        record.metadata.resource_version = "1"

    def update(self, record: Resource) -> None:
        stored, version = self._require(record)
        check_version(stored, record)
        merged = merge_update(stored, record)
        if is_collectable(merged):
            self._delete_row(record, version)
            record.metadata.resource_version = None
            return
        self._write(record, merged, version)

    def update_status(self, record: Resource) -> None:
        stored, version = self._require(record)
        check_version(stored, record)
        self._write(record, merge_status_update(stored, record), version)

    def delete(self, record: Resource) -> None:
        stored, version = self._require(record)
        if is_terminating(stored):
            return
        if request_deletion(stored, now=self.clock()):
            self._delete_row(record, version)
            return
        self._write(stored, stored, version)

    # Internals ----------------------------------------------------------------

    def _where(self, kind: ResourceKind, key: NamespacedName) -> tuple[ColumnElement[bool], ...]:
        return (
            resource_table.c.kind == kind.value,
            resource_table.c.namespace == key.namespace,
            resource_table.c.name == key.name,
        )

    def _fetch(self, kind: ResourceKind, key: NamespacedName) -> tuple[int, dict[str, Any]] | None:
        stmt = select(resource_table.c.resource_version, resource_table.c.manifest).where(
            *self._where(kind, key)
        )
        row = self.session.execute(stmt).one_or_none()
        if row is None:
            return None
        return int(row.resource_version), cast("dict[str, Any]", row.manifest)

    def _load[TResource: Resource](
        self, kind: type[TResource], row: tuple[int, dict[str, Any]]
    ) -> TResource:
        version, manifest = row
        record = from_manifest(kind, manifest)
        record.metadata.resource_version = str(version)
        return record

    def _require(self, record: Resource) -> tuple[Resource, int]:
        row = self._fetch(record.kind, record.key)
        if row is None:
            raise NotFoundError(
                f"{record.kind} {record.key} not found", kind=record.kind, key=record.key
            )
        return self._load(type(record), row), row[0]

    def _write(self, origin: Resource, record: Resource, version: int) -> None:
        next_version = version + 1
        record.metadata.resource_version = str(next_version)
        result = self.session.execute(
            update(resource_table)
            .where(*self._where(record.kind, record.key))
            .where(resource_table.c.resource_version == version)
            .values(resource_version=next_version, manifest=to_manifest(record))
        )
        if result.rowcount != 1:
            raise self._conflict(origin)
        origin.metadata.resource_version = str(next_version)

    def _delete_row(self, record: Resource, version: int) -> None:
        result = self.session.execute(
            delete(resource_table)
            .where(*self._where(record.kind, record.key))
            .where(resource_table.c.resource_version == version)
        )
        if result.rowcount != 1:
            raise self._conflict(record)

    @staticmethod
    def _exists(record: Resource) -> AlreadyExistsError:
        return AlreadyExistsError(
            f"{record.kind} {record.key} already exists", kind=record.kind, key=record.key
        )

    @staticmethod
    def _conflict(record: Resource) -> ConflictError:
        return ConflictError(
            f"{record.kind} {record.key} was modified concurrently",
            kind=record.kind,
            key=record.key,
        )
