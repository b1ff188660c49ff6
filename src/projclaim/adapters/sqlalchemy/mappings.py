"""SQLAlchemy table metadata for stored resources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Column, Integer, MetaData, String, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# One row per record; the manifest column holds the full custom-resource JSON.
resource_table = Table(
    "resource",
    metadata,
    Column("kind", String, primary_key=True),
    Column("namespace", String, primary_key=True),
    Column("name", String, primary_key=True),
    Column("resource_version", Integer, nullable=False),
    Column("manifest", JSON, nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the resource metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
