"""SQLAlchemy adapter package."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, resource_table
from .store import SqlAlchemyResourceStore, insert_statement
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyResourceStore",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "insert_statement",
    "is_started",
    "metadata",
    "resource_table",
    "shutdown",
    "startup",
]
