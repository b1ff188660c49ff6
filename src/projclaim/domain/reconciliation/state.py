"""Outcome of an adapter operation."""

from __future__ import annotations

from enum import Enum


class ObjectState(Enum):
    """Whether an operation wrote to the store.

    The loop re-fetches and re-queues after ``MODIFIED`` so the next pass works
    on the record as persisted.
    """

    UNCHANGED = "unchanged"
    MODIFIED = "modified"

    @property
    def modified(self) -> bool:
        return self is ObjectState.MODIFIED
