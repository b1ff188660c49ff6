"""Set-semantics helpers for finalizer sequences.

Finalizers are stored as tuples: every helper returns a new tuple so that two
snapshots of the same record never share a mutable sequence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def contains(finalizers: Iterable[str], marker: str) -> bool:
    return marker in finalizers


def with_finalizer(finalizers: Iterable[str], marker: str) -> tuple[str, ...]:
    """Return ``finalizers`` with ``marker`` appended unless already present."""

    current = tuple(finalizers)
    if marker in current:
        return current
    return (*current, marker)


def without(finalizers: Iterable[str], marker: str) -> tuple[str, ...]:
    """Return ``finalizers`` minus every occurrence of ``marker``, order preserved."""

    return tuple(item for item in finalizers if item != marker)
