"""Monotonic gate on claim phase transitions."""

from __future__ import annotations

from projclaim.domain.model import ClaimPhase


def may_enter(current: ClaimPhase | None, target: ClaimPhase) -> bool:
    """Return whether a claim in ``current`` may be moved to ``target``.

    ``Pending`` is only entered from an unset phase and ``PendingProject`` only
    from ``Pending``, so a stale or replayed call cannot move a claim backwards.
    Later phases are gated by their own writers and are always allowed here.
    """

    if current == target:
        return False
    if target == ClaimPhase.PENDING:
        return current is None
    if target == ClaimPhase.PENDING_PROJECT:
        return current == ClaimPhase.PENDING
    return True
