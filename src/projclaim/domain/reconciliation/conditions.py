"""Single error-condition slot on a claim's status."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from projclaim.domain.model import (
    ClaimConditionType,
    ConditionStatus,
    ProjectClaimCondition,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from projclaim.domain.model import ProjectClaim

TRACKED_CONDITION: ClaimConditionType = ClaimConditionType.ERROR


def find_condition_index(
    conditions: Sequence[ProjectClaimCondition] | None,
    condition_type: ClaimConditionType = TRACKED_CONDITION,
) -> int | None:
    if not conditions:
        return None
    for index, condition in enumerate(conditions):
        if condition.type == condition_type:
            return index
    return None


def find_condition(claim: ProjectClaim) -> ProjectClaimCondition | None:
    conditions = claim.status.conditions
    index = find_condition_index(conditions)
    if conditions is None or index is None:
        return None
    return conditions[index]


def apply_condition(
    claim: ProjectClaim,
    status: ConditionStatus,
    reason: str,
    message: str,
    *,
    now: datetime,
) -> bool:
    """Write the tracked condition into ``claim.status`` in memory.

    Returns ``False`` only when nothing should be persisted: a non-true status
    for a condition that was never recorded. The transition time moves only
    when the stored status flips; the probe time moves on every call.
    """

    conditions = list(claim.status.conditions or ())
    index = find_condition_index(conditions)
    if index is None:
        if status != ConditionStatus.TRUE:
            return False
        conditions.append(
            ProjectClaimCondition(
                type=TRACKED_CONDITION,
                status=status,
                reason=reason,
                message=message,
                last_transition_time=now,
                last_probe_time=now,
            )
        )
    else:
        existing = conditions[index]
        transition_time = (
            now if existing.status != status else existing.last_transition_time
        )
        conditions[index] = replace(
            existing,
            status=status,
            reason=reason,
            message=message,
            last_transition_time=transition_time,
            last_probe_time=now,
        )
    claim.status.conditions = conditions
    return True
