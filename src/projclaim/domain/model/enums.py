"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    PROJECT_CLAIM = "ProjectClaim"
    PROJECT_REFERENCE = "ProjectReference"


class ClaimPhase(StrEnum):
    """Coarse lifecycle stage of a claim. An unset phase is ``None``."""

    PENDING = "Pending"
    PENDING_PROJECT = "PendingProject"
    READY = "Ready"
    ERROR = "Error"


class ReferencePhase(StrEnum):
    CREATING = "Creating"
    READY = "Ready"
    ERROR = "Error"


class ConditionStatus(StrEnum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class ClaimConditionType(StrEnum):
    ERROR = "Error"
