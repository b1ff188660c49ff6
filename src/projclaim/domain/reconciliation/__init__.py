"""Reconciliation of a ProjectClaim with its paired ProjectReference."""

from __future__ import annotations

from .adapter import ProjectClaimAdapter
from .conditions import TRACKED_CONDITION, apply_condition, find_condition
from .deletion import finalize_claim
from .finalizer import PROJECT_CLAIM_FINALIZER, add_finalizer, has_finalizer, remove_finalizer
from .naming import (
    DEFAULT_REFERENCE_NAMESPACE,
    expected_reference,
    reference_key_for,
    reference_name_for,
)
from .phase import may_enter
from .reconcile import ReconcileResult, ReconcileStep, reconcile_claim
from .state import ObjectState

__all__ = [
    "DEFAULT_REFERENCE_NAMESPACE",
    "PROJECT_CLAIM_FINALIZER",
    "TRACKED_CONDITION",
    "ObjectState",
    "ProjectClaimAdapter",
    "ReconcileResult",
    "ReconcileStep",
    "add_finalizer",
    "apply_condition",
    "expected_reference",
    "finalize_claim",
    "find_condition",
    "has_finalizer",
    "may_enter",
    "reconcile_claim",
    "reference_key_for",
    "reference_name_for",
    "remove_finalizer",
]
