"""Operator-level settings shared by every backend."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from projclaim.domain.reconciliation.naming import DEFAULT_REFERENCE_NAMESPACE

from .env import optional_env_var
from .errors import ConfigurationError


class Backend(StrEnum):
    SQLITE = "sqlite"
    KUBERNETES = "kubernetes"


@dataclass(frozen=True, slots=True)
class OperatorConfig:
    reference_namespace: str = DEFAULT_REFERENCE_NAMESPACE
    backend: Backend = Backend.SQLITE


def get_operator_config(*, backend: str | None = None) -> OperatorConfig:
    raw_backend = backend or optional_env_var("PROJCLAIM_BACKEND", Backend.SQLITE.value)
    try:
        resolved = Backend(raw_backend)
    except ValueError as exc:
        choices = ", ".join(member.value for member in Backend)
        raise ConfigurationError(
            f"Unsupported backend {raw_backend!r} (expected one of: {choices})"
        ) from exc
    namespace = optional_env_var("PROJECT_REFERENCE_NAMESPACE", DEFAULT_REFERENCE_NAMESPACE)
    return OperatorConfig(
        reference_namespace=namespace or DEFAULT_REFERENCE_NAMESPACE,
        backend=resolved,
    )
