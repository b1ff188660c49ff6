"""Kubernetes API configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError

KUBE_TIMEOUT_SECONDS = 10.0


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Transport-level retries for idempotent API calls.

    Conflicts (409) are never retried here; they surface to the reconcile loop.
    """

    total: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 10.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = field(
        default_factory=lambda: frozenset({"GET", "PUT", "DELETE"})
    )
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 502, 503, 504})
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class KubernetesConfig:
    api_url: str
    token: str
    ca_cert_path: str | None = None
    verify_tls: bool = True
    timeout_seconds: float = KUBE_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)


def get_kubernetes_config(*, retry: RetryPolicy | None = None) -> KubernetesConfig:
    values = require_env_vars(("KUBE_API_URL", "KUBE_TOKEN"))
    timeout_raw = optional_env_var("KUBE_TIMEOUT_SECONDS")
    try:
        timeout = float(timeout_raw) if timeout_raw is not None else KUBE_TIMEOUT_SECONDS
    except ValueError as exc:
        raise ConfigurationError(f"Invalid KUBE_TIMEOUT_SECONDS: {timeout_raw!r}") from exc
    return KubernetesConfig(
        api_url=values["KUBE_API_URL"].rstrip("/"),
        token=values["KUBE_TOKEN"],
        ca_cert_path=optional_env_var("KUBE_CA_CERT"),
        verify_tls=not env_flag("KUBE_INSECURE_SKIP_TLS_VERIFY"),
        timeout_seconds=timeout,
        retry=retry or RetryPolicy(),
    )
