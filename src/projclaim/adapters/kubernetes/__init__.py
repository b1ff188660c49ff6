"""Kubernetes API adapter."""

from __future__ import annotations

from .client import PLURALS, KubernetesResourceStore, build_http_client, build_retry
from .unit_of_work import KubernetesUnitOfWork

__all__ = [
    "PLURALS",
    "KubernetesResourceStore",
    "KubernetesUnitOfWork",
    "build_http_client",
    "build_retry",
]
