"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .kubernetes import KubernetesConfig, RetryPolicy, get_kubernetes_config
from .logging import configure_logging
from .operator import (
    DEFAULT_REFERENCE_NAMESPACE,
    Backend,
    OperatorConfig,
    get_operator_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_REFERENCE_NAMESPACE",
    "Backend",
    "ConfigurationError",
    "DatabaseConfig",
    "KubernetesConfig",
    "MissingConfigurationError",
    "OperatorConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_database_config",
    "get_kubernetes_config",
    "get_operator_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
