"""Application configuration helpers."""

from __future__ import annotations

from .audit import AuditConfig, ExportConfig, get_audit_config, get_export_config
from .env import optional_env_var, optional_float_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .rpc import AAVEGOTCHI_DIAMOND, RpcConfig, get_rpc_config
from .storage import StorageConfig, get_storage_config
from .subgraph import SubgraphConfig, get_subgraph_config

__all__ = [
    "AAVEGOTCHI_DIAMOND",
    "AuditConfig",
    "ConfigurationError",
    "ExportConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "RpcConfig",
    "StorageConfig",
    "SubgraphConfig",
    "configure_logging",
    "get_audit_config",
    "get_export_config",
    "get_rpc_config",
    "get_storage_config",
    "get_subgraph_config",
    "optional_env_var",
    "optional_float_env_var",
    "require_env_var",
    "require_env_vars",
]
