"""Application configuration helpers."""

from __future__ import annotations

from .actor import ACTOR_ENV_VAR, ActorConfig, get_actor_config, parse_user_id
from .env import env_value, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging, get_log_level
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ACTOR_ENV_VAR",
    "ActorConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "env_value",
    "get_actor_config",
    "get_database_config",
    "get_log_level",
    "get_storage_config",
    "parse_user_id",
    "require_env_var",
    "require_env_vars",
]
