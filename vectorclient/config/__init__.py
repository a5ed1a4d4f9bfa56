"""
Configuration for vectorclient.

This module provides configuration management including
loading settings from YAML files and environment variables.

Example:
    >>> from vectorclient.config import load_config
    >>>
    >>> settings = load_config()
    >>> print(settings.connection.url)
    >>> print(settings.retry.max_retries)
"""

from .settings import (
    Settings,
    ConnectionConfig,
    QueryConfig,
    RetryConfig,
    load_config,
    get_default_config_path,
    CONFIG_ENV_VAR,
)

__all__ = [
    "Settings",
    "ConnectionConfig",
    "QueryConfig",
    "RetryConfig",
    "load_config",
    "get_default_config_path",
    "CONFIG_ENV_VAR",
]
