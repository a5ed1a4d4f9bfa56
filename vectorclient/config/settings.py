"""
Configuration management for vectorclient.

Provides dataclasses for configuration and utilities
for loading settings from YAML files.
"""

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Optional
import yaml

from ..core.exceptions import ValidationError
from ..query.compiler import EmptySelection
from ..retry.executor import RetryConfig


CONFIG_ENV_VAR = "VECTORCLIENT_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ConnectionConfig:
    """Connection settings."""
    url: str = "http://localhost:8080"
    api_key: Optional[str] = None
    timeout: float = 30.0
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.url:
            raise ValidationError("Connection url cannot be empty")
        if self.timeout <= 0:
            raise ValidationError(f"Timeout must be positive, got {self.timeout}")


@dataclass
class QueryConfig:
    """Query defaults."""
    empty_selection: EmptySelection = EmptySelection.ID_ONLY

    def __post_init__(self):
        try:
            self.empty_selection = EmptySelection(self.empty_selection)
        except ValueError as e:
            raise ValidationError(
                f"Invalid empty_selection: {self.empty_selection!r}"
            ) from e


@dataclass
class Settings:
    """
    Main settings container for vectorclient.

    Attributes:
        connection: Store URL, credentials and timeout
        retry: Backoff settings applied to every request
        query: Query compilation defaults
        log_level: Logging level
    """
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    log_level: str = "INFO"

    def __post_init__(self):
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValidationError(
                f"Invalid log_level: {self.log_level!r} (expected one of {', '.join(LOG_LEVELS)})"
            )
        self.log_level = self.log_level.upper()

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create Settings from dictionary."""
        data = dict(data)
        connection_data = data.pop("connection", None) or {}
        retry_data = data.pop("retry", None) or {}
        query_data = data.pop("query", None) or {}

        try:
            return cls(
                connection=ConnectionConfig(**connection_data),
                retry=RetryConfig(**retry_data),
                query=QueryConfig(**query_data),
                **data
            )
        except TypeError as e:
            raise ValidationError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> dict:
        """Convert Settings to dictionary."""
        result = asdict(self)
        result["query"]["empty_selection"] = self.query.empty_selection.value
        return result


def get_default_config_path() -> Path:
    """Get path to default configuration file."""
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return Path(env_config)

    return Path("./vectorclient.yaml")


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses
            $VECTORCLIENT_CONFIG or ./vectorclient.yaml.

    Returns:
        Settings object with loaded configuration

    Example:
        >>> settings = load_config()
        >>> settings = load_config("./my_config.yaml")
    """
    if config_path is None:
        path = get_default_config_path()
    else:
        path = Path(config_path)

    if not path.exists():
        # Return default settings if no config file
        return Settings()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ValidationError(f"Configuration in {path} must be a mapping")

    return Settings.from_dict(data)
