"""
Pydantic Settings for the Backup Resource

This module provides strongly-typed configuration settings using Pydantic,
with support for environment variables and YAML configuration files.

Every field can be overridden from the environment. Nested groups use the
``BACKUP_RESOURCE_`` prefix and ``__`` as the nesting delimiter, for example
``BACKUP_RESOURCE_POLLING__INTERVAL_SECONDS=10``.
"""

from typing import List, Optional, Union
from pathlib import Path
import os

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backup_resource.models.entities import CheckMode
from resource_exceptions import ConfigurationError

CONFIG_PATH_ENV = "BACKUP_RESOURCE_CONFIG"


class ApiSettings(BaseModel):
    """
    Settings for talking to the Cloud SQL Admin API.

    These settings control:
    - Where requests are sent
    - Which OAuth scopes tokens are requested for
    - How long a single request may take
    - Whether tokens are reused until they expire
    """
    base_url: str = Field("https://sqladmin.googleapis.com/v1",
                          description="Root URL of the Cloud SQL Admin API")
    scopes: List[str] = Field(default_factory=lambda: ["https://www.googleapis.com/auth/cloud-platform"],
                              description="OAuth scopes requested for each token")
    request_timeout: float = Field(60.0, gt=0,
                                   description="Timeout in seconds for a single API request")
    reuse_tokens: bool = Field(False,
                               description="Reuse a token until it expires instead of deriving one per request")


class PollingSettings(BaseModel):
    """
    Settings for the backup run polling loop used by ``in``.

    By default the loop has no bound and waits until the run succeeds or
    fails. A maximum attempt count and/or wait time turn a stuck run into a
    timeout error instead.
    """
    interval_seconds: float = Field(30.0, gt=0,
                                    description="Seconds to wait between polls of an in-flight backup run")
    max_attempts: Optional[int] = Field(None, gt=0,
                                        description="Maximum number of polls (unbounded when unset)")
    max_wait_seconds: Optional[float] = Field(None, gt=0,
                                              description="Maximum seconds to keep polling (unbounded when unset)")


class ReportingSettings(BaseModel):
    """Settings for the metadata and files produced by the verbs."""
    timezone: str = Field("Asia/Taipei",
                          description="Time zone used for end-time and insert-time metadata")
    output_filename: str = Field("output.json",
                                 description="File written by in inside the destination directory")
    check_mode: CheckMode = Field(CheckMode.ALL,
                                  description="Default version discovery mode for check")


class CredentialSettings(BaseModel):
    """
    Settings for passing the service account key to the API client.

    The key is used in memory unless ``write_credential_file`` is set, in
    which case it is written to ``credential_file_path`` and picked up
    through Application Default Credentials.
    """
    write_credential_file: bool = Field(False,
                                        description="Write the key to disk and use Application Default Credentials")
    credential_file_path: str = Field("/service-account.json",
                                      description="Where the key is written when write_credential_file is set")


class LoggingSettings(BaseModel):
    """Logging settings. Logs always go to stderr; stdout carries the verb payload."""
    log_level: str = Field("INFO",
                           description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    log_format: str = Field("%(asctime)s %(levelname)s %(name)s: %(message)s",
                            description="Format string for log records")


class ResourceSettings(BaseSettings):
    """
    Main settings class consolidating all configuration categories.

    Usage:
        # Load from environment variables and defaults
        settings = ResourceSettings()

        # Load from YAML file
        settings = ResourceSettings.from_yaml('config.yaml')

        # Access nested settings
        interval = settings.polling.interval_seconds
        zone = settings.reporting.timezone
    """
    api: ApiSettings = Field(default_factory=ApiSettings,
                             description="Cloud SQL Admin API settings")
    polling: PollingSettings = Field(default_factory=PollingSettings,
                                     description="Backup run polling settings")
    reporting: ReportingSettings = Field(default_factory=ReportingSettings,
                                         description="Metadata and output settings")
    credentials: CredentialSettings = Field(default_factory=CredentialSettings,
                                            description="Credential handling settings")
    logging: LoggingSettings = Field(default_factory=LoggingSettings,
                                     description="Logging settings")

    model_config = SettingsConfigDict(
        env_prefix="BACKUP_RESOURCE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, yaml_file: Union[str, Path]) -> "ResourceSettings":
        """Load settings from YAML file"""
        with open(yaml_file, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)


def load_settings(config_path: Optional[str] = None) -> ResourceSettings:
    """
    Load settings from file and/or environment variables.

    Args:
        config_path: Path to YAML configuration file. If None, the path in
                    ``BACKUP_RESOURCE_CONFIG`` is used when set. If no file
                    exists, falls back to environment variables and defaults.

    Returns:
        ResourceSettings object with loaded configuration

    Raises:
        ConfigurationError: If the file or an environment value is invalid

    Example:
        # Load from specific config file
        settings = load_settings("/etc/backup-resource.yaml")

        # Load from environment variables and defaults
        settings = load_settings()
    """
    config_path = config_path or os.environ.get(CONFIG_PATH_ENV)
    try:
        if config_path and os.path.exists(config_path):
            return ResourceSettings.from_yaml(config_path)
        return ResourceSettings()
    except (yaml.YAMLError, ValueError, TypeError, OSError) as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
