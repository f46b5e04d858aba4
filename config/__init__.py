"""
Configuration Module

Centralized configuration management for the backup resource:
- Cloud SQL Admin API endpoint, scopes and timeouts
- Polling interval and optional bounds
- Reporting time zone and output file name
- Credential handling
- Logging

Settings load from YAML files and environment variables using Pydantic.
"""

from .settings import (
    ResourceSettings,
    ApiSettings,
    PollingSettings,
    ReportingSettings,
    CredentialSettings,
    LoggingSettings,
    load_settings,
    CONFIG_PATH_ENV
)

__all__ = [
    'ResourceSettings',
    'ApiSettings',
    'PollingSettings',
    'ReportingSettings',
    'CredentialSettings',
    'LoggingSettings',
    'load_settings',
    'CONFIG_PATH_ENV'
]
