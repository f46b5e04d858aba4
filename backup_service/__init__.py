"""
Backup Service Module

Boundary to the Cloud SQL Admin API backupRuns collection:
- Authenticators turning a service account key into bearer tokens
- A synchronous client for listing, fetching and creating backup runs
- Exceptions separating transport, decode and lookup failures
"""

from .auth import (
    BaseAuthenticator,
    ServiceAccountAuthenticator,
    DefaultCredentialsAuthenticator,
    parse_private_key,
    DEFAULT_SCOPES
)
from .client import BackupServiceClient, DEFAULT_BASE_URL
from .service_exceptions import (
    TransportError,
    DecodeError,
    BackupRunNotFoundError,
    AuthenticationError
)

__all__ = [
    'BaseAuthenticator',
    'ServiceAccountAuthenticator',
    'DefaultCredentialsAuthenticator',
    'parse_private_key',
    'DEFAULT_SCOPES',
    'BackupServiceClient',
    'DEFAULT_BASE_URL',
    'TransportError',
    'DecodeError',
    'BackupRunNotFoundError',
    'AuthenticationError',
]
