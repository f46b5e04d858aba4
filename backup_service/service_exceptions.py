"""
Backup Service Exceptions

This module defines the exceptions raised at the Cloud SQL Admin API
boundary. Each RPC either returns a decoded record or raises one of these,
which lets the verbs treat transport, decode and lookup failures separately
while still failing the step with the same fatal outcome.
"""

from typing import Optional

from resource_exceptions import BackupServiceError, CredentialError


class TransportError(BackupServiceError):
    """
    Raised when a request cannot be completed or the service answers with
    a non-success HTTP status.

    Attributes:
        url: Request URL
        status_code: HTTP status code, or None when no response was received
        body: Leading part of the response body for diagnostics
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class DecodeError(BackupServiceError):
    """
    Raised when a response body is not the JSON object the API promises.

    The decoder's message is kept verbatim so it can be surfaced as is.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class BackupRunNotFoundError(BackupServiceError):
    """Raised when a backup run id does not exist for the instance."""

    def __init__(self, message: str, backup_id: Optional[str] = None):
        self.backup_id = backup_id
        super().__init__(message)


class AuthenticationError(CredentialError):
    """
    Raised when the token exchange with Google fails.

    Distinct from a malformed private key, which is a plain CredentialError.
    """
    pass
