"""
Backup Resource Exceptions

This module defines the root exceptions for the Cloud SQL backup resource
so that every verb fails with a type the CLI boundary can recognise.
"""

class BackupResourceOpsError(Exception):
    """Base exception for all backup resource errors"""
    pass


class ConfigurationError(BackupResourceOpsError):
    """Raised when configuration is invalid or missing"""
    pass


class CredentialError(BackupResourceOpsError):
    """Raised when a bearer token cannot be obtained from the private key"""
    pass


class BackupServiceError(BackupResourceOpsError):
    """Base exception for failures reported by the backup service API"""
    pass


class InvalidRequestError(BackupResourceOpsError):
    """Raised when the verb payload read from stdin is malformed"""
    pass


class OperationTimeoutError(BackupResourceOpsError):
    """Raised when an operation exceeds its deadline"""
    pass
