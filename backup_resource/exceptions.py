"""
Backup Resource Exceptions

Defines the exceptions raised by the resource verbs and the polling state
machine. Each carries the backup id and instance involved so failures can
be reported without extra bookkeeping at the CLI boundary.
"""

from typing import Any, Dict, Optional

from resource_exceptions import BackupResourceOpsError, OperationTimeoutError


class BackupResourceError(BackupResourceOpsError):
    """
    Base exception for resource verb failures.

    Attributes:
        message: Human-readable error message
        backup_id: Identifier of the backup run involved (if applicable)
        instance: Cloud SQL instance involved (if applicable)
        context: Additional context information as key-value pairs

    Example:
        ```python
        try:
            resource.in_(request, destination)
        except BackupResourceError as e:
            logger.error(f"Backup {e.backup_id} on {e.instance}: {e.message}")
        ```
    """

    def __init__(
        self,
        message: str,
        backup_id: Optional[str] = None,
        instance: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.backup_id = backup_id
        self.instance = instance
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.instance:
            parts.append(f"Instance: {self.instance}")
        if self.backup_id:
            parts.append(f"Backup ID: {self.backup_id}")
        if self.context:
            parts.append(f"Context: {self.context}")
        return " | ".join(parts)


class FatalBackupStatusError(BackupResourceError):
    """
    Backup run reached a status it will not recover from.

    Raised for any status outside the transient and successful vocabulary,
    including values the API may add in the future.

    Additional Attributes:
        status: The status string that was observed
    """

    def __init__(
        self,
        status: str,
        backup_id: Optional[str] = None,
        instance: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(f"Backup state: {status}", backup_id, instance, context)
        self.status = status


class PollTimeoutError(BackupResourceError, OperationTimeoutError):
    """
    Backup run was still in flight when the polling bound was reached.

    Additional Attributes:
        attempts: Number of polls performed
        elapsed: Seconds spent polling
        last_status: Status observed on the final poll
    """

    def __init__(
        self,
        message: str,
        backup_id: Optional[str] = None,
        instance: Optional[str] = None,
        attempts: int = 0,
        elapsed: float = 0.0,
        last_status: Optional[str] = None
    ):
        super().__init__(
            message,
            backup_id,
            instance,
            context={"attempts": attempts, "elapsed_seconds": round(elapsed, 1)}
        )
        self.attempts = attempts
        self.elapsed = elapsed
        self.last_status = last_status


class OutputWriteError(BackupResourceError):
    """
    Failed to persist the backup run record.

    Additional Attributes:
        path: Destination file path
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        backup_id: Optional[str] = None
    ):
        super().__init__(message, backup_id, context={"path": path} if path else None)
        self.path = path
