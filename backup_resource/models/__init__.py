"""
Backup Resource Models

Data models for backup runs, backup operations, versions and verb payloads.
"""

from .entities import (
    BackupRunStatus,
    CheckMode,
    BackupRun,
    BackupContext,
    BackupOperation,
    VersionRef,
    MetadataEntry,
    VerbOutput
)
from .parameters import (
    SourceConfig,
    OutParams,
    CheckRequest,
    InRequest,
    OutRequest
)

__all__ = [
    'BackupRunStatus',
    'CheckMode',
    'BackupRun',
    'BackupContext',
    'BackupOperation',
    'VersionRef',
    'MetadataEntry',
    'VerbOutput',
    'SourceConfig',
    'OutParams',
    'CheckRequest',
    'InRequest',
    'OutRequest'
]
