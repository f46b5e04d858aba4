"""
Cloud SQL Backup Resource

Exposes Cloud SQL backup runs as a versioned resource for pipeline tools
through the three resource protocol verbs:

- check: discover backup run versions, newest last
- in: wait for a backup run to succeed and persist its record
- out: trigger a new on-demand backup run

Typical usage:

    from backup_resource import BackupResource, BackupResourceConfig, InRequest
    from backup_service import BackupServiceClient, ServiceAccountAuthenticator

    request = InRequest.model_validate(payload)
    auth = ServiceAccountAuthenticator(request.source.private_key)
    with BackupServiceClient(auth) as client:
        resource = BackupResource(client, BackupResourceConfig())
        output = resource.in_(request, "/tmp/build/get")
"""

__version__ = "0.1.0"

# Models
from .models.entities import (
    BackupRunStatus,
    CheckMode,
    BackupRun,
    BackupOperation,
    VersionRef,
    MetadataEntry,
    VerbOutput
)
from .models.parameters import (
    SourceConfig,
    OutParams,
    CheckRequest,
    InRequest,
    OutRequest
)

# Exceptions
from .exceptions import (
    BackupResourceError,
    FatalBackupStatusError,
    PollTimeoutError,
    OutputWriteError
)

# Configuration
from .config import BackupResourceConfig

# Core
from .core import (
    BackupResource,
    BackupRunPoller,
    StatusClass,
    classify_status,
    sort_by_recency,
    select_by_id,
    versions_since
)

__all__ = [
    # Core
    'BackupResource',
    'BackupRunPoller',
    'StatusClass',
    'classify_status',
    'sort_by_recency',
    'select_by_id',
    'versions_since',

    # Configuration
    'BackupResourceConfig',

    # Enums
    'BackupRunStatus',
    'CheckMode',

    # Entities
    'BackupRun',
    'BackupOperation',
    'VersionRef',
    'MetadataEntry',
    'VerbOutput',

    # Parameters
    'SourceConfig',
    'OutParams',
    'CheckRequest',
    'InRequest',
    'OutRequest',

    # Exceptions
    'BackupResourceError',
    'FatalBackupStatusError',
    'PollTimeoutError',
    'OutputWriteError'
]
