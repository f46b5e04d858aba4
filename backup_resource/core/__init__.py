"""
Backup Resource Core

Version ordering, the backup run polling state machine and the
check/in/out verbs built on top of them.
"""

from .ordering import (
    recency_key,
    sort_by_recency,
    select_by_id,
    versions_since,
    to_version_refs
)
from .poller import (
    BackupRunPoller,
    StatusClass,
    classify_status,
    TRANSIENT_STATUSES,
    SUCCESS_STATUSES
)
from .verbs import BackupResource

__all__ = [
    'recency_key',
    'sort_by_recency',
    'select_by_id',
    'versions_since',
    'to_version_refs',
    'BackupRunPoller',
    'StatusClass',
    'classify_status',
    'TRANSIENT_STATUSES',
    'SUCCESS_STATUSES',
    'BackupResource'
]
