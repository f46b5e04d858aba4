"""
Backup Resource Entities

Defines the data models exchanged between the backup service boundary and
the resource verbs: backup runs, creation operations, versions and the
metadata emitted alongside each version.

Wire names follow the Cloud SQL Admin API (camelCase) through field aliases,
while Python code uses snake_case attribute names.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator


class BackupRunStatus(str, Enum):
    """
    Status values reported by the Cloud SQL Admin API for a backup run.

    ``PENDING`` is not part of the published vocabulary but is treated as a
    transient state when it does appear. Backup runs keep ``status`` as a
    plain string so unknown values survive decoding and are classified by
    the poller instead of failing validation.
    """
    UNSPECIFIED = "SQL_BACKUP_RUN_STATUS_UNSPECIFIED"
    ENQUEUED = "ENQUEUED"
    OVERDUE = "OVERDUE"
    RUNNING = "RUNNING"
    PENDING = "PENDING"
    FAILED = "FAILED"
    SUCCESSFUL = "SUCCESSFUL"
    SKIPPED = "SKIPPED"
    DELETION_PENDING = "DELETION_PENDING"
    DELETION_FAILED = "DELETION_FAILED"
    DELETED = "DELETED"


class CheckMode(str, Enum):
    """
    How ``check`` answers when it is given the last seen version.

    Modes:
        ALL: Return every known version, oldest first, whatever was given
        SINCE: Return the given version and every newer one
    """
    ALL = "all"
    SINCE = "since"


def _coerce_id(value: Any) -> Any:
    # Backup run ids are int64 values rendered as strings by the API.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _normalize_instant(value: Optional[datetime]) -> Optional[datetime]:
    """Treat the zero instant (year 1) as absent and make naive values UTC."""
    if value is None:
        return None
    if value.year <= 1:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BackupRun(BaseModel):
    """
    One backup execution as reported by the backup service.

    Attributes:
        id: Run identifier, unique within an instance
        status: Raw status string (see ``BackupRunStatus``)
        kind: Resource kind label, usually ``sql#backupRun``
        backup_kind: Backup category label such as ``SNAPSHOT``
        type: ``AUTOMATED`` or ``ON_DEMAND``
        instance: Instance name
        self_link: URI of this resource
        location: Backup location
        description: Free text description
        enqueued_time: When the run was enqueued
        start_time: When the run started
        end_time: When the run finished; absent while it is in flight
        window_start_time: Start of the backup window the run belongs to

    The JSON object the run was decoded from is retained and returned by
    ``to_record()`` so callers can persist the exact service response.

    Example:
        ```python
        run = BackupRun.from_api({"id": "1700000000000", "status": "RUNNING"})
        run.is_finished  # False
        ```
    """
    id: str = Field(..., description="Backup run identifier")
    status: str = Field(default="", description="Backup run status")
    kind: str = Field(default="", description="Resource kind")
    backup_kind: str = Field(default="", alias="backupKind", description="Backup category")
    type: str = Field(default="", description="Backup trigger type")
    instance: str = Field(default="", description="Instance name")
    self_link: str = Field(default="", alias="selfLink", description="Resource URI")
    location: str = Field(default="", description="Backup location")
    description: str = Field(default="", description="Backup description")

    enqueued_time: Optional[datetime] = Field(default=None, alias="enqueuedTime")
    start_time: Optional[datetime] = Field(default=None, alias="startTime")
    end_time: Optional[datetime] = Field(default=None, alias="endTime")
    window_start_time: Optional[datetime] = Field(default=None, alias="windowStartTime")

    _raw: Dict[str, Any] = PrivateAttr(default_factory=dict)

    class Config:
        populate_by_name = True
        extra = "ignore"
        frozen = True

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return _coerce_id(v)

    @field_validator("enqueued_time", "start_time", "end_time", "window_start_time")
    @classmethod
    def normalize_instants(cls, v):
        return _normalize_instant(v)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "BackupRun":
        """Decode a backupRuns resource, keeping the original payload."""
        run = cls.model_validate(payload)
        run._raw = dict(payload)
        return run

    def to_record(self) -> Dict[str, Any]:
        """Return the full record, as received when decoded from the API."""
        if self._raw:
            return dict(self._raw)
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @property
    def category(self) -> str:
        """Backup category label, falling back to the resource kind."""
        return self.backup_kind or self.kind

    @property
    def is_finished(self) -> bool:
        """Check if the run has an end time."""
        return self.end_time is not None


class BackupContext(BaseModel):
    """Backup details attached to a backup creation operation."""
    backup_id: str = Field(default="", alias="backupId")
    kind: str = Field(default="")

    class Config:
        populate_by_name = True

    @field_validator("backup_id", mode="before")
    @classmethod
    def coerce_backup_id(cls, v):
        return _coerce_id(v)


class BackupOperation(BaseModel):
    """
    Acknowledgment returned when a new backup run is requested.

    This is the long-running operation resource, not the backup run
    itself. ``backup_id`` names the run the operation will produce and may
    be empty until the service assigns one.
    """
    operation_id: str = Field(default="", alias="name", description="Operation identifier")
    operation_type: str = Field(default="", alias="operationType")
    status: str = Field(default="")
    insert_time: Optional[datetime] = Field(default=None, alias="insertTime")
    target_id: str = Field(default="", alias="targetId", description="Target instance name")
    target_link: str = Field(default="", alias="targetLink")
    target_project: str = Field(default="", alias="targetProject")
    user: str = Field(default="")
    self_link: str = Field(default="", alias="selfLink")
    kind: str = Field(default="")
    backup_context: BackupContext = Field(default_factory=BackupContext, alias="backupContext")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("insert_time")
    @classmethod
    def normalize_insert_time(cls, v):
        return _normalize_instant(v)

    @property
    def backup_id(self) -> str:
        return self.backup_context.backup_id


class VersionRef(BaseModel):
    """Resource protocol version: the backup run id."""
    backup_id: str = Field(..., description="Backup run identifier")

    class Config:
        frozen = True

    @field_validator("backup_id", mode="before")
    @classmethod
    def coerce_backup_id(cls, v):
        return _coerce_id(v)


class MetadataEntry(BaseModel):
    """Name/value pair shown next to a version."""
    name: str
    value: str


class VerbOutput(BaseModel):
    """Payload emitted by the ``in`` and ``out`` verbs."""
    version: VersionRef
    metadata: List[MetadataEntry] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def metadata_value(self, name: str) -> Optional[str]:
        """Look up the first metadata value with the given name."""
        for entry in self.metadata:
            if entry.name == name:
                return entry.value
        return None
