"""
Backup Resource Verbs

Orchestrates the backup service client, version ordering and the polling
state machine into the three resource protocol verbs:

- ``check``: discover backup versions, oldest first
- ``in``: wait for one version to succeed, persist it and describe it
- ``out``: request a new backup and describe the operation
"""

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Union

from backup_service.service_exceptions import BackupRunNotFoundError
from ..config import BackupResourceConfig
from ..models.entities import (
    BackupOperation,
    BackupRun,
    CheckMode,
    MetadataEntry,
    VerbOutput,
    VersionRef
)
from ..models.parameters import CheckRequest, InRequest, OutRequest
from ..utils.output import write_record
from ..utils.timezone import format_in_zone, get_reporting_zone
from .ordering import sort_by_recency, to_version_refs, versions_since
from .poller import BackupRunPoller

logger = logging.getLogger(__name__)


class BackupResource:
    """
    Cloud SQL backup runs exposed as a versioned resource.

    Every call fetches fresh data; nothing is cached between verbs. Errors
    from the client, the poller or the output writer propagate unchanged,
    so a verb either returns its full payload or raises.

    Example:
        ```python
        with BackupServiceClient(ServiceAccountAuthenticator(key)) as client:
            resource = BackupResource(client, BackupResourceConfig())

            versions = resource.check(CheckRequest.model_validate(payload))
            result = resource.in_(InRequest.model_validate(payload), "/tmp/build/get")
            created = resource.out(OutRequest.model_validate(payload))
        ```
    """

    def __init__(
        self,
        client,
        config: Optional[BackupResourceConfig] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the resource.

        Args:
            client: Backup service client (``list_backup_runs``,
                    ``get_backup_run``, ``create_backup_run``)
            config: Resource configuration (uses defaults if None)
            sleep: Wait function handed to the poller
        """
        self._client = client
        self._config = config or BackupResourceConfig()
        self._zone = get_reporting_zone(self._config.reporting_timezone)
        self._poller = BackupRunPoller(client, self._config, sleep=sleep)

    @property
    def poller(self) -> BackupRunPoller:
        return self._poller

    def list_ordered(self, project: str, instance: str) -> List[BackupRun]:
        """List all backup runs of an instance, oldest first."""
        return sort_by_recency(self._client.list_backup_runs(project, instance))

    def check(self, request: CheckRequest) -> List[VersionRef]:
        """
        Discover available versions.

        Without a version every run id is returned, oldest first. With a
        version, the ``all`` mode fetches that run and still returns every
        id, also when the run no longer exists. Any other fetch failure
        propagates. The ``since`` mode returns the given version and the
        ones after it.

        Returns:
            Version references, newest last
        """
        source = request.source
        mode = source.check_mode or self._config.check_mode
        given = request.version.backup_id if request.version else None

        if given is not None and mode is CheckMode.ALL:
            try:
                run = self._client.get_backup_run(source.project, source.instance, given)
            except BackupRunNotFoundError:
                logger.warning(f"Current version {given} no longer exists; listing all versions")
            else:
                logger.debug(f"Current version {run.id} is {run.status}")

        ordered = self.list_ordered(source.project, source.instance)
        if given is not None and mode is CheckMode.SINCE:
            ordered = versions_since(ordered, given)

        logger.info(f"Found {len(ordered)} versions for {source.project}/{source.instance}")
        return to_version_refs(ordered)

    def in_(self, request: InRequest, destination: Union[str, Path]) -> VerbOutput:
        """
        Materialize one version.

        Polls the run until it succeeds, writes the full record to
        ``destination/<output_filename>`` and returns the version with its
        metadata. Nothing is written when polling fails.
        """
        source = request.source
        backup_id = request.version.backup_id

        run = self._poller.wait_for_completion(source.project, source.instance, backup_id)
        write_record(run.to_record(), destination, self._config.output_filename)

        return VerbOutput(
            version=VersionRef(backup_id=run.id or backup_id),
            metadata=self.run_metadata(run)
        )

    def out(self, request: OutRequest) -> VerbOutput:
        """
        Trigger a new backup run.

        Returns as soon as the service acknowledges the request; completion
        is observed by a later ``in``.
        """
        source = request.source
        operation = self._client.create_backup_run(source.project, source.instance)

        if not operation.backup_id:
            logger.warning(f"Operation {operation.operation_id} has no backup id yet")
        else:
            logger.info(f"Requested backup {operation.backup_id} ({operation.status})")

        return VerbOutput(
            version=VersionRef(backup_id=operation.backup_id),
            metadata=self.operation_metadata(operation)
        )

    def run_metadata(self, run: BackupRun) -> List[MetadataEntry]:
        return [
            MetadataEntry(name="kind", value=run.category),
            MetadataEntry(name="status", value=run.status),
            MetadataEntry(name="end-time", value=format_in_zone(run.end_time, self._zone)),
            MetadataEntry(name="instance", value=run.instance),
        ]

    def operation_metadata(self, operation: BackupOperation) -> List[MetadataEntry]:
        return [
            MetadataEntry(name="status", value=operation.status),
            MetadataEntry(name="insert-time", value=format_in_zone(operation.insert_time, self._zone)),
            MetadataEntry(name="operation-id", value=operation.operation_id),
            MetadataEntry(name="operation-type", value=operation.operation_type),
            MetadataEntry(name="target-instance", value=operation.target_id),
        ]
