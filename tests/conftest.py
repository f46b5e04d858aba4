"""
Shared fixtures for backup resource tests.

- A scripted in-memory backup service client
- Backup run factory
- Sleep recorder replacing the poll wait
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from backup_resource import BackupOperation, BackupResourceConfig, BackupRun
from backup_service import BackupRunNotFoundError


def make_run(backup_id: str, status: str = "SUCCESSFUL", end_time: Optional[str] = None, **extra) -> BackupRun:
    """Build a backup run from wire-format fields."""
    payload: Dict[str, Any] = {
        "kind": "sql#backupRun",
        "id": backup_id,
        "status": status,
        "instance": "orders-db",
        "backupKind": "SNAPSHOT",
        "type": "ON_DEMAND",
    }
    if end_time is not None:
        payload["endTime"] = end_time
    payload.update(extra)
    return BackupRun.from_api(payload)


class FakeBackupServiceClient:
    """
    In-memory stand-in for BackupServiceClient.

    ``statuses`` scripts the status returned by successive
    ``get_backup_run`` calls; the last entry repeats once exhausted.
    """

    def __init__(
        self,
        runs: Optional[List[BackupRun]] = None,
        statuses: Optional[List[str]] = None,
        operation: Optional[Dict[str, Any]] = None,
        end_time: str = "2024-01-01T04:00:00Z"
    ):
        self.runs = list(runs or [])
        self.statuses = list(statuses or [])
        self.operation = operation
        self.end_time = end_time
        self.calls: List[tuple] = []
        self.closed = False

    def list_backup_runs(self, project, instance):
        self.calls.append(("list", project, instance))
        return list(self.runs)

    def get_backup_run(self, project, instance, backup_id):
        self.calls.append(("get", project, instance, backup_id))
        if self.statuses:
            index = min(len(self.get_calls) - 1, len(self.statuses) - 1)
            status = self.statuses[index]
            end_time = self.end_time if status == "SUCCESSFUL" else None
            return make_run(backup_id, status=status, end_time=end_time)
        for run in self.runs:
            if run.id == backup_id:
                return run
        raise BackupRunNotFoundError(f"Backup run {backup_id} not found", backup_id=backup_id)

    def create_backup_run(self, project, instance):
        self.calls.append(("create", project, instance))
        return BackupOperation.model_validate(self.operation or {})

    def close(self):
        self.closed = True

    @property
    def get_calls(self):
        return [c for c in self.calls if c[0] == "get"]

    @property
    def list_calls(self):
        return [c for c in self.calls if c[0] == "list"]


class SleepRecorder:
    """Records requested sleeps instead of waiting."""

    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def config():
    return BackupResourceConfig()


@pytest.fixture
def source_payload():
    return {
        "project": "my-project",
        "instance": "orders-db",
        "private_key": '{"type": "service_account"}',
    }


@pytest.fixture
def sample_runs():
    """Runs listed in API order (newest first), one still running."""
    return [
        make_run("300", status="RUNNING"),
        make_run("200", end_time="2024-01-02T04:00:00Z"),
        make_run("100", end_time="2024-01-01T04:00:00Z"),
    ]


@pytest.fixture
def fixed_instant():
    return datetime(2024, 1, 1, 4, 0, 0, tzinfo=timezone.utc)
