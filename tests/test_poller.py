"""
Tests for the backup run polling state machine.
"""

import pytest

from backup_resource import (
    BackupResourceConfig,
    BackupRunPoller,
    FatalBackupStatusError,
    PollTimeoutError,
    StatusClass,
    classify_status
)
from backup_service import TransportError
from conftest import FakeBackupServiceClient
from resource_exceptions import OperationTimeoutError


class TestClassifyStatus:
    """Tests for classify_status."""

    @pytest.mark.parametrize("status", ["ENQUEUED", "RUNNING", "PENDING"])
    def test_transient(self, status):
        assert classify_status(status) is StatusClass.TRANSIENT

    def test_success(self):
        assert classify_status("SUCCESSFUL") is StatusClass.SUCCESS

    @pytest.mark.parametrize("status", ["FAILED", "CANCELLED", "SKIPPED", "DELETED", "", "running"])
    def test_everything_else_is_fatal(self, status):
        assert classify_status(status) is StatusClass.FATAL


class TestBackupRunPoller:
    """Tests for BackupRunPoller."""

    def test_polls_until_successful(self, sleeper):
        client = FakeBackupServiceClient(statuses=["ENQUEUED", "RUNNING", "SUCCESSFUL"])
        poller = BackupRunPoller(client, BackupResourceConfig(), sleep=sleeper)

        run = poller.wait_for_completion("my-project", "orders-db", "42")

        assert run.id == "42"
        assert run.status == "SUCCESSFUL"
        assert len(client.get_calls) == 3
        assert poller.polls == 3
        assert sleeper.calls == [30.0, 30.0]

    def test_immediate_success_does_not_sleep(self, sleeper):
        client = FakeBackupServiceClient(statuses=["SUCCESSFUL"])
        poller = BackupRunPoller(client, sleep=sleeper)

        poller.wait_for_completion("my-project", "orders-db", "42")

        assert len(client.get_calls) == 1
        assert sleeper.calls == []

    def test_fatal_status_stops_on_first_observation(self, sleeper):
        client = FakeBackupServiceClient(statuses=["CANCELLED", "SUCCESSFUL"])
        poller = BackupRunPoller(client, sleep=sleeper)

        with pytest.raises(FatalBackupStatusError) as exc_info:
            poller.wait_for_completion("my-project", "orders-db", "42")

        assert exc_info.value.status == "CANCELLED"
        assert exc_info.value.backup_id == "42"
        assert len(client.get_calls) == 1
        assert sleeper.calls == []

    def test_fatal_after_transient(self, sleeper):
        client = FakeBackupServiceClient(statuses=["RUNNING", "FAILED"])
        poller = BackupRunPoller(client, sleep=sleeper)

        with pytest.raises(FatalBackupStatusError) as exc_info:
            poller.wait_for_completion("my-project", "orders-db", "42")

        assert "FAILED" in str(exc_info.value)
        assert len(client.get_calls) == 2
        assert sleeper.calls == [30.0]

    def test_uses_configured_interval(self, sleeper):
        client = FakeBackupServiceClient(statuses=["PENDING", "SUCCESSFUL"])
        poller = BackupRunPoller(client, BackupResourceConfig(poll_interval_seconds=5), sleep=sleeper)

        poller.wait_for_completion("my-project", "orders-db", "42")

        assert sleeper.calls == [5]

    def test_attempt_bound_raises_timeout(self, sleeper):
        client = FakeBackupServiceClient(statuses=["RUNNING"])
        poller = BackupRunPoller(client, BackupResourceConfig(max_poll_attempts=4), sleep=sleeper)

        with pytest.raises(PollTimeoutError) as exc_info:
            poller.wait_for_completion("my-project", "orders-db", "42")

        assert isinstance(exc_info.value, OperationTimeoutError)
        assert exc_info.value.attempts == 4
        assert exc_info.value.last_status == "RUNNING"
        assert len(client.get_calls) == 4
        assert len(sleeper.calls) == 3

    def test_success_within_bound(self, sleeper):
        client = FakeBackupServiceClient(statuses=["RUNNING", "SUCCESSFUL"])
        poller = BackupRunPoller(client, BackupResourceConfig(max_poll_attempts=2), sleep=sleeper)

        run = poller.wait_for_completion("my-project", "orders-db", "42")

        assert run.status == "SUCCESSFUL"

    def test_transport_error_propagates_without_retry(self, sleeper):
        class FailingClient(FakeBackupServiceClient):
            attempts = 0

            def get_backup_run(self, project, instance, backup_id):
                self.attempts += 1
                if self.attempts == 2:
                    raise TransportError("connection reset")
                return super().get_backup_run(project, instance, backup_id)

        client = FailingClient(statuses=["RUNNING"])
        poller = BackupRunPoller(client, sleep=sleeper)

        with pytest.raises(TransportError):
            poller.wait_for_completion("my-project", "orders-db", "42")

        assert client.attempts == 2
        assert len(sleeper.calls) == 1

    def test_logs_each_transient_observation(self, sleeper, caplog):
        client = FakeBackupServiceClient(statuses=["ENQUEUED", "RUNNING", "SUCCESSFUL"])
        poller = BackupRunPoller(client, sleep=sleeper)

        with caplog.at_level("INFO", logger="backup_resource.core.poller"):
            poller.wait_for_completion("my-project", "orders-db", "42")

        states = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Backup state:")]
        assert states == ["Backup state: ENQUEUED", "Backup state: RUNNING"]
