"""
Tests for backup resource models and request payloads.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from backup_resource import (
    BackupOperation,
    BackupRun,
    CheckRequest,
    InRequest,
    OutRequest,
    SourceConfig,
    VerbOutput,
    VersionRef
)
from backup_resource.models.entities import MetadataEntry


class TestBackupRun:
    """Tests for BackupRun."""

    def test_wire_names(self):
        run = BackupRun.from_api({
            "kind": "sql#backupRun",
            "id": "1700000000000",
            "status": "SUCCESSFUL",
            "backupKind": "SNAPSHOT",
            "selfLink": "https://example.invalid/backupRuns/1700000000000",
            "endTime": "2024-01-01T04:00:00Z",
            "windowStartTime": "2024-01-01T03:00:00Z",
        })

        assert run.backup_kind == "SNAPSHOT"
        assert run.self_link.endswith("/1700000000000")
        assert run.end_time == datetime(2024, 1, 1, 4, tzinfo=timezone.utc)
        assert run.is_finished

    def test_zero_times_are_absent(self):
        run = BackupRun.from_api({
            "id": "1",
            "status": "ENQUEUED",
            "startTime": "0001-01-01T00:00:00Z",
            "endTime": "0001-01-01T00:00:00Z",
        })

        assert run.start_time is None
        assert run.end_time is None
        assert not run.is_finished

    def test_unknown_status_is_kept(self):
        assert BackupRun.from_api({"id": "1", "status": "SOMETHING_NEW"}).status == "SOMETHING_NEW"

    def test_record_keeps_unknown_fields(self):
        payload = {"id": "1", "status": "SUCCESSFUL", "diskEncryptionStatus": {"kind": "x"}}

        record = BackupRun.from_api(payload).to_record()

        assert record == payload
        assert record is not payload

    def test_record_without_payload(self):
        run = BackupRun(id="1", status="RUNNING", backup_kind="SNAPSHOT")

        assert run.to_record() == {"id": "1", "status": "RUNNING", "kind": "", "backupKind": "SNAPSHOT",
                                   "type": "", "instance": "", "selfLink": "", "location": "",
                                   "description": ""}

    def test_id_is_immutable(self):
        run = BackupRun.from_api({"id": "1"})

        with pytest.raises(ValidationError):
            run.id = "2"

    def test_category_falls_back_to_kind(self):
        assert BackupRun.from_api({"id": "1", "kind": "sql#backupRun"}).category == "sql#backupRun"


class TestBackupOperation:
    """Tests for BackupOperation."""

    def test_backup_id_from_context(self):
        operation = BackupOperation.model_validate({"name": "op", "backupContext": {"backupId": 99}})

        assert operation.backup_id == "99"
        assert operation.operation_id == "op"

    def test_empty_operation(self):
        operation = BackupOperation.model_validate({})

        assert operation.backup_id == ""
        assert operation.insert_time is None


class TestRequests:
    """Tests for verb request payloads."""

    def test_source_requires_project_and_instance(self):
        with pytest.raises(ValidationError):
            SourceConfig(project=" ", instance="orders-db")
        with pytest.raises(ValidationError):
            SourceConfig(instance="orders-db")

    def test_source_repr_hides_key(self):
        source = SourceConfig(project="p", instance="i", private_key="super-secret")

        assert "super-secret" not in repr(source)
        assert "super-secret" not in str(source)

    def test_source_accepts_key_object(self):
        source = SourceConfig(project="p", instance="i", private_key={"type": "service_account"})

        assert source.private_key == {"type": "service_account"}

    def test_check_without_version(self):
        assert CheckRequest.model_validate({"source": {"project": "p", "instance": "i"}}).version is None

    def test_check_null_version(self):
        request = CheckRequest.model_validate({"source": {"project": "p", "instance": "i"}, "version": None})

        assert request.version is None

    def test_in_requires_version(self):
        with pytest.raises(ValidationError):
            InRequest.model_validate({"source": {"project": "p", "instance": "i"}})

    def test_out_null_params(self):
        request = OutRequest.model_validate({"source": {"project": "p", "instance": "i"}, "params": None})

        assert request.params is not None


def test_verb_output_shape():
    output = VerbOutput(
        version=VersionRef(backup_id="B1"),
        metadata=[MetadataEntry(name="status", value="RUNNING")]
    )

    assert output.to_dict() == {
        "version": {"backup_id": "B1"},
        "metadata": [{"name": "status", "value": "RUNNING"}],
    }
    assert output.metadata_value("status") == "RUNNING"
    assert output.metadata_value("missing") is None
