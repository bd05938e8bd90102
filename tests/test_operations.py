"""
Tests for operation snapshot models.

Covers parsing of the wire format, classification, identifier
normalization, and the structured wait outcome payload.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from conftest import operation_payload

from veo_mcp.models.errors import RemoteOperationError
from veo_mcp.models.operations import (
    Operation,
    OperationError,
    OperationStatus,
    WaitOutcome,
    WaitStatus,
    classify_operation,
    normalize_operation_name,
)


class TestFromApi:
    """Test Operation.from_api parsing."""

    def test_in_progress_payload(self) -> None:
        operation = Operation.from_api({"name": "operations/abc123"})

        assert operation.name == "operations/abc123"
        assert operation.done is None
        assert operation.error is None
        assert operation.video_uris == []

    def test_completed_payload_extracts_uris(self) -> None:
        operation = Operation.from_api(
            operation_payload(done=True, uris=["https://x/1.mp4", "https://x/2.mp4"])
        )

        assert operation.done is True
        assert operation.video_uris == ["https://x/1.mp4", "https://x/2.mp4"]

    def test_error_payload(self) -> None:
        operation = Operation.from_api(
            {"name": "operations/abc123", "error": {"code": 7, "message": "denied"}}
        )

        assert operation.error == OperationError(code=7, message="denied")
        assert operation.video_uris == []

    def test_error_with_extra_fields_is_accepted(self) -> None:
        operation = Operation.from_api(
            {
                "name": "operations/abc123",
                "done": True,
                "error": {"code": 3, "message": "bad", "details": [{"reason": "x"}]},
            }
        )

        assert operation.error is not None
        assert operation.error.code == 3

    def test_samples_without_uri_are_skipped(self) -> None:
        payload = {
            "name": "operations/abc123",
            "done": True,
            "response": {
                "generateVideoResponse": {
                    "generatedSamples": [{"video": {}}, {"video": {"uri": "uri1"}}, {}]
                }
            },
        }

        assert Operation.from_api(payload).video_uris == ["uri1"]

    def test_null_response_yields_empty_list(self) -> None:
        payload = {"name": "operations/abc123", "done": True, "response": None}

        assert Operation.from_api(payload).video_uris == []

    def test_snapshot_is_immutable(self) -> None:
        operation = Operation.from_api(operation_payload())

        with pytest.raises(ValidationError):
            operation.done = True  # type: ignore[misc]


class TestClassification:
    """classify_operation partitions snapshots into exactly one status."""

    @pytest.mark.parametrize(
        ("done", "error", "uris", "expected"),
        [
            (None, None, None, OperationStatus.IN_PROGRESS),
            (False, None, None, OperationStatus.IN_PROGRESS),
            (True, None, ["uri1"], OperationStatus.COMPLETED),
            (True, None, None, OperationStatus.COMPLETED),
            (None, {"code": 7, "message": "denied"}, None, OperationStatus.FAILED),
            (False, {"code": 7, "message": "denied"}, None, OperationStatus.FAILED),
            (True, {"code": 7, "message": "denied"}, None, OperationStatus.FAILED),
            (True, {"code": 7, "message": "denied"}, ["uri1"], OperationStatus.FAILED),
        ],
    )
    def test_partition(self, done, error, uris, expected) -> None:
        operation = Operation.from_api(
            operation_payload(done=done, error=error, uris=uris)
        )

        assert classify_operation(operation) is expected
        assert operation.status is expected

    def test_error_without_done_scenario(self) -> None:
        operation = Operation.from_api(
            {"name": "operations/abc123", "error": {"code": 7, "message": "denied"}}
        )

        assert operation.status is OperationStatus.FAILED
        assert operation.video_uris == []
        assert operation.is_terminal

    def test_in_progress_is_not_terminal(self) -> None:
        assert not Operation.from_api(operation_payload(done=False)).is_terminal

    def test_as_exception(self) -> None:
        failed = Operation.from_api(
            operation_payload(error={"code": 7, "message": "denied"})
        )

        error = failed.as_exception()
        assert isinstance(error, RemoteOperationError)
        assert error.code == 7
        assert error.message == "denied"
        assert error.operation_name == "operations/abc123"
        assert Operation.from_api(operation_payload(done=True)).as_exception() is None


class TestNormalization:
    """normalize_operation_name qualifies bare tokens and is idempotent."""

    def test_bare_token_is_prefixed(self) -> None:
        assert normalize_operation_name("abc123") == "operations/abc123"

    def test_qualified_name_is_unchanged(self) -> None:
        name = "models/veo-3.0-generate-001/operations/abc123"
        assert normalize_operation_name(name) == name

    @pytest.mark.parametrize(
        "name",
        ["abc123", "operations/abc123", "models/veo-2.0-generate-001/operations/z9"],
    )
    def test_idempotent(self, name: str) -> None:
        once = normalize_operation_name(name)
        assert normalize_operation_name(once) == once

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert normalize_operation_name("  abc123\n") == "operations/abc123"


class TestWaitOutcome:
    """Test the structured payload of wait outcomes."""

    def test_timeout_payload(self) -> None:
        outcome = WaitOutcome(
            status=WaitStatus.TIMED_OUT,
            operation=Operation.from_api(operation_payload(done=False)),
            elapsed_seconds=15.4,
            poll_count=2,
        )

        assert outcome.to_dict() == {
            "operation_name": "operations/abc123",
            "status": "timeout",
            "done": False,
            "elapsed_seconds": 15,
            "poll_count": 2,
        }

    def test_completed_payload(self) -> None:
        outcome = WaitOutcome(
            status=WaitStatus.COMPLETED,
            operation=Operation.from_api(operation_payload(done=True, uris=["uri1"])),
            elapsed_seconds=10.0,
            poll_count=3,
        )

        data = outcome.to_dict()
        assert data["status"] == "completed"
        assert data["done"] is True
        assert data["error"] is None
        assert data["video_urls"] == ["uri1"]
        assert not outcome.timed_out

    def test_failed_payload_carries_error(self) -> None:
        outcome = WaitOutcome(
            status=WaitStatus.FAILED,
            operation=Operation.from_api(
                operation_payload(error={"code": 7, "message": "denied"})
            ),
            elapsed_seconds=0.2,
            poll_count=1,
        )

        data = outcome.to_dict()
        assert data["status"] == "failed"
        assert data["error"] == {"code": 7, "message": "denied"}
        assert data["video_urls"] == []
