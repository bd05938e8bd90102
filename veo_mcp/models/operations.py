"""
Long-running operation models.

An Operation is a read-only snapshot of a remote generation job. The client
holds nothing but the operation name; every new snapshot comes from a fresh
status fetch.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from veo_mcp.models.errors import RemoteOperationError

OPERATIONS_COLLECTION = "operations"


class OperationStatus(str, Enum):
    """Classification of an operation snapshot."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class WaitStatus(str, Enum):
    """Outcome of a wait call: a terminal classification or a timeout."""

    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timeout"


class OperationError(BaseModel):
    """Error block reported by the remote service for a failed operation."""

    model_config = ConfigDict(frozen=True)

    code: int = 0
    message: str = ""


class Operation(BaseModel):
    """
    Snapshot of a long-running Veo operation.

    Attributes:
        name: Fully qualified operation name (e.g. "operations/abc123")
        done: Terminal flag; None until the remote service sets it
        error: Failure details, if the operation failed
        video_uris: Download locators of generated videos (never None)
    """

    model_config = ConfigDict(frozen=True)

    name: str
    done: bool | None = None
    error: OperationError | None = None
    video_uris: list[str] = Field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Operation:
        """
        Build a snapshot from the wire JSON of an operation.

        Video locators live at response.generateVideoResponse.generatedSamples[].video.uri
        and are extracted only when present.
        """
        response = payload.get("response") or {}
        video_response = response.get("generateVideoResponse") or {}
        samples = video_response.get("generatedSamples") or []
        uris = [
            sample["video"]["uri"]
            for sample in samples
            if (sample.get("video") or {}).get("uri")
        ]

        error = payload.get("error")
        return cls(
            name=payload.get("name", ""),
            done=payload.get("done"),
            error=OperationError(**error) if error else None,
            video_uris=uris,
        )

    @property
    def status(self) -> OperationStatus:
        return classify_operation(self)

    @property
    def is_terminal(self) -> bool:
        return bool(self.done) or self.error is not None

    def as_exception(self) -> RemoteOperationError | None:
        """Return the remote failure as an exception, or None if not failed."""
        if self.error is None:
            return None
        return RemoteOperationError(self.name, self.error.code, self.error.message)


def classify_operation(operation: Operation) -> OperationStatus:
    """
    Classify a snapshot into exactly one OperationStatus.

    An error wins over the done flag: done=True with an error is failed.
    """
    if operation.error is not None:
        return OperationStatus.FAILED
    if operation.done:
        return OperationStatus.COMPLETED
    return OperationStatus.IN_PROGRESS


def normalize_operation_name(operation_name: str) -> str:
    """
    Turn a bare operation token into a fully qualified lookup key.

    Names that already contain a path separator are used verbatim.
    Idempotent: normalizing a normalized name returns it unchanged.
    """
    name = operation_name.strip()
    if "/" in name:
        return name
    return f"{OPERATIONS_COLLECTION}/{name}"


class WaitOutcome(BaseModel):
    """
    Result of waiting on an operation.

    A timeout is a valid outcome, not an error: the remote operation keeps
    running and can be checked again with the same name.
    """

    model_config = ConfigDict(frozen=True)

    status: WaitStatus
    operation: Operation
    elapsed_seconds: float
    poll_count: int

    @property
    def timed_out(self) -> bool:
        return self.status is WaitStatus.TIMED_OUT

    def to_dict(self) -> dict[str, Any]:
        """Structured payload for JSON output."""
        if self.timed_out:
            return {
                "operation_name": self.operation.name,
                "status": self.status.value,
                "done": False,
                "elapsed_seconds": round(self.elapsed_seconds),
                "poll_count": self.poll_count,
            }
        return {
            "operation_name": self.operation.name,
            "status": self.status.value,
            "done": True,
            "elapsed_seconds": round(self.elapsed_seconds),
            "poll_count": self.poll_count,
            "error": self.operation.error.model_dump() if self.operation.error else None,
            "video_urls": list(self.operation.video_uris),
        }
