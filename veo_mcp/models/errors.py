"""
Error taxonomy for the Veo tool server.

Exceptions raised by the HTTP and polling layers, plus a structured
ToolError used to render every failure as a tool result with a hint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for tool responses."""

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Transport errors (HTTP_*)
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_API_KEY = "INVALID_API_KEY"
    ACCESS_DENIED = "ACCESS_DENIED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"

    # Remote operation errors
    OPERATION_FAILED = "OPERATION_FAILED"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class VeoError(Exception):
    """Base class for errors raised by the Veo client and poller."""


class ConfigurationError(VeoError):
    """Raised when required configuration (the API key) is missing."""


class TransportError(VeoError):
    """
    Raised when a request to the Veo API fails.

    Covers network failures, client-side timeouts, and 4xx/5xx responses.
    Never retried automatically.

    Attributes:
        message: Upstream or transport message
        status_code: HTTP status, None when no response was received
        kind: "http", "timeout", or "network"
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        kind: str = "http",
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.kind = kind
        super().__init__(message)


class RemoteOperationError(VeoError):
    """Raised when the remote service reports that an operation itself failed."""

    def __init__(self, operation_name: str, code: int, message: str) -> None:
        self.operation_name = operation_name
        self.code = code
        self.message = message
        super().__init__(f"Operation {operation_name} failed ({code}): {message}")


@dataclass
class ToolError:
    """
    Structured error rendered into a tool result.

    Attributes:
        code: Standardized error code from ErrorCode enum
        message: Human-readable error message
        hint: Optional suggestion for resolving the error
        retryable: Whether the caller may retry the same request
    """

    code: ErrorCode
    message: str
    hint: str | None = None
    retryable: bool = False

    def to_text(self) -> str:
        """Render as a single line of text for the assistant."""
        text = f"Error: {self.message}"
        if self.hint:
            text = f"{text} {self.hint}"
        return text

    def to_dict(self) -> dict[str, dict[str, str | bool]]:
        """Convert to dictionary format for JSON responses."""
        error_dict: dict[str, str | bool] = {
            "code": self.code.value,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.hint is not None:
            error_dict["hint"] = self.hint
        return {"error": error_dict}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Error Factories
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def validation_error(field: str, reason: str) -> ToolError:
    """Create error for rejected tool input."""
    return ToolError(
        code=ErrorCode.VALIDATION_ERROR,
        message=f"Invalid input. {field}: {reason}.",
        hint="Check your parameters and try again.",
    )


def configuration_error(detail: str) -> ToolError:
    """Create error for missing configuration."""
    return ToolError(
        code=ErrorCode.CONFIGURATION_ERROR,
        message=detail + ".",
        hint="Set it in your environment before running this server.",
    )


def transport_error(error: TransportError) -> ToolError:
    """
    Map a TransportError to a user-facing ToolError.

    Args:
        error: The transport failure raised by the client

    Returns:
        ToolError with a status-specific message and hint
    """
    if error.kind == "timeout":
        return ToolError(
            code=ErrorCode.REQUEST_TIMEOUT,
            message="Request timed out.",
            hint="Video generation can take several minutes. "
            "Use veo_get_operation_status to check progress.",
            retryable=True,
        )

    if error.kind == "network":
        return ToolError(
            code=ErrorCode.NETWORK_ERROR,
            message="Network error.",
            hint="Please check your internet connection.",
            retryable=True,
        )

    status = error.status_code
    message = error.message

    if status == 400:
        return ToolError(
            code=ErrorCode.INVALID_REQUEST,
            message=f"Invalid request. {message}.",
            hint="Check your parameters and try again.",
        )
    if status == 401:
        return ToolError(
            code=ErrorCode.INVALID_API_KEY,
            message="Invalid API key.",
            hint="Please check your GEMINI_API_KEY environment variable.",
        )
    if status == 403:
        return ToolError(
            code=ErrorCode.ACCESS_DENIED,
            message=f"Access denied. {message}.",
            hint="Ensure your API key has Veo access enabled.",
        )
    if status == 404:
        return ToolError(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=f"Resource not found. {message}.",
            hint="Check the operation name or model ID.",
        )
    if status == 429:
        return ToolError(
            code=ErrorCode.RATE_LIMITED,
            message="Rate limit exceeded.",
            hint="Please wait before making more requests.",
            retryable=True,
        )
    if status == 500:
        return ToolError(
            code=ErrorCode.SERVER_ERROR,
            message=f"Server error. {message}.",
            hint="Please try again later.",
            retryable=True,
        )

    return ToolError(
        code=ErrorCode.HTTP_ERROR,
        message=f"API request failed with status {status}. {message}",
    )


def operation_failed_error(error: RemoteOperationError) -> ToolError:
    """Create error for an operation the remote service marked as failed."""
    return ToolError(
        code=ErrorCode.OPERATION_FAILED,
        message=f"Video generation failed (code {error.code}): {error.message}",
        hint="Adjust the prompt or parameters and submit a new request.",
    )


def internal_error(detail: str) -> ToolError:
    """Create generic internal error."""
    return ToolError(
        code=ErrorCode.INTERNAL_ERROR,
        message=f"Unexpected error occurred: {detail}",
    )
