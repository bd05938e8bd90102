"""
Veo MCP Tools for Claude Agent.

Provides tools for generating videos with Google's Veo models and tracking
the resulting long-running operations.

Tool Return Format (per Claude Agent SDK):
- Success: {"content": [{"type": "text", "text": "..."}]}
- Error: {"content": [{"type": "text", "text": "Error: ..."}], "is_error": True}
- NEVER raise exceptions that escape the tool function
"""

from __future__ import annotations

import logging
from typing import Any

from claude_agent_sdk import tool
from pydantic import ValidationError

from veo_mcp.agent.formatting import (
    format_models,
    format_operation_status,
    format_submission,
    format_wait_outcome,
    to_json,
    truncate,
)
from veo_mcp.core.config import get_settings
from veo_mcp.models.errors import (
    ConfigurationError,
    ToolError,
    TransportError,
    configuration_error,
    internal_error,
    transport_error,
    validation_error,
)
from veo_mcp.models.requests import (
    GenerateVideoFromImageInput,
    GenerateVideoInput,
    GetOperationStatusInput,
    ListModelsInput,
    ResponseFormat,
    WaitForVideoInput,
)
from veo_mcp.services.operation_poller import OperationPoller
from veo_mcp.services.veo_client import VeoClient

logger = logging.getLogger(__name__)

_INPUT_MODEL_NAMES = frozenset(
    model.__name__
    for model in (
        GenerateVideoInput,
        GenerateVideoFromImageInput,
        GetOperationStatusInput,
        WaitForVideoInput,
        ListModelsInput,
    )
)


def _create_client() -> VeoClient:
    """Open a client for one tool invocation."""
    return VeoClient(get_settings())


def _create_poller(client: VeoClient) -> OperationPoller:
    return OperationPoller(client)


def _text_result(text: str) -> dict[str, Any]:
    limit = get_settings().character_limit
    return {"content": [{"type": "text", "text": truncate(text, limit)}]}


def _error_result(error: ToolError, args: dict[str, Any]) -> dict[str, Any]:
    """Render a ToolError; JSON callers get the structured code and retry flag."""
    if args.get("response_format") == ResponseFormat.JSON.value:
        text = to_json(error.to_dict())
    else:
        text = error.to_text()
    return {"content": [{"type": "text", "text": text}], "is_error": True}


def _handle_tool_error(
    e: Exception, context: str, args: dict[str, Any]
) -> dict[str, Any]:
    """
    Convert an exception raised inside a tool into an error result.

    Only validation failures of the tool's own input models are reported as
    invalid input. A malformed upstream payload is an internal error.

    Args:
        e: The exception that occurred
        context: Tool name for logging
        args: Raw tool arguments, used to pick the error format

    Returns:
        MCP error result with a classified message
    """
    if isinstance(e, ValidationError) and e.title in _INPUT_MODEL_NAMES:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"]) or "input"
        return _error_result(validation_error(field, first["msg"]), args)

    if isinstance(e, TransportError):
        return _error_result(transport_error(e), args)

    if isinstance(e, ConfigurationError):
        logger.error(f"{context}: {e}")
        return _error_result(configuration_error(str(e)), args)

    logger.error(f"{context}: {type(e).__name__}: {e}", exc_info=True)
    return _error_result(internal_error(str(e)), args)


async def _submit(params: GenerateVideoInput) -> str:
    async with _create_client() as client:
        return await _create_poller(client).submit(params.model, params.build_request())


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TOOL 1: veo_generate_video
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@tool(
    "veo_generate_video",
    "Generate a video from a text prompt using Google's Veo models. "
    "For best results describe the shot type, subject, action, setting, lighting, "
    "and camera movement. Returns an operation name; use veo_get_operation_status "
    "or veo_wait_for_video to check completion and get the video URL. "
    "Generation takes 11 seconds to 6 minutes; videos are stored server-side for "
    "2 days. Veo 3+ models include natively generated audio.",
    GenerateVideoInput.model_json_schema(),
)
async def veo_generate_video(args: dict[str, Any]) -> dict[str, Any]:
    """
    Submit a text-to-video generation job.

    Args:
        args: Tool arguments validated by GenerateVideoInput

    Returns:
        MCP tool response with the operation name or an error
    """
    try:
        params = GenerateVideoInput.model_validate(args)
        operation_name = await _submit(params)
        return _text_result(format_submission(operation_name, params))
    except Exception as e:
        return _handle_tool_error(e, "veo_generate_video", args)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TOOL 2: veo_generate_video_from_image
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@tool(
    "veo_generate_video_from_image",
    "Generate a video using a base64-encoded image as the first frame. "
    "Useful for animating still images or keeping a consistent visual style. "
    "The aspect ratio should match the input image. Returns an operation name "
    "for tracking with veo_get_operation_status or veo_wait_for_video.",
    GenerateVideoFromImageInput.model_json_schema(),
)
async def veo_generate_video_from_image(args: dict[str, Any]) -> dict[str, Any]:
    """Submit an image-to-video generation job."""
    try:
        params = GenerateVideoFromImageInput.model_validate(args)
        operation_name = await _submit(params)
        return _text_result(format_submission(operation_name, params))
    except Exception as e:
        return _handle_tool_error(e, "veo_generate_video_from_image", args)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TOOL 3: veo_get_operation_status
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@tool(
    "veo_get_operation_status",
    "Check the status of a video generation operation. Accepts the full "
    "operation name ('operations/...') or the bare ID. Reports 'in_progress', "
    "'completed' (with video URLs), or 'failed' (with error details).",
    GetOperationStatusInput.model_json_schema(),
)
async def veo_get_operation_status(args: dict[str, Any]) -> dict[str, Any]:
    """
    Fetch and classify a single operation snapshot.

    A failed operation is still a successful tool call: the failure is
    reported in the rendered status, not as a tool error.
    """
    try:
        params = GetOperationStatusInput.model_validate(args)
        async with _create_client() as client:
            operation = await _create_poller(client).fetch_status(params.operation_name)
        return _text_result(format_operation_status(operation, params.response_format))
    except Exception as e:
        return _handle_tool_error(e, "veo_get_operation_status", args)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TOOL 4: veo_wait_for_video
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@tool(
    "veo_wait_for_video",
    "Poll a video generation operation until it completes, fails, or the "
    "timeout elapses. poll_interval_seconds: 5-60 (default 10); "
    "timeout_seconds: 30-600 (default 300). A timeout leaves the job running; "
    "check it later with veo_get_operation_status.",
    WaitForVideoInput.model_json_schema(),
)
async def veo_wait_for_video(args: dict[str, Any]) -> dict[str, Any]:
    """
    Wait for an operation to finish.

    Defaults for poll interval and timeout come from settings when the
    caller omits them. Returns completed, failed, or timeout; a fetch
    failure while polling ends the wait with an error.
    """
    try:
        settings = get_settings()
        params = WaitForVideoInput.model_validate(
            {
                "poll_interval_seconds": settings.default_poll_interval,
                "timeout_seconds": settings.default_wait_timeout,
                **args,
            }
        )
        async with _create_client() as client:
            outcome = await _create_poller(client).wait(
                params.operation_name,
                poll_interval=params.poll_interval_seconds,
                timeout=params.timeout_seconds,
            )
        return _text_result(
            format_wait_outcome(outcome, params.timeout_seconds, params.response_format)
        )
    except Exception as e:
        return _handle_tool_error(e, "veo_wait_for_video", args)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TOOL 5: veo_list_models
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@tool(
    "veo_list_models",
    "List available Google Veo models with their status, features, "
    "resolutions, and supported durations.",
    ListModelsInput.model_json_schema(),
)
async def veo_list_models(args: dict[str, Any]) -> dict[str, Any]:
    """List the static model catalog; makes no network call."""
    try:
        params = ListModelsInput.model_validate(args)
        return _text_result(format_models(params.response_format))
    except Exception as e:
        return _handle_tool_error(e, "veo_list_models", args)


VEO_TOOLS = [
    veo_generate_video,
    veo_generate_video_from_image,
    veo_get_operation_status,
    veo_wait_for_video,
    veo_list_models,
]
