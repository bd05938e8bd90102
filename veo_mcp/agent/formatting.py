"""
Presentation helpers for Veo tool results.

Renders submissions, operation snapshots, wait outcomes, and the model
catalog as Markdown or JSON text. Timeout renders distinctly from failure.
"""

from __future__ import annotations

import json
from typing import Any

from veo_mcp.models.catalog import VEO_MODELS
from veo_mcp.models.errors import operation_failed_error
from veo_mcp.models.operations import Operation, OperationStatus, WaitOutcome
from veo_mcp.models.requests import (
    GenerateVideoFromImageInput,
    GenerateVideoInput,
    ResponseFormat,
)

TRACKING_HINT = (
    "*Use `veo_get_operation_status` or `veo_wait_for_video` to track progress "
    "and get the video URL when complete.*"
)
IN_PROGRESS_HINT = (
    "*Video generation typically takes 11 seconds to 6 minutes. "
    "Use `veo_get_operation_status` to check progress.*"
)

STATUS_LABELS = {
    OperationStatus.IN_PROGRESS: "⏳ In Progress",
    OperationStatus.COMPLETED: "✅ Completed",
    OperationStatus.FAILED: "❌ Failed",
}


def to_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def truncate(text: str, limit: int) -> str:
    """Cap tool output at the configured character limit."""
    if len(text) <= limit:
        return text
    return text[:limit] + "\n\n[Output truncated]"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Submission
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def submission_payload(operation_name: str, params: GenerateVideoInput) -> dict[str, Any]:
    kind = (
        "Image-to-video generation"
        if isinstance(params, GenerateVideoFromImageInput)
        else "Video generation"
    )
    return {
        "operation_name": operation_name,
        "model": params.model,
        "status": "submitted",
        "message": f"{kind} started. Use veo_get_operation_status or "
        "veo_wait_for_video to track progress.",
    }


def format_submission(operation_name: str, params: GenerateVideoInput) -> str:
    """Render a submitted generation request."""
    if params.response_format is ResponseFormat.JSON:
        return to_json(submission_payload(operation_name, params))

    from_image = isinstance(params, GenerateVideoFromImageInput)
    config_lines = [
        f"- **Duration:** {params.duration_seconds} seconds",
        f"- **Aspect Ratio:** {params.aspect_ratio.value}",
    ]
    if params.effective_resolution:
        config_lines.append(f"- **Resolution:** {params.effective_resolution.value}")
    if from_image:
        config_lines.append(f"- **Image Format:** {params.image_mime_type}")

    title = "Image-to-Video Generation Started" if from_image else "Video Generation Started"
    return "\n".join(
        [
            f"# {title}",
            "",
            f"**Operation:** `{operation_name}`",
            f"**Model:** {params.model}",
            "**Status:** ⏳ Submitted",
            "",
            "## Configuration",
            *config_lines,
            "",
            TRACKING_HINT,
        ]
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Operation status
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def status_payload(operation: Operation) -> dict[str, Any]:
    return {
        "operation_name": operation.name,
        "status": operation.status.value,
        "done": bool(operation.done),
        "error": operation.error.model_dump() if operation.error else None,
        "video_urls": list(operation.video_uris),
    }


def format_operation_status(operation: Operation, response_format: ResponseFormat) -> str:
    """Render a single operation snapshot."""
    if response_format is ResponseFormat.JSON:
        return to_json(status_payload(operation))

    status = operation.status
    lines = [
        "# Video Generation Status",
        "",
        f"**Operation:** `{operation.name}`",
        f"**Status:** {STATUS_LABELS[status]}",
    ]

    failure = operation.as_exception()
    if failure is not None:
        lines += [
            "",
            "## Error",
            f"- **Code:** {failure.code}",
            f"- **Message:** {failure.message}",
            "",
            f"*{operation_failed_error(failure).hint}*",
        ]

    if operation.video_uris:
        lines += ["", "## Generated Videos"]
        lines += [f"{idx}. {uri}" for idx, uri in enumerate(operation.video_uris, 1)]

    if status is OperationStatus.IN_PROGRESS:
        lines += ["", IN_PROGRESS_HINT]

    return "\n".join(lines)


def format_wait_outcome(
    outcome: WaitOutcome, timeout_seconds: int, response_format: ResponseFormat
) -> str:
    """Render the result of a wait call."""
    if outcome.timed_out:
        message = (
            f"Timed out after {timeout_seconds} seconds. The video may still be "
            "generating. Use veo_get_operation_status to check later."
        )
        if response_format is ResponseFormat.JSON:
            return to_json({**outcome.to_dict(), "message": message})
        return "\n".join(
            [
                "# Video Generation Timeout",
                "",
                f"**Operation:** `{outcome.operation.name}`",
                f"**Status:** ⏱️ Timed out after {timeout_seconds} seconds",
                f"**Polls:** {outcome.poll_count}",
                "",
                "*The video may still be generating. "
                "Use `veo_get_operation_status` to check later.*",
            ]
        )

    if response_format is ResponseFormat.JSON:
        return to_json(outcome.to_dict())

    return "\n".join(
        [
            format_operation_status(outcome.operation, response_format),
            "",
            f"*Finished after {outcome.poll_count} polls "
            f"({round(outcome.elapsed_seconds)} seconds).*",
        ]
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Model catalog
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def format_models(response_format: ResponseFormat) -> str:
    """Render the Veo model catalog."""
    if response_format is ResponseFormat.JSON:
        return to_json({"models": [model.to_dict() for model in VEO_MODELS]})

    lines = ["# Available Veo Models", ""]
    for model in VEO_MODELS:
        badge = "✅" if model.status == "stable" else "🔬"
        lines += [
            f"## {model.name} {badge}",
            f"**Model ID:** `{model.id}`",
            f"**Status:** {model.status}",
            "",
            model.description,
            "",
            "**Features:**",
            *(f"- {feature}" for feature in model.features),
            "",
            f"**Resolutions:** {', '.join(model.resolutions)}",
            f"**Durations:** {', '.join(str(d) for d in model.durations)} seconds",
            "",
        ]
    return "\n".join(lines)
