"""
Input models for the Veo tools.

Defines Pydantic models that validate tool arguments before any remote
call, and the builder that turns them into the predictLongRunning body.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from veo_mcp.models.catalog import DEFAULT_MODEL_ID, get_model

# Poll bounds enforced before entering the poller (seconds)
MIN_POLL_INTERVAL = 5
MAX_POLL_INTERVAL = 60
MIN_WAIT_TIMEOUT = 30
MAX_WAIT_TIMEOUT = 600

MAX_PROMPT_LENGTH = 5000
MAX_NEGATIVE_PROMPT_LENGTH = 1000

DATA_URI_PATTERN = re.compile(r"^data:[^;]+;base64,(.+)$", re.DOTALL)

ModelId = Literal[
    "veo-3.1-generate-preview",
    "veo-3.1-fast-generate-preview",
    "veo-3.0-generate-001",
    "veo-3.0-fast-generate-001",
    "veo-2.0-generate-001",
]

DurationSeconds = Literal[4, 5, 6, 8]

ImageMimeType = Literal["image/png", "image/jpeg", "image/webp"]


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    MARKDOWN = "markdown"
    JSON = "json"


class AspectRatio(str, Enum):
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class Resolution(str, Enum):
    HD = "720p"
    FULL_HD = "1080p"


class PersonGeneration(str, Enum):
    ALLOW_ALL = "allow_all"
    ALLOW_ADULT = "allow_adult"
    DONT_ALLOW = "dont_allow"


class ToolInput(BaseModel):
    """Base for tool inputs: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class GenerateVideoInput(ToolInput):
    """Arguments for text-to-video generation."""

    prompt: str = Field(..., min_length=1, max_length=MAX_PROMPT_LENGTH)
    model: ModelId = DEFAULT_MODEL_ID
    negative_prompt: str | None = Field(
        default=None, max_length=MAX_NEGATIVE_PROMPT_LENGTH
    )
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    duration_seconds: DurationSeconds = 4
    resolution: Resolution | None = None
    person_generation: PersonGeneration = PersonGeneration.ALLOW_ALL

    @field_validator("prompt")
    @classmethod
    def validate_prompt_not_blank(cls, v: str) -> str:
        """Validate prompt is not just whitespace."""
        if not v.strip():
            raise ValueError("prompt cannot be empty or whitespace only")
        return v

    @model_validator(mode="after")
    def validate_model_combination(self) -> GenerateVideoInput:
        """Reject duration and resolution combinations the model cannot produce."""
        model = get_model(self.model)
        if model is None:
            return self

        if self.duration_seconds not in model.durations:
            allowed = ", ".join(str(d) for d in model.durations)
            raise ValueError(
                f"{model.name} supports durations of {allowed} seconds "
                f"(got {self.duration_seconds})"
            )

        if self.effective_resolution is Resolution.FULL_HD:
            if self.model.startswith("veo-3.1") and self.duration_seconds != 8:
                raise ValueError("Veo 3.1 requires an 8 second duration for 1080p")
            if (
                self.model.startswith("veo-3.0")
                and self.aspect_ratio is not AspectRatio.LANDSCAPE
            ):
                raise ValueError("Veo 3 supports 1080p only with a 16:9 aspect ratio")
        return self

    @property
    def effective_resolution(self) -> Resolution | None:
        """Resolution sent upstream: none without resolution control, else 720p default."""
        model = get_model(self.model)
        if model is not None and not model.supports_resolution:
            return None
        return self.resolution or Resolution.HD

    def build_parameters(self) -> dict[str, Any]:
        parameters: dict[str, Any] = {
            "aspectRatio": self.aspect_ratio.value,
            "durationSeconds": self.duration_seconds,
            "personGeneration": self.person_generation.value,
        }
        if self.effective_resolution:
            parameters["resolution"] = self.effective_resolution.value
        if self.negative_prompt:
            parameters["negativePrompt"] = self.negative_prompt
        return parameters

    def build_instance(self) -> dict[str, Any]:
        return {"prompt": self.prompt}

    def build_request(self) -> dict[str, Any]:
        """Build the predictLongRunning request body."""
        return {
            "instances": [self.build_instance()],
            "parameters": self.build_parameters(),
        }


class GenerateVideoFromImageInput(GenerateVideoInput):
    """Arguments for image-to-video generation (image is the first frame)."""

    image_base64: str = Field(..., min_length=1)
    image_mime_type: ImageMimeType = "image/png"
    person_generation: PersonGeneration = PersonGeneration.ALLOW_ADULT

    @field_validator("image_base64")
    @classmethod
    def strip_data_uri(cls, v: str) -> str:
        """Accept data URIs by dropping the "data:<mime>;base64," prefix."""
        match = DATA_URI_PATTERN.match(v)
        if match:
            return match.group(1)
        return v

    def build_instance(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "image": {
                "bytesBase64Encoded": self.image_base64,
                "mimeType": self.image_mime_type,
            },
        }


class GetOperationStatusInput(ToolInput):
    """Arguments for a single status check."""

    operation_name: str = Field(..., min_length=1)

    @field_validator("operation_name")
    @classmethod
    def validate_operation_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("operation_name cannot be empty or whitespace only")
        return v.strip()


class WaitForVideoInput(GetOperationStatusInput):
    """Arguments for polling an operation until it finishes or times out."""

    poll_interval_seconds: int = Field(
        default=10, ge=MIN_POLL_INTERVAL, le=MAX_POLL_INTERVAL
    )
    timeout_seconds: int = Field(default=300, ge=MIN_WAIT_TIMEOUT, le=MAX_WAIT_TIMEOUT)


class ListModelsInput(ToolInput):
    """Arguments for listing models."""
