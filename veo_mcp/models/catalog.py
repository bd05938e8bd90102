"""Metadata for the Veo models exposed by the server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_MODEL_ID = "veo-3.0-generate-001"


@dataclass(frozen=True)
class VeoModel:
    """Static description of one Veo model."""

    id: str
    name: str
    status: str  # "stable" or "preview"
    description: str
    features: tuple[str, ...]
    resolutions: tuple[str, ...]
    durations: tuple[int, ...]
    supports_resolution: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "description": self.description,
            "features": list(self.features),
            "resolutions": list(self.resolutions),
            "durations": list(self.durations),
        }


_VEO_3_FEATURES = (
    "text-to-video",
    "image-to-video",
    "video-extension",
    "interpolation",
    "reference-images",
    "audio",
)

VEO_MODELS: tuple[VeoModel, ...] = (
    VeoModel(
        id="veo-3.1-generate-preview",
        name="Veo 3.1",
        status="preview",
        description="Latest Veo model with 720p/1080p, extension, interpolation, "
        "and reference images",
        features=_VEO_3_FEATURES,
        resolutions=("720p", "1080p"),
        durations=(4, 6, 8),
        supports_resolution=True,
    ),
    VeoModel(
        id="veo-3.1-fast-generate-preview",
        name="Veo 3.1 Fast",
        status="preview",
        description="Speed-optimized variant of Veo 3.1 with all features",
        features=_VEO_3_FEATURES,
        resolutions=("720p", "1080p"),
        durations=(4, 6, 8),
        supports_resolution=True,
    ),
    VeoModel(
        id="veo-3.0-generate-001",
        name="Veo 3",
        status="stable",
        description="Stable Veo model with audio (1080p only with 16:9)",
        features=("text-to-video", "image-to-video", "audio"),
        resolutions=("720p", "1080p"),
        durations=(4, 6, 8),
        supports_resolution=True,
    ),
    VeoModel(
        id="veo-3.0-fast-generate-001",
        name="Veo 3 Fast",
        status="stable",
        description="Speed-optimized variant of Veo 3",
        features=("text-to-video", "image-to-video", "audio"),
        resolutions=("720p", "1080p"),
        durations=(4, 6, 8),
        supports_resolution=True,
    ),
    VeoModel(
        id="veo-2.0-generate-001",
        name="Veo 2",
        status="stable",
        description="Silent video generation (no audio, no resolution control)",
        features=("text-to-video", "image-to-video"),
        resolutions=("720p",),
        durations=(5, 6, 8),
        supports_resolution=False,
    ),
)


def get_model(model_id: str) -> VeoModel | None:
    """Look up a model by ID."""
    for model in VEO_MODELS:
        if model.id == model_id:
            return model
    return None
