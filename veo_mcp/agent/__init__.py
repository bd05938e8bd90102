"""
Veo Tools - Google Veo video generation tools for Claude Agent SDK.

Environment Variables:
    GEMINI_API_KEY: Required. Your Gemini API key with Veo access.
"""

from .server import veo_tools_server
from .veo_tool import (
    VEO_TOOLS,
    veo_generate_video,
    veo_generate_video_from_image,
    veo_get_operation_status,
    veo_list_models,
    veo_wait_for_video,
)

__all__ = [
    "VEO_TOOLS",
    "veo_generate_video",
    "veo_generate_video_from_image",
    "veo_get_operation_status",
    "veo_list_models",
    "veo_tools_server",
    "veo_wait_for_video",
]
