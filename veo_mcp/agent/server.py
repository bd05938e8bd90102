"""
MCP Server configuration for the Veo video generation tools.

This module provides a pre-configured MCP server that can be used
directly with the Claude Agent SDK, or served over stdio via
``python -m veo_mcp.main``.

Available tools:
    - veo_generate_video: Submit a text-to-video job
    - veo_generate_video_from_image: Submit an image-to-video job
    - veo_get_operation_status: Check a generation operation once
    - veo_wait_for_video: Poll an operation until done or timed out
    - veo_list_models: List the supported Veo models

Example usage:
    from claude_agent_sdk import ClaudeSDKClient, ClaudeAgentOptions
    from veo_mcp.agent import veo_tools_server

    options = ClaudeAgentOptions(
        mcp_servers={"veo": veo_tools_server},
        allowed_tools=[
            "mcp__veo__veo_generate_video",
            "mcp__veo__veo_wait_for_video",
        ],
    )

    async with ClaudeSDKClient(options) as client:
        await client.query("Generate a 4 second video of a red kite in a park")
        async for msg in client.receive_response():
            print(msg)
"""

from claude_agent_sdk import create_sdk_mcp_server

from veo_mcp import __version__

from .veo_tool import VEO_TOOLS

SERVER_NAME = "veo-mcp-server"

veo_tools_server = create_sdk_mcp_server(
    name=SERVER_NAME,
    version=__version__,
    tools=VEO_TOOLS,
)
