"""MCP server exposing Google's Veo video generation API as assistant tools."""

__version__ = "1.0.0"
