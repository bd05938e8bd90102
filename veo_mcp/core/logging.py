"""
Logging filters and configuration.

The MCP stdio transport owns stdout, so all log output goes to stderr.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

REDACTED = "***"


class ApiKeyRedactFilter(logging.Filter):
    """Scrub the Gemini API key from log records."""

    def __init__(self, api_key: str | None) -> None:
        super().__init__()
        self._api_key = api_key

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Replace any occurrence of the API key in the rendered message.

        Args:
            record: The log record to filter

        Returns:
            Always True; records are rewritten, never dropped
        """
        if not self._api_key:
            return True

        message = record.getMessage()
        if self._api_key in message:
            record.msg = message.replace(self._api_key, REDACTED)
            record.args = None
        return True


def configure_logging(level: str = "INFO", api_key: str | None = None) -> None:
    """
    Configure root logging for the server process.

    Args:
        level: Root log level name
        api_key: Secret to redact from every record, if known
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(ApiKeyRedactFilter(api_key))

    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )

    # httpx logs full request URLs at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
