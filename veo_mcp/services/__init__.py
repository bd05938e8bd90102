"""Remote access layer: HTTP client and operation poller."""

from .operation_poller import OperationPoller, PollSession
from .veo_client import VeoClient

__all__ = ["OperationPoller", "PollSession", "VeoClient"]
