"""
Operation Poller - submit, fetch, and wait on long-running Veo operations.

Every status read is a fresh GET; nothing is cached between calls. A wait
call owns its PollSession for its whole duration and shares no state with
other wait calls, so concurrent waits on different operations are
independent.

Timing rules for wait():
- Fetches are strictly sequential.
- Consecutive fetches are at least poll_interval apart.
- The deadline is checked before every sleep. A sleep never runs past the
  deadline; if it reaches the deadline the wait returns a timeout outcome
  without issuing another fetch.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from veo_mcp.models.operations import (
    Operation,
    WaitOutcome,
    WaitStatus,
    classify_operation,
    normalize_operation_name,
)
from veo_mcp.services.veo_client import VeoClient

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class PollSession:
    """
    Caller-local bookkeeping for a single wait() call.

    Attributes:
        operation_name: Normalized operation name being polled
        poll_interval: Seconds between consecutive fetches
        timeout: Seconds before the wait gives up
        started_at: Clock reading when the wait began
        poll_count: Number of status fetches issued so far
    """

    operation_name: str
    poll_interval: float
    timeout: float
    started_at: float
    poll_count: int = 0

    @property
    def deadline(self) -> float:
        return self.started_at + self.timeout

    def elapsed(self, now: float) -> float:
        return now - self.started_at


class OperationPoller:
    """
    Drives the submit / fetch / wait workflow against a VeoClient.

    The clock and sleep callables are injectable so the wait loop can be
    exercised without real delays.
    """

    def __init__(
        self,
        client: VeoClient,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._clock = clock
        self._sleep = sleep

    async def submit(self, model: str, request: dict[str, Any]) -> str:
        """
        Submit a generation request.

        Args:
            model: Veo model ID
            request: predictLongRunning body, passed through unchanged

        Returns:
            Operation name assigned by the remote service

        Raises:
            TransportError: If the request fails
        """
        payload = await self._client.post(f"models/{model}:predictLongRunning", request)
        operation = Operation.from_api(payload)
        logger.info(f"Submitted generation on {model}: {operation.name}")
        return operation.name

    async def fetch_status(self, operation_name: str) -> Operation:
        """
        Fetch a fresh snapshot of an operation.

        Raises:
            TransportError: If the request fails
        """
        path = normalize_operation_name(operation_name)
        payload = await self._client.get(path)
        operation = Operation.from_api(payload)
        if not operation.name:
            operation = operation.model_copy(update={"name": path})
        return operation

    async def wait(
        self,
        operation_name: str,
        poll_interval: float,
        timeout: float,
    ) -> WaitOutcome:
        """
        Poll an operation until it is terminal or the timeout elapses.

        Args:
            operation_name: Bare token or fully qualified operation name
            poll_interval: Seconds between fetches (validated upstream, 5-60)
            timeout: Seconds before returning a timeout outcome (validated upstream, 30-600)

        Returns:
            WaitOutcome with status completed, failed, or timeout

        Raises:
            TransportError: If any fetch fails; polling is not retried
        """
        session = PollSession(
            operation_name=normalize_operation_name(operation_name),
            poll_interval=poll_interval,
            timeout=timeout,
            started_at=self._clock(),
        )

        while True:
            operation = await self.fetch_status(session.operation_name)
            session.poll_count += 1

            now = self._clock()
            if operation.is_terminal:
                status = WaitStatus(classify_operation(operation).value)
                logger.info(
                    f"Operation {operation.name} {status.value} after "
                    f"{session.poll_count} polls ({session.elapsed(now):.1f}s)"
                )
                return self._outcome(session, operation, status, now)

            if session.elapsed(now) >= session.timeout:
                return self._timed_out(session, operation, now)

            remaining = session.deadline - now
            delay = min(session.poll_interval, remaining)
            logger.debug(
                f"Operation {session.operation_name} in progress "
                f"(poll {session.poll_count}); next check in {delay:.1f}s"
            )
            await self._sleep(delay)

            if delay < session.poll_interval:
                return self._timed_out(session, operation, self._clock())

    def _timed_out(
        self, session: PollSession, operation: Operation, now: float
    ) -> WaitOutcome:
        logger.info(
            f"Timed out waiting for {session.operation_name} after "
            f"{session.poll_count} polls ({session.elapsed(now):.1f}s)"
        )
        return self._outcome(session, operation, WaitStatus.TIMED_OUT, now)

    @staticmethod
    def _outcome(
        session: PollSession, operation: Operation, status: WaitStatus, now: float
    ) -> WaitOutcome:
        return WaitOutcome(
            status=status,
            operation=operation,
            elapsed_seconds=session.elapsed(now),
            poll_count=session.poll_count,
        )
