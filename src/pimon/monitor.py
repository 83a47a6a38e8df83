"""Polling engine for pimon."""

import asyncio
import logging

from pimon.client import PollError, TelemetryClient
from pimon.models import PollState

logger = logging.getLogger(__name__)


class TelemetryMonitor:
    """
    Periodically polls a remote host and owns the resulting PollState.

    Runs as a single asyncio task: one poll immediately on start, then one
    every ``poll_rate`` seconds. Each new state is pushed to an asyncio
    Queue for the UI to consume. The monitor is the only writer of the state.
    """

    def __init__(
        self,
        update_queue: asyncio.Queue[PollState],
        client: TelemetryClient,
        poll_rate: float = 5.0,
    ) -> None:
        """
        Initialize the TelemetryMonitor.

        Args:
            update_queue: Queue that receives every new PollState.
            client: Client used to reach the remote host.
            poll_rate: How often to poll the remote host (in seconds). Default 5.0s.
        """
        self._queue = update_queue
        self._client = client
        self._poll_rate = poll_rate
        self._state = PollState()
        self._task: asyncio.Task[None] | None = None

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    @poll_rate.setter
    def poll_rate(self, value: float) -> None:
        """Set the poll rate."""
        self._poll_rate = max(0.1, value)  # Minimum 0.1 seconds

    @property
    def state(self) -> PollState:
        """Latest known state."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Check if the polling task is running."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the polling task. Must be called from a running event loop."""
        if self.is_running:
            return

        self._task = asyncio.create_task(self._poll_loop(), name="TelemetryMonitor")

    def stop(self) -> None:
        """Cancel the polling task, discarding any poll still in flight."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def restart(self) -> None:
        """Restart the schedule so the next poll happens immediately."""
        self.stop()
        self.start()

    async def close(self) -> None:
        """Stop polling and release the client."""
        self.stop()
        await self._client.aclose()

    async def poll_once(self) -> PollState:
        """
        Poll the remote host once and publish the resulting state.

        On success snapshot and processes are replaced together and the error
        is cleared. On failure only the error is set.
        """
        try:
            snapshot, processes = await self._client.fetch()
        except PollError as exc:
            logger.warning("Poll of %s failed: %s", self._client.base_url, exc)
            self._state = self._state.failed(str(exc))
        else:
            logger.debug(
                "Poll of %s succeeded: %d processes", self._client.base_url, len(processes)
            )
            self._state = self._state.succeeded(snapshot, processes)

        self._queue.put_nowait(self._state)
        return self._state

    async def _poll_loop(self) -> None:
        """Main polling loop running as a background task."""
        loop = asyncio.get_running_loop()
        while True:
            started = loop.time()
            try:
                await self.poll_once()
            except Exception:
                # Keep the schedule alive on unexpected errors
                logger.exception("Unexpected error while polling %s", self._client.base_url)

            # Fixed period measured from the start of each poll
            await asyncio.sleep(max(0.0, self._poll_rate - (loop.time() - started)))
