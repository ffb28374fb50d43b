"""Polling of a submitted batch until the store reports it completed."""

from enum import Enum

from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.clients.store.models.Batch import BatchResult, BatchTicket
from shared.helper.HelperClock import HelperClock
from shared.helper.HelperConfig import HelperConfig

POLL_DELAY = 4.0        # seconds between two status requests
POLL_TIMEOUT = 300.0    # seconds a batch may stay pending


class PollState(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class BatchTimeoutError(Exception):
    """A batch did not complete within the polling window."""

    def __init__(self, ticket: str, elapsed: float, timeout: float):
        super().__init__(f"Waiting time exceeded for batch {ticket}: {elapsed:.1f}s > {timeout:.1f}s")
        self.ticket = ticket
        self.elapsed = elapsed
        self.timeout = timeout


class BatchPoller:
    """Polls one ticket at a time: PENDING until COMPLETED, or FAILED on timeout."""

    def __init__(
        self,
        helper_config: HelperConfig,
        store_client: StoreClientInterface,
        poll_delay: float = POLL_DELAY,
        poll_timeout: float = POLL_TIMEOUT,
        clock: HelperClock | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._store_client = store_client
        self.poll_delay = poll_delay
        self.poll_timeout = poll_timeout
        self._clock = clock or HelperClock()
        self.state: PollState | None = None
        self.attempts = 0

    def _next_state(self, result: BatchResult, elapsed: float) -> PollState:
        if result.is_completed():
            return PollState.COMPLETED
        if elapsed > self.poll_timeout:
            return PollState.FAILED
        return PollState.PENDING

    async def _poll(self, ticket: BatchTicket) -> BatchResult:
        self.attempts += 1
        result = await self._store_client.do_fetch_batch_status(ticket)
        self.logging.debug("Batch %s status after %d poll(s): %s", ticket.ticket, self.attempts, result.status)
        return result

    async def do_poll_until_complete(self, ticket: BatchTicket) -> BatchResult:
        """Poll ``ticket`` until the store reports it completed.

        The first poll happens immediately and starts the timeout window.
        There is no retry: a failed status request propagates.

        Args:
            ticket (BatchTicket): The ticket returned on submission.

        Returns:
            BatchResult: The completed batch.

        Raises:
            BatchTimeoutError: If the batch is still pending after the timeout.
            StoreRequestError: If a status request fails.
        """
        self.attempts = 0
        result = await self._poll(ticket)
        start = self._clock.now()
        self.state = self._next_state(result, elapsed=0.0)

        while self.state == PollState.PENDING:
            await self._clock.sleep(self.poll_delay)
            result = await self._poll(ticket)
            self.state = self._next_state(result, elapsed=self._clock.now() - start)

        if self.state == PollState.FAILED:
            elapsed = self._clock.now() - start
            self.logging.error("Batch %s still %s after %.1f seconds, giving up.", ticket.ticket, result.status, elapsed)
            raise BatchTimeoutError(ticket=ticket.ticket, elapsed=elapsed, timeout=self.poll_timeout)

        self.logging.debug("Batch %s completed after %d poll(s).", ticket.ticket, self.attempts)
        return result
