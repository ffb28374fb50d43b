"""Export service.

Counts the items of the requested resource, plans the page offsets, and
downloads every block through the store's batch endpoint: submit, poll until
completed, collect. Blocks are processed strictly one after another.
"""

from services.store_export.BatchPoller import BatchPoller
from services.store_export.OffsetPlanner import OffsetPlanner
from shared.clients.store.StoreClientInterface import StoreClientInterface
from shared.clients.store.models.Batch import PageDescriptor
from shared.helper.HelperClock import HelperClock
from shared.helper.HelperConfig import HelperConfig
from shared.models.export import ExportSettings


class ExportService:
    """Orchestrates one export from the store into memory."""

    def __init__(
        self,
        helper_config: HelperConfig,
        settings: ExportSettings,
        store_client: StoreClientInterface,
        clock: HelperClock | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._settings = settings
        self._store_client = store_client
        self._clock = clock or HelperClock()
        self._planner = OffsetPlanner(
            page_size=settings.page_size,
            block_size=settings.block_size,
            exact_pages=settings.exact_pages,
        )
        self._poller = BatchPoller(
            helper_config=helper_config,
            store_client=store_client,
            poll_delay=settings.poll_delay,
            poll_timeout=settings.poll_timeout,
            clock=self._clock,
        )

    ##########################################
    ############### CORE EXPORT ##############
    ##########################################

    async def do_fetch_total(self) -> int:
        """Ask the store how many items the requested resource has. Not cached."""
        return await self._store_client.do_fetch_total(self._settings.resource)

    def build_block(self, offsets: list[int]) -> list[PageDescriptor]:
        """Turn the offsets of one block into batch sub-requests, keeping their order."""
        return [self._store_client.build_page_descriptor(self._settings.resource, offset) for offset in offsets]

    async def do_export(self) -> list[dict]:
        """Download all items of the requested resource.

        Returns:
            list[dict]: One completed batch response per block, highest offsets first.

        Raises:
            StoreRequestError: If any store request fails.
            BatchTimeoutError: If a batch does not complete in time. Results collected so far are dropped.
        """
        total = await self.do_fetch_total()
        start_offset = self._planner.get_start_offset(total)
        self.logging.info("Exporting %d '%s' items, starting at offset %d.", total, self._settings.resource, start_offset)

        results: list[dict] = []
        for block_no, offsets in enumerate(self._planner.iter_blocks(start_offset), start=1):
            pages = self.build_block(offsets)
            ticket = await self._store_client.do_submit_batch(pages)
            self.logging.info("Block %d: submitted offsets %d..%d (%d pages) as batch %s", block_no, offsets[0], offsets[-1], len(pages), ticket.ticket)

            batch_result = await self._poller.do_poll_until_complete(ticket)
            results.append(batch_result.payload)
            self.logging.info("Block %d: batch %s completed after %d poll(s).", block_no, ticket.ticket, self._poller.attempts)

        return results

    async def do_timed_export(self) -> list[dict]:
        """Run do_export() and log how long the download took, in minutes."""
        start = self._clock.now()
        results = await self.do_export()
        minutes = (self._clock.now() - start) / 60
        self.logging.info("Total downloading time: %s minutes", minutes)
        return results
