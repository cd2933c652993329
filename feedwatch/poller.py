"""
Feed Polling Scheduler.

Background task that periodically re-fetches all tracked feeds. The next round
is scheduled only after the previous one has settled, so rounds never overlap.
"""

import asyncio
import logging

from .fetcher import Fetcher
from .store import Store
from .tasks import refresh_all_feeds

logger = logging.getLogger(__name__)


class FeedPoller:
    """
    Background scheduler for feed polling.

    Waits `interval` seconds, refreshes every feed, and repeats until stopped.
    """

    def __init__(
        self,
        store: Store,
        fetcher: Fetcher,
        interval: float = 5.0,
        timeout: float | None = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.interval = interval
        self.timeout = timeout
        self.rounds = 0
        self._task: asyncio.Task | None = None
        self._running = False
        self._round_lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Start the polling scheduler."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        logger.info(f"Feed polling scheduler started (interval: {self.interval} seconds)")

    async def stop(self):
        """Stop the polling scheduler, cancelling the pending round."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("Feed polling scheduler stopped")

    async def poll_now(self) -> int:
        """Run a round immediately. Returns the number of posts merged."""
        logger.info("Triggering immediate feed poll")
        return await self._do_poll()

    async def _poll_loop(self):
        """Main polling loop."""
        while self._running:
            await asyncio.sleep(self.interval)
            await self._do_poll()

    async def _do_poll(self) -> int:
        """Perform a single poll round."""
        async with self._round_lock:
            try:
                merged = await refresh_all_feeds(self.store, self.fetcher, timeout=self.timeout)
            except Exception as e:
                logger.exception(f"Feed poll error: {e}")
                merged = 0
            self.rounds += 1

        if merged > 0:
            logger.info(f"Feed poll: merged {merged} new posts")
        else:
            logger.debug("Feed poll: no new posts")
        return merged
