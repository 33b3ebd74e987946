"""Quote refresher -- asyncio loop that re-fetches spot quotes on a fixed interval.

Every `interval` seconds:
1. Asks the QuoteProvider for fresh quotes
2. Stores them as the latest snapshot
3. Publishes a prices.updated event on the bus
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from core.models.events import Event, EventTypes
from core.models.market import CurrentPrice
from core.protocols import EventBus, QuoteProvider

logger = logging.getLogger(__name__)


class QuoteRefresher:
    """Keeps a current snapshot of quotes and broadcasts each refresh.

    Usage:
        refresher = QuoteRefresher(provider=provider, bus=bus, interval=30)
        await refresher.start()  # runs until stop()
        refresher.latest["gold"].price
    """

    def __init__(
        self,
        provider: QuoteProvider,
        bus: EventBus,
        interval: float = 30.0,
    ) -> None:
        self._provider = provider
        self._bus = bus
        self._interval = interval
        self._running = False
        self._task: asyncio.Task | None = None
        self._latest: dict[str, CurrentPrice] = {}
        self._last_update: datetime | None = None
        self._refresh_count = 0

    @property
    def latest(self) -> dict[str, CurrentPrice]:
        """Most recent quotes keyed by metal; empty before the first refresh."""
        return dict(self._latest)

    @property
    def last_update(self) -> datetime | None:
        return self._last_update

    @property
    def refresh_count(self) -> int:
        return self._refresh_count

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the refresh loop."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("Quote refresher started (every %.0fs)", self._interval)

    async def stop(self) -> None:
        """Stop the refresh loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Quote refresher stopped")

    async def _loop(self) -> None:
        """Main refresh loop."""
        while self._running:
            try:
                await self.refresh_now()
            except Exception as exc:
                logger.exception("Error refreshing quotes")
                await self._bus.publish(Event(
                    type=EventTypes.REFRESH_FAILED,
                    source="refresher",
                    payload={"error": str(exc)},
                ))
            await asyncio.sleep(self._interval)

    async def refresh_now(self) -> dict[str, CurrentPrice]:
        """Fetch quotes once, store them and publish prices.updated."""
        quotes = await self._provider.fetch_current_prices()
        self._latest = dict(quotes)
        self._last_update = datetime.now(timezone.utc)
        self._refresh_count += 1

        await self._bus.publish(Event(
            type=EventTypes.PRICES_UPDATED,
            source="refresher",
            payload={m: q.model_dump(mode="json") for m, q in quotes.items()},
        ))
        logger.debug("Refreshed quotes (#%d)", self._refresh_count)
        return self.latest
