"""AsyncIOBus -- fans quote refreshes out to live listeners.

The refresher publishes `prices.updated` (or `prices.refresh_failed`) after
every cycle; each open `/events` stream holds one subscription for as long as
its client stays connected. Nothing is persisted: a listener that connects
late simply waits for the next refresh.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

from core.models.events import Event

logger = logging.getLogger(__name__)

Callback = Callable[[Event], Coroutine[Any, Any, None]]

WILDCARD = "*"


class AsyncIOBus:
    """In-process pub/sub keyed by event type. Implements the EventBus protocol.

    Usage:
        bus = AsyncIOBus()
        bus.subscribe(EventTypes.PRICES_UPDATED, push_to_stream)
        await bus.publish(Event(type=EventTypes.PRICES_UPDATED, source="refresher"))
        bus.unsubscribe(EventTypes.PRICES_UPDATED, push_to_stream)
    """

    def __init__(self) -> None:
        # WILDCARD is an ordinary key; publish() merges it into every dispatch
        self._listeners: dict[str, list[Callback]] = {}

    @property
    def name(self) -> str:
        return "asyncio_bus"

    async def publish(self, event: Event) -> None:
        """Deliver `event` to every listener of its type and every wildcard listener.

        Returns once all listeners have run. A listener that raises is logged
        and does not affect the others or the publisher, so a broken stream
        can never stall the refresh loop.
        """
        listeners = self._listeners.get(event.type, []) + self._listeners.get(WILDCARD, [])
        if not listeners:
            logger.debug("No listeners for %s from %s", event.type, event.source)
            return

        logger.debug("Delivering %s to %d listener(s)", event.type, len(listeners))
        await asyncio.gather(*(self._deliver(listener, event) for listener in listeners))

    def subscribe(self, event_type: str, callback: Callback) -> None:
        """Register `callback` for `event_type`, or for everything with "*"."""
        self._listeners.setdefault(event_type, []).append(callback)
        logger.debug("Listener added for '%s' (%d total)", event_type, self.subscriber_count(event_type))

    def unsubscribe(self, event_type: str, callback: Callback) -> None:
        """Drop a listener; unknown listeners are ignored so disconnect paths can always call this."""
        listeners = self._listeners.get(event_type)
        if listeners and callback in listeners:
            listeners.remove(callback)
            if not listeners:
                del self._listeners[event_type]

    def subscriber_count(self, event_type: str | None = None) -> int:
        """Number of listeners for one event type ("*" counts wildcards), or overall."""
        if event_type is None:
            return sum(len(listeners) for listeners in self._listeners.values())
        return len(self._listeners.get(event_type, []))

    @staticmethod
    async def _deliver(callback: Callback, event: Event) -> None:
        try:
            await callback(event)
        except Exception:
            logger.exception("Listener failed handling %s", event.type)
